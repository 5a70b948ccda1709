import os

from ptpython.entry_points.run_ptpython import get_config_and_history_file
from ptpython.repl import PythonRepl, embed, run_config

import tinychain.consensus
import tinychain.datatypes
import tinychain.explorer
import tinychain.hash
import tinychain.humans
from tinychain.chain import CapacityExceeded, Chain
from tinychain.scripts.utils import (
    configure_logging_from_args,
    create_chain_from_args,
    DefaultArgumentParser,
)
from .version import __version__


class EverythingIsNone:
    def __getattr__(self, attr: str) -> None:
        return None


def main() -> None:
    config_file, history_file = get_config_and_history_file(EverythingIsNone())

    parser = DefaultArgumentParser()
    parser.add_argument("--vi-mode", help="Vi mode", action="store_true")
    args = parser.parse_args()
    configure_logging_from_args(args)

    chain = create_chain_from_args(args)
    print(chain)
    print("Starting REPL, exit with exit()")

    globals = {
        'chain': chain,
        'Chain': Chain,
        'CapacityExceeded': CapacityExceeded,
    }

    for module in [
            tinychain.consensus, tinychain.datatypes, tinychain.explorer, tinychain.hash, tinychain.humans]:
        for attr in module.__all__:  # type: ignore
            globals[attr] = getattr(module, attr)

    def configure(repl: PythonRepl) -> None:
        if os.path.exists(config_file):
            run_config(repl, config_file)
        else:
            repl.confirm_exit = False

        repl.title = "tinychain %s " % __version__

    embed(
        vi_mode=args.vi_mode,
        globals=globals,
        configure=configure,
        history_filename=history_file,
        patch_stdout=True,
    )
