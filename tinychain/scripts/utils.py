import argparse
import logging
import sys
import tempfile
from pathlib import Path
from time import time
from typing import Any, Optional

from tinychain.chain import Chain
from tinychain.params import MAX_BLOCKS


def non_negative_int(value: str) -> int:
    i = int(value)
    if i < 0:
        raise argparse.ArgumentTypeError("%d is negative" % i)
    return i


class DefaultArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.add_argument("--max-blocks", help="Maximum chain length, genesis included (0: no limit)",
                          type=non_negative_int, default=MAX_BLOCKS)
        self.add_argument("--log-to-file", help="Log to file", action="store_true")
        self.add_argument("--log-to-stdout", help="Log to stdout", action="store_true")


def max_length_from_args(args: Any) -> Optional[int]:
    return args.max_blocks or None


def create_chain_from_args(args: Any) -> Chain:
    return Chain.initialize(max_length=max_length_from_args(args))


def configure_logging_for_file() -> None:
    log_filename = Path(tempfile.gettempdir()) / ("tinychain-%s.log" % int(time()))
    print('Logging to file: %s' % log_filename)
    FORMAT = '%(asctime)s %(message)s'
    logging.basicConfig(format=FORMAT, filename=str(log_filename), level=logging.DEBUG)


def configure_logging_for_stdout() -> None:
    FORMAT = "%(asctime)s %(message)s"
    logging.basicConfig(format=FORMAT, stream=sys.stdout, level=logging.DEBUG)


def configure_logging_from_args(args: Any) -> None:
    if args.log_to_file:
        configure_logging_for_file()

    if args.log_to_stdout:
        configure_logging_for_stdout()
