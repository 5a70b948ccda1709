from typing import List, Optional

from tinychain.chain import Chain
from tinychain.explorer import describe_result, render_chain

from .utils import (
    configure_logging_from_args,
    create_chain_from_args,
    DefaultArgumentParser,
)


def ask(prompt: str) -> Optional[str]:
    try:
        return input(prompt)
    except EOFError:
        return None


def prompt_for_blocks(chain: Chain) -> int:
    """Keep asking the operator for block contents until they say no (or the chain is full). Returns #blocks added."""
    added = 0

    while not chain.is_full():
        content = ask("\nEnter data for block %d: " % len(chain))
        if content is None:
            break

        chain.append(content)
        added += 1

        if chain.is_full():
            print("Maximum of %d blocks reached." % chain.max_length)  # type: ignore
            break

        answer = ask("Add another block? (y/n): ")
        if answer is None or answer.strip() != "y":
            break

    return added


def main(argv: Optional[List[str]] = None) -> None:
    parser = DefaultArgumentParser(description="Build a chain of blocks interactively, then print it.")
    args = parser.parse_args(argv)
    configure_logging_from_args(args)

    chain = create_chain_from_args(args)
    prompt_for_blocks(chain)

    print()
    print(render_chain(chain.blocks))
    print(describe_result(chain.validate()))
