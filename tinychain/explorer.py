from typing import Iterable

from .consensus import ValidationResult
from .datatypes import Block


def render_block(position: int, block: Block) -> str:
    return (
        "Block %d:\n"
        "  Data      : %s\n"
        "  Prev Hash : %s\n"
        "  Hash      : %s\n" % (position, block.content, block.previous_identifier, block.identifier)
    )


def render_chain(blocks: Iterable[Block]) -> str:
    return "=== Blockchain ===\n" + "\n".join(render_block(i, block) for i, block in enumerate(blocks))


def describe_result(result: ValidationResult) -> str:
    if result.is_valid:
        return "Chain is valid."

    return "Chain is INVALID: %s" % result.error


__all__ = [
    'render_block',
    'render_chain',
    'describe_result',
]
