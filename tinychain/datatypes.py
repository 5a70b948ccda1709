from __future__ import annotations

from typing import Any, BinaryIO, NoReturn, Tuple

from .hash import digest
from .humans import is_identifier
from .serialization import (
    Serializable,
    stream_deserialize_identifier,
    stream_deserialize_text,
    stream_serialize_identifier,
    stream_serialize_text,
)


class Block(Serializable):
    """A single record in the chain: content, a link to the predecessor, and an identifier derived from both.

    Blocks are immutable. Note that this constructor takes the identifier as given rather than computing it; that is
    what storage and deserialization need. Use `create_block` to make new blocks."""

    __slots__ = ('content', 'previous_identifier', 'identifier')

    content: str
    previous_identifier: str
    identifier: str

    def __init__(self, content: str, previous_identifier: str, identifier: str):
        if not isinstance(content, str):
            raise ValueError("Block content must be text, not %s" % type(content).__name__)

        if not is_identifier(previous_identifier):
            raise ValueError("Block previous_identifier %r is not an identifier." % (previous_identifier,))

        if not is_identifier(identifier):
            raise ValueError("Block identifier %r is not an identifier." % (identifier,))

        object.__setattr__(self, 'content', content)
        object.__setattr__(self, 'previous_identifier', previous_identifier)
        object.__setattr__(self, 'identifier', identifier)

    def __setattr__(self, attr: str, value: Any) -> NoReturn:
        raise AttributeError("'Block' object is immutable; cannot set '%s'" % attr)

    def __delattr__(self, attr: str) -> NoReturn:
        raise AttributeError("'Block' object is immutable; cannot delete '%s'" % attr)

    def __reduce__(self) -> Tuple[Any, Tuple[str, str, str]]:
        return (Block, (self.content, self.previous_identifier, self.identifier))

    def __repr__(self) -> str:
        return "Block #%s" % self.identifier

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Block) and
            self.content == other.content and
            self.previous_identifier == other.previous_identifier and
            self.identifier == other.identifier
        )

    def __hash__(self) -> int:
        return hash((self.content, self.previous_identifier, self.identifier))

    @classmethod
    def stream_deserialize(cls, f: BinaryIO) -> Block:
        content = stream_deserialize_text(f)
        previous_identifier = stream_deserialize_identifier(f)
        identifier = stream_deserialize_identifier(f)
        return cls(content, previous_identifier, identifier)

    def stream_serialize(self, f: BinaryIO) -> None:
        stream_serialize_text(f, self.content)
        stream_serialize_identifier(f, self.previous_identifier)
        stream_serialize_identifier(f, self.identifier)

    def recompute_identifier(self) -> str:
        return calc_identifier(self.content, self.previous_identifier)

    def is_intact(self) -> bool:
        return self.identifier == self.recompute_identifier()


def calc_identifier(content: str, previous_identifier: str) -> str:
    # content first, then the predecessor; swapping these would silently produce a different (incompatible) chain.
    return digest(content + previous_identifier)


def create_block(content: str, previous_identifier: str) -> Block:
    return Block(content, previous_identifier, calc_identifier(content, previous_identifier))


__all__ = [
    'Block',
    'calc_identifier',
    'create_block',
]
