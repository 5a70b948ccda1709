from __future__ import annotations

import struct
from io import BytesIO
from typing import Any, BinaryIO, List, Sequence, Type

from .humans import is_identifier
from .params import IDENTIFIER_LENGTH


class SerializationError(Exception):
    pass


class SerializationTruncationError(SerializationError):
    pass


class DeserializationError(SerializationError):
    pass


class Serializable:
    def serialize(self) -> bytes:
        f = BytesIO()
        self.stream_serialize(f)
        return f.getvalue()

    @classmethod
    def deserialize(cls, bytes_: bytes) -> Any:
        f = BytesIO(bytes_)
        result = cls.stream_deserialize(f)

        if f.read(1):
            raise DeserializationError("Trailing bytes after %s" % cls.__name__)

        return result

    def stream_serialize(self, f: BinaryIO) -> None:
        raise NotImplementedError

    @classmethod
    def stream_deserialize(cls, f: BinaryIO) -> Any:
        raise NotImplementedError


def safe_read(f: BinaryIO, n: int) -> bytes:
    r: bytes = f.read(n)

    if len(r) < n:
        raise SerializationTruncationError('Requested %i bytes but got %i' % (n, len(r)))

    return r


def stream_serialize_vlq(f: BinaryIO, i: int) -> None:
    """Variable-length quantity: 7 bits per octet, most significant group first, high bit set on all but the last
    octet. See https://en.wikipedia.org/wiki/Variable-length_quantity"""
    if i < 0:
        raise SerializationError("VLQ cannot encode negative number %d" % i)

    groups = [i & 0x7f]
    i >>= 7
    while i:
        groups.append(0x80 | (i & 0x7f))
        i >>= 7

    f.write(bytes(reversed(groups)))


def stream_deserialize_vlq(f: BinaryIO) -> int:
    result = 0

    while True:
        (b,) = struct.unpack(b"B", safe_read(f, 1))
        result = (result << 7) | (b & 0x7f)

        if b < 0x80:
            return result


def stream_serialize_text(f: BinaryIO, s: str) -> None:
    encoded = s.encode("utf-8")
    stream_serialize_vlq(f, len(encoded))
    f.write(encoded)


def stream_deserialize_text(f: BinaryIO) -> str:
    length = stream_deserialize_vlq(f)
    try:
        return safe_read(f, length).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DeserializationError("Text is not valid UTF-8") from e


def stream_serialize_identifier(f: BinaryIO, identifier: str) -> None:
    # identifiers go on the wire as their 8 ASCII hex digits, not as the 4 bytes they encode.
    if not is_identifier(identifier):
        raise SerializationError("Not an identifier: %r" % (identifier,))
    f.write(identifier.encode("ascii"))


def stream_deserialize_identifier(f: BinaryIO) -> str:
    raw = safe_read(f, IDENTIFIER_LENGTH)
    identifier = raw.decode("ascii", errors="replace")

    if not is_identifier(identifier):
        raise DeserializationError("Not an identifier: %r" % (raw,))

    return identifier


def stream_serialize_list(f: BinaryIO, lst: Sequence[Serializable]) -> None:
    stream_serialize_vlq(f, len(lst))
    for elem in lst:
        elem.stream_serialize(f)


def stream_deserialize_list(f: BinaryIO, clz: Type) -> List[Any]:
    length = stream_deserialize_vlq(f)
    return [clz.stream_deserialize(f) for _ in range(length)]
