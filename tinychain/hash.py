from typing import Union

from .humans import human
from .params import DIGEST_MASK


def weighted_sum(b: bytes) -> int:
    # Each byte is weighted by its 1-based position, which is the whole trick that makes "ab" and "ba" differ. The
    # accumulator wraps at 32 bits after every step; results must not depend on the host's idea of an int.
    accumulator = 0
    for position, value in enumerate(b, start=1):
        accumulator = (accumulator + value * position) & DIGEST_MASK
    return accumulator


def digest(data: Union[str, bytes]) -> str:
    """Map text (UTF-8 encoded) or raw bytes to an 8-digit identifier.

    Deterministic and order sensitive, but NOT a cryptographic hash: collisions are trivial to construct."""
    if isinstance(data, str):
        data = data.encode("utf-8")

    return human(weighted_sum(data))


__all__ = [
    'digest',
    'weighted_sum',
]
