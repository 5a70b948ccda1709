"""
Tools to display identifiers to humans (and to turn them back into numbers).

An identifier is the 32-bit digest accumulator written as 8 hex digits. We write it least significant nibble first:
digit d of the string is (value >> 4*d) & 0xF. This is backwards compared to how you'd normally print a number, but it
is what the very first implementation did, and by now every identifier ever produced depends on it.
"""
from .params import DIGEST_MASK, HEX_ALPHABET, IDENTIFIER_LENGTH


def human(value: int) -> str:
    value &= DIGEST_MASK
    return "".join(HEX_ALPHABET[(value >> (4 * d)) & 0xF] for d in range(IDENTIFIER_LENGTH))


def computer(identifier: str) -> int:
    if not is_identifier(identifier):
        raise ValueError("Not an identifier: %r" % (identifier,))

    return sum(HEX_ALPHABET.index(c) << (4 * d) for d, c in enumerate(identifier))


def is_identifier(s: object) -> bool:
    return isinstance(s, str) and len(s) == IDENTIFIER_LENGTH and all(c in HEX_ALPHABET for c in s)


__all__ = [
    'human',
    'computer',
    'is_identifier',
]
