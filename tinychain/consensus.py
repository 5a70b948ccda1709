from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .datatypes import Block, create_block
from .params import GENESIS_CONTENT, SENTINEL_IDENTIFIER


# ## Section: Construction of new Blocks

def construct_genesis_block() -> Block:
    # no timestamps, no randomness: every fresh chain starts with the exact same block.
    return create_block(GENESIS_CONTENT, SENTINEL_IDENTIFIER)


def construct_block(previous_block: Block, content: str) -> Block:
    return create_block(content, previous_block.identifier)


# ## Section: Validation

class ViolationKind(Enum):
    LINKAGE = "linkage"
    CONTENT_TAMPER = "content-tamper"
    GENESIS_MALFORMED = "genesis-malformed"


class ValidationError(Exception):
    kind: ViolationKind

    def __init__(self, index: int, message: str):
        super().__init__(message)
        self.index = index

    def __repr__(self) -> str:
        return "%s(index=%d, %r)" % (self.__class__.__name__, self.index, str(self))


class LinkageViolation(ValidationError):
    kind = ViolationKind.LINKAGE


class ContentTamperViolation(ValidationError):
    kind = ViolationKind.CONTENT_TAMPER


class GenesisMalformed(ValidationError):
    kind = ViolationKind.GENESIS_MALFORMED


def validate_block_content(block: Block, index: int) -> None:
    """The stored identifier must still be the digest of the stored content and link."""
    recomputed = block.recompute_identifier()
    if block.identifier != recomputed:
        raise ContentTamperViolation(index, "Block %d identifier %s does not match its contents (expected %s)" % (
            index, block.identifier, recomputed))


def validate_genesis_block(block: Block) -> None:
    if block.previous_identifier != SENTINEL_IDENTIFIER:
        raise GenesisMalformed(0, "Genesis block links to %s instead of %s" % (
            block.previous_identifier, SENTINEL_IDENTIFIER))

    validate_block_content(block, 0)


def validate_linkage(block: Block, previous_block: Block, index: int) -> None:
    if block.previous_identifier != previous_block.identifier:
        raise LinkageViolation(index, "Block %d links to %s but block %d is %s" % (
            index, block.previous_identifier, index - 1, previous_block.identifier))


def validate_block_in_chain(block: Block, previous_block: Block, index: int) -> None:
    # Linkage goes first: a block whose link was overwritten will also fail the content check, but "it points at the
    # wrong predecessor" is the more useful thing to report.
    validate_linkage(block, previous_block, index)
    validate_block_content(block, index)


def validate_blocks(blocks: Sequence[Block]) -> None:
    """Walk the chain once, genesis to head, raising the first ValidationError found."""
    if len(blocks) == 0:
        raise GenesisMalformed(0, "Chain has no genesis block")

    validate_genesis_block(blocks[0])

    for index in range(1, len(blocks)):
        validate_block_in_chain(blocks[index], blocks[index - 1], index)


class ValidationResult:

    def __init__(self, error: Optional[ValidationError] = None):
        self.error = error

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ViolationKind]:
        return None if self.error is None else self.error.kind

    @property
    def index(self) -> Optional[int]:
        return None if self.error is None else self.error.index

    def __bool__(self) -> bool:
        return self.is_valid

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ValidationResult) and
            self.kind == other.kind and
            self.index == other.index
        )

    def __repr__(self) -> str:
        if self.error is None:
            return "ValidationResult(valid)"
        return "ValidationResult(%s at %d)" % (self.error.kind.value, self.error.index)

    def raise_for_violation(self) -> None:
        if self.error is not None:
            raise self.error


def check_blocks(blocks: Sequence[Block]) -> ValidationResult:
    try:
        validate_blocks(blocks)
    except ValidationError as e:
        return ValidationResult(e)

    return ValidationResult()


__all__ = [
    'construct_genesis_block',
    'construct_block',
    'ViolationKind',
    'ValidationError',
    'LinkageViolation',
    'ContentTamperViolation',
    'GenesisMalformed',
    'validate_block_content',
    'validate_genesis_block',
    'validate_linkage',
    'validate_block_in_chain',
    'validate_blocks',
    'ValidationResult',
    'check_blocks',
]
