from __future__ import annotations

import logging
import threading
from typing import BinaryIO, Iterable, Iterator, List, Optional, Tuple

import immutables

from .consensus import ValidationResult, check_blocks, construct_block, construct_genesis_block
from .datatypes import Block
from .serialization import Serializable, stream_deserialize_list, stream_serialize_list

logger = logging.getLogger("tinychain.chain")


class CapacityExceeded(Exception):

    def __init__(self, max_length: int):
        super().__init__("Chain is full (max_length=%d)" % max_length)
        self.max_length = max_length


def check_max_length(max_length: Optional[int], length: int) -> None:
    if max_length is None:
        return

    if max_length < 1:
        raise ValueError("max_length must be at least 1 (room for the genesis block), got %d" % max_length)

    if length > max_length:
        raise ValueError("Cannot hold %d blocks with max_length=%d" % (length, max_length))


class Chain(Serializable):
    """Ordered, append-only sequence of Blocks, starting at a genesis block.

    Blocks are only ever added at the tail; nothing is modified or removed. Appends and snapshots (`blocks`,
    `validate`) share one lock: an append reads the tail and writes the new block without another append or a
    snapshot in between."""

    def __init__(self, max_length: Optional[int] = None) -> None:
        check_max_length(max_length, 1)

        self.lock = threading.Lock()
        self.max_length = max_length

        self._blocks: List[Block] = []

        # identifier -> lowest position holding it. Identifiers can collide (the digest is not cryptographic), so the
        # first one wins.
        self._index: immutables.Map[str, int] = immutables.Map()

        self._push(construct_genesis_block())

    @classmethod
    def initialize(cls, max_length: Optional[int] = None) -> Chain:
        return cls(max_length)

    @classmethod
    def load(cls, blocks: Iterable[Block], max_length: Optional[int] = None) -> Chain:
        """Build a chain from block records that come from somewhere else (a byte stream, a test, a broken disk).

        No validation is done here; that is what validate() is for."""
        blocks = list(blocks)
        if not blocks:
            raise ValueError("Cannot load a chain without a genesis block")

        check_max_length(max_length, len(blocks))

        chain = cls.__new__(cls)
        chain.lock = threading.Lock()
        chain.max_length = max_length
        chain._blocks = []
        chain._index = immutables.Map()

        for block in blocks:
            chain._push(block)

        return chain

    def _push(self, block: Block) -> None:
        if block.identifier not in self._index:
            self._index = self._index.set(block.identifier, len(self._blocks))
        self._blocks.append(block)

    def __repr__(self) -> str:
        return "Chain @ %s (h. %d)" % (self._blocks[-1].identifier, len(self._blocks) - 1)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __getitem__(self, position: int) -> Block:
        return self._blocks[position]

    @property
    def blocks(self) -> Tuple[Block, ...]:
        with self.lock:
            return tuple(self._blocks)

    def head(self) -> Block:
        return self._blocks[-1]

    def genesis(self) -> Block:
        return self._blocks[0]

    def is_full(self) -> bool:
        return self.max_length is not None and len(self._blocks) >= self.max_length

    def append(self, content: str) -> Block:
        with self.lock:
            if self.is_full():
                raise CapacityExceeded(self.max_length)  # type: ignore

            block = construct_block(self._blocks[-1], content)
            height = len(self._blocks)
            self._push(block)

        logger.debug("Chain.append() h. %d %s -> %s" % (height, block.previous_identifier, block.identifier))
        return block

    def validate(self) -> ValidationResult:
        result = check_blocks(self.blocks)

        if not result:
            logger.warning("Chain.validate(): %s" % result.error)

        return result

    def index_of(self, identifier: str) -> int:
        try:
            return self._index[identifier]
        except KeyError:
            raise KeyError("Identifier not found: %s" % identifier)

    def block_by_identifier(self, identifier: str) -> Block:
        return self._blocks[self.index_of(identifier)]

    @classmethod
    def stream_deserialize(cls, f: BinaryIO) -> Chain:
        return cls.load(stream_deserialize_list(f, Block))

    def stream_serialize(self, f: BinaryIO) -> None:
        stream_serialize_list(f, self.blocks)
