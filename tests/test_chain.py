import logging
import threading

import pytest

from tinychain.chain import CapacityExceeded, Chain
from tinychain.consensus import ViolationKind
from tinychain.datatypes import Block
from tinychain.hash import digest


def test_initialize():
    chain = Chain.initialize()

    assert len(chain) == 1
    genesis = chain[0]
    assert genesis.content == "Genesis Block"
    assert genesis.previous_identifier == "00000000"
    assert genesis.identifier == digest("Genesis Block00000000")
    assert chain.genesis() == chain.head() == genesis


def test_fresh_chains_are_identical():
    assert Chain().blocks == Chain().blocks


def test_concrete_scenario():
    chain = Chain.initialize()
    genesis = chain.genesis()

    block = chain.append("Hello")

    assert len(chain) == 2
    assert chain[1] == block == chain.head()
    assert block.previous_identifier == genesis.identifier
    assert block.identifier == digest("Hello" + genesis.identifier)
    assert block.identifier == "AB510000"
    assert chain.validate().is_valid


def test_chain_growth():
    for n in [0, 1, 2, 17]:
        chain = Chain.initialize()
        for i in range(n):
            chain.append("block %d" % i)

        assert len(chain) == n + 1
        assert chain.validate()


def test_append_empty_content():
    chain = Chain.initialize()
    block = chain.append("")

    assert block.content == ""
    assert block.identifier == digest("" + chain.genesis().identifier)
    assert chain.validate()


def _tamper_content(chain, i):
    blocks = list(chain.blocks)
    original = blocks[i]
    blocks[i] = Block(original.content + "!", original.previous_identifier, original.identifier)
    return Chain.load(blocks)


def _tamper_link(chain, i):
    blocks = list(chain.blocks)
    original = blocks[i]
    blocks[i] = Block(original.content, "DEADBEEF", original.identifier)
    return Chain.load(blocks)


def _example_chain(n):
    chain = Chain.initialize()
    for i in range(n):
        chain.append("payload %d" % i)
    return chain


def test_tamper_detection():
    chain = _example_chain(4)

    for i in range(1, len(chain)):
        result = _tamper_content(chain, i).validate()
        assert result.kind == ViolationKind.CONTENT_TAMPER
        assert result.index == i

    # the original was never touched
    assert chain.validate()


def test_linkage_detection():
    chain = _example_chain(4)

    for i in range(1, len(chain)):
        result = _tamper_link(chain, i).validate()
        assert result.kind == ViolationKind.LINKAGE
        assert result.index == i


def test_genesis_malformed_detection():
    chain = _example_chain(2)
    result = _tamper_link(chain, 0).validate()

    assert result.kind == ViolationKind.GENESIS_MALFORMED
    assert result.index == 0


def test_validate_logs_violations(caplog):
    caplog.set_level(logging.WARNING, logger="tinychain.chain")

    _tamper_content(_example_chain(2), 1).validate()

    assert "does not match its contents" in caplog.text


def test_load_requires_genesis():
    with pytest.raises(ValueError):
        Chain.load([])


def test_capacity():
    chain = Chain.initialize(max_length=3)
    chain.append("one")
    chain.append("two")

    assert chain.is_full()

    with pytest.raises(CapacityExceeded) as e:
        chain.append("three")

    assert e.value.max_length == 3
    assert len(chain) == 3
    assert chain.head().content == "two"
    assert chain.validate()


def test_capacity_of_one_is_genesis_only():
    chain = Chain(max_length=1)

    assert chain.is_full()
    with pytest.raises(CapacityExceeded):
        chain.append("anything")


def test_no_capacity_by_default():
    chain = _example_chain(50)

    assert not chain.is_full()
    assert len(chain) == 51


def test_invalid_max_length():
    with pytest.raises(ValueError):
        Chain(max_length=0)


def test_lookups():
    chain = Chain.initialize()
    chain.append("Hello")

    assert chain.index_of("B6C30000") == 0
    assert chain.index_of("AB510000") == 1
    assert chain.block_by_identifier("AB510000").content == "Hello"

    with pytest.raises(KeyError):
        chain.index_of("DEADBEEF")


def test_lookups_prefer_the_first_of_colliding_identifiers():
    genesis = Chain.initialize().genesis()
    # a record that claims the genesis identifier; only a broken store would hand us this.
    impostor = Block("impostor", genesis.identifier, genesis.identifier)
    chain = Chain.load([genesis, impostor])

    assert chain.index_of(genesis.identifier) == 0
    assert chain.block_by_identifier(genesis.identifier) == genesis


def test_blocks_is_a_snapshot():
    chain = _example_chain(1)
    blocks = chain.blocks
    chain.append("later")

    assert len(blocks) == 2
    assert len(chain.blocks) == 3


def test_serialization_round_trip_keeps_validity():
    chain = _example_chain(3)
    other = Chain.deserialize(chain.serialize())

    assert other.blocks == chain.blocks
    assert other.validate()


def test_tampered_bytes_are_detected():
    chain = _example_chain(3)
    data = chain.serialize().replace(b"payload 1", b"payload X")

    result = Chain.deserialize(data).validate()
    assert result.kind == ViolationKind.CONTENT_TAMPER
    assert result.index == 2


def test_concurrent_appends_do_not_fork():
    chain = Chain.initialize()

    def appender(thread_id):
        for i in range(50):
            chain.append("%d-%d" % (thread_id, i))

    threads = [threading.Thread(target=appender, args=(t,)) for t in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(chain) == 1 + 8 * 50
    assert chain.validate()


def test_repr():
    chain = Chain.initialize()
    assert repr(chain) == "Chain @ B6C30000 (h. 0)"


def test_load_respects_max_length():
    blocks = _example_chain(4).blocks

    with pytest.raises(ValueError):
        Chain.load(blocks, max_length=3)

    with pytest.raises(ValueError):
        Chain.load(blocks[:1], max_length=0)

    chain = Chain.load(blocks[:3], max_length=3)
    assert len(chain) == 3
    assert chain.is_full()

    with pytest.raises(CapacityExceeded):
        chain.append("one too many")


def test_validate_does_not_change_the_chain():
    chain = _tamper_content(_example_chain(3), 2)
    blocks_before = chain.blocks
    positions_before = [chain.index_of(block.identifier) for block in blocks_before]

    result = chain.validate()
    assert result.kind == ViolationKind.CONTENT_TAMPER
    assert chain.validate() == result

    assert chain.blocks == blocks_before
    assert len(chain) == 4
    assert [chain.index_of(block.identifier) for block in blocks_before] == positions_before


def test_validate_while_appending_sees_whole_blocks():
    chain = Chain.initialize()
    done = threading.Event()
    results = []

    def appender():
        for i in range(500):
            chain.append("block %d" % i)
        done.set()

    def validator():
        while not done.is_set():
            results.append(chain.validate())
        results.append(chain.validate())

    threads = [threading.Thread(target=appender), threading.Thread(target=validator)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(chain) == 501
    assert results
    assert all(result.is_valid for result in results)
