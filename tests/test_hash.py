from tinychain.hash import digest, weighted_sum


def test_weighted_sum_hello():
    # 'H'*1 + 'e'*2 + 'l'*3 + 'l'*4 + 'o'*5 = 72 + 202 + 324 + 432 + 555
    assert weighted_sum(b"Hello") == 1585


def test_digest_hello():
    # 1585 == 0x631, written least significant nibble first
    assert digest("Hello") == "13600000"


def test_digest_empty():
    assert weighted_sum(b"") == 0
    assert digest("") == "00000000"


def test_digest_is_deterministic():
    for s in ["", "a", "Genesis Block00000000", "x" * 1000, "été"]:
        assert digest(s) == digest(s)


def test_digest_is_order_sensitive():
    assert digest("ab") == "52100000"
    assert digest("ba") == "42100000"


def test_digest_of_str_is_digest_of_utf8_bytes():
    assert digest("café") == digest("café".encode("utf-8"))
    assert digest("abc") == digest(b"abc")


def test_digest_wraps_at_32_bits():
    # 255 * (1 + 2 + ... + 6000) == 4590765000, which does not fit in 32 bits.
    data = b"\xff" * 6000
    assert weighted_sum(data) == 4590765000 - (1 << 32)
    assert weighted_sum(data) == 0x11A183C8
    assert digest(data) == "8C381A11"


def test_digest_genesis_input():
    assert digest("Genesis Block00000000") == "B6C30000"
