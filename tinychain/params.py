# Identifiers are 8 hex digits, i.e. the rendering of a single 32-bit accumulator. We pin the arithmetic to unsigned
# 32-bit wraparound so that every implementation, on every platform, agrees on every digest.
IDENTIFIER_LENGTH = 8
DIGEST_BITS = 32
DIGEST_MASK = (1 << DIGEST_BITS) - 1

HEX_ALPHABET = "0123456789ABCDEF"

# The genesis block has no predecessor, so it points at the all-zeros identifier instead. Nothing stops the digest from
# producing this value for some other input; in practice it doesn't, and validation only ever compares it at index 0.
SENTINEL_IDENTIFIER = "0" * IDENTIFIER_LENGTH

# In cryptocurrency tradition the genesis block carries a political statement. Ours is less ambitious.
GENESIS_CONTENT = "Genesis Block"

# Default capacity policy of the interactive builder. The chain itself is happy to grow forever; this is a UI limit.
MAX_BLOCKS = 10
