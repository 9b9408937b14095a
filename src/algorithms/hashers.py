import struct
import hashlib
from functools import partial

import numpy as np
import pyarrow as pa

from algorithms.index_mask import WORD_MASK


def item_bytes(item) -> bytes:
    """Stable byte form of an item. Equal items give equal bytes.

    A one-byte type tag leads the payload so that unequal items of different
    types, such as 49, "1" and b"1", never share bytes.
    """
    if isinstance(item, pa.Scalar):
        item = item.as_py()
    elif isinstance(item, np.generic):
        item = item.item()
    if isinstance(item, (bytes, bytearray, memoryview)):
        return b"b" + bytes(item)
    if isinstance(item, str):
        return b"s" + item.encode()
    if isinstance(item, float) and item.is_integer():
        item = int(item)
    if isinstance(item, int):
        return b"i" + item.to_bytes(item.bit_length() // 8 + 1, 'little', signed=True)
    if isinstance(item, float):
        return b"f" + struct.pack('<d', item)
    raise TypeError(f"cannot hash item of type {type(item).__name__}")


def draw_seed(rng: np.random.Generator) -> int:
    """One uniform 64-bit seed from the randomness provider"""
    return int(rng.integers(0, WORD_MASK, dtype=np.uint64, endpoint=True))


class HashlibHasher:
    """Seeded 64-bit digests on top of any hashlib constructor.

    A hash state is seeded with the 8 little-endian bytes of the seed and
    then fed the item bytes; the first 8 bytes of the digest, read
    little-endian, are the result. blake2b with an 8-byte digest is the
    default, which is what the filters use unless another is injected.

    Example:
        >>> h = HashlibHasher()
        >>> h.digest(42, b"hello") == h.digest(42, b"hello")
        True
        >>> sha = HashlibHasher(hashlib.sha256)
    """
    def __init__(self, factory=partial(hashlib.blake2b, digest_size=8)):
        self.factory = factory

    def digest(self, seed: int, data: bytes) -> int:
        h = self.factory()
        h.update((seed & WORD_MASK).to_bytes(8, 'little'))
        h.update(data)
        return int.from_bytes(h.digest()[:8], 'little')

    def rehash(self, value: int) -> int:
        """Hash a bare 64-bit value in a fresh state"""
        h = self.factory()
        h.update((value & WORD_MASK).to_bytes(8, 'little'))
        return int.from_bytes(h.digest()[:8], 'little')

    def __repr__(self):
        return f"HashlibHasher({getattr(self.factory, 'func', self.factory).__name__})"
