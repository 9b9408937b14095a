import logging
from typing import List, Optional

import numpy as np

from algorithms.hash_until import hash_until
from algorithms.hashers import HashlibHasher, draw_seed, item_bytes
from algorithms.index_mask import WORD_MASK, index_mask
from data_structures.bit_array import BitArray
from data_structures.bloom_filter import BloomFilter
from data_structures.filter_config import FilterConfig

logger = logging.getLogger(__name__)


class StandardBloom(BloomFilter):
    """Bloom filter over a single contiguous bit array of n*c bits.

    Each item maps to k bit indices. Two seeded 64-bit hashes h1 and h2 are
    computed once and the i'th index is derived from h1 + i*h2 (Kirsch and
    Mitzenmacher, "Less Hashing, Same Performance"). Each derived value is
    masked to the smallest power-of-two range covering the array and
    re-hashed until it lands inside the array, so no index is favoured.

    Attributes:
        seed1, seed2 (int): Seeds for the two base hashes, fixed for the filter's lifetime.
        bits (BitArray): The n*c bit storage.
        mask (int): index_mask(n*c - 1), applied to every candidate hash.
        hasher (HashlibHasher): Seeded digest strategy.

    Example:
        >>> bf = StandardBloom(n=1024, c=16, k=optimal_hashers(16))
        >>> bf.check(100)
        False
        >>> bf.mark(100)
        >>> bf.check(100)
        True

    """
    name = "standard"

    def __init__(self, n: int, c: int, k: int,
                 seed1: Optional[int] = None, seed2: Optional[int] = None,
                 hasher: Optional[HashlibHasher] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = FilterConfig(n, c, k)
        if seed1 is None or seed2 is None:
            rng = rng if rng is not None else np.random.default_rng()
            seed1 = draw_seed(rng) if seed1 is None else seed1
            seed2 = draw_seed(rng) if seed2 is None else seed2
        self.seed1 = seed1 & WORD_MASK
        self.seed2 = seed2 & WORD_MASK
        self.hasher = hasher or HashlibHasher()
        self.bits = BitArray(self.config.total_bits)
        self.max_index = self.config.total_bits - 1
        self.mask = index_mask(self.max_index)
        logger.debug("standard bloom: n=%d c=%d k=%d bits=%d mask=%#x",
                     n, c, k, self.config.total_bits, self.mask)

    @classmethod
    def from_config(cls, config: FilterConfig, **kwargs) -> "StandardBloom":
        return cls(config.n, config.c, config.k, **kwargs)

    def _accept(self, value: int) -> bool:
        return value & self.mask <= self.max_index

    def hash(self, item) -> List[int]:
        """Bit indices for item, k of them, duplicates kept"""
        data = item_bytes(item)
        h1 = self.hasher.digest(self.seed1, data)
        h2 = self.hasher.digest(self.seed2, data)

        indices = []
        for i in range(self.config.k):
            k_and_m = (h1 + i * h2) & WORD_MASK
            usable = hash_until(self.hasher, k_and_m, self._accept)
            indices.append(usable & self.mask)
        return indices

    def mark(self, item):
        for ix in self.hash(item):
            self.bits.set(ix)

    def check(self, item) -> bool:
        return all(self.bits.get(ix) for ix in self.hash(item))

    def fill_ratio(self) -> float:
        return self.bits.fill_ratio()

    def estimated_false_positive_rate(self) -> float:
        """False positive rate implied by the current bit load"""
        return self.fill_ratio() ** self.config.k

    def __repr__(self):
        cfg = self.config
        return (f"StandardBloom(n={cfg.n}, c={cfg.c}, k={cfg.k}, "
                f"fill={self.fill_ratio():.4f})")
