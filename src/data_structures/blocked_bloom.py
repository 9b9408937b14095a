import logging
from typing import List, Optional

import numpy as np

from algorithms.hash_until import hash_until
from algorithms.hashers import HashlibHasher, draw_seed, item_bytes
from algorithms.index_mask import index_mask
from data_structures.bloom_filter import BloomFilter
from data_structures.filter_config import FilterConfig
from data_structures.standard_bloom import StandardBloom

logger = logging.getLogger(__name__)


class BlockedBloom(BloomFilter):
    """Bloom filter split into b independently seeded standard filters.

    Every item is routed to exactly one block by its own seeded hash, and
    all k of its bits live in that block. Small blocks keep a lookup within
    a few cache lines at the cost of a slightly higher false positive rate
    than one monolithic filter, since load is never perfectly balanced.
    See Kaler, "Cache Efficient Bloom Filters for Shared Memory Machines".

    Blocks are allocated on their first mark. The seeds for every block are
    drawn up front, so a filter built from a fixed rng is reproducible
    whatever order items arrive in.

    Attributes:
        hasher_seed (int): Seed of the block-selection hash.
        mask (int): index_mask(b - 1), applied to block-selection hashes.
        n_per_block (int): ceil(n / b), the set size each block is sized for.
        blocks (list): b entries, each a StandardBloom or None until first written.

    Example:
        >>> bb = BlockedBloom(n=1024 * 1024, c=16, k=11, b=8)
        >>> bb.check(100)
        False
        >>> bb.mark(100)
        >>> bb.check(100)
        True
        >>> bb.allocated_blocks()
        1

    """
    name = "blocked"

    def __init__(self, n: int, c: int, k: int, b: int,
                 hasher: Optional[HashlibHasher] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = FilterConfig(n, c, k, blocks=b)
        rng = rng if rng is not None else np.random.default_rng()
        self.hasher = hasher or HashlibHasher()
        self.n_per_block = self.config.n_per_block
        self.hasher_seed = draw_seed(rng)
        self.mask = index_mask(b - 1)
        self._block_seeds = [(draw_seed(rng), draw_seed(rng)) for _ in range(b)]
        self.blocks: List[Optional[StandardBloom]] = [None] * b
        logger.debug("blocked bloom: n=%d c=%d k=%d b=%d n_per_block=%d",
                     n, c, k, b, self.n_per_block)

    @classmethod
    def from_config(cls, config: FilterConfig, **kwargs) -> "BlockedBloom":
        if config.blocks is None:
            raise ValueError("blocked filter needs a block count")
        return cls(config.n, config.c, config.k, config.blocks, **kwargs)

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    def _accept(self, value: int) -> bool:
        return value & self.mask <= self.block_count - 1

    def block_idx(self, item) -> int:
        """Block for item, the same for the filter's whole lifetime"""
        initial = self.hasher.digest(self.hasher_seed, item_bytes(item))
        return hash_until(self.hasher, initial, self._accept) & self.mask

    def _create_block(self, idx: int) -> StandardBloom:
        seed1, seed2 = self._block_seeds[idx]
        logger.debug("allocating block %d of %d", idx, self.block_count)
        return StandardBloom(self.n_per_block, self.config.c, self.config.k,
                             seed1, seed2, hasher=self.hasher)

    def mark(self, item):
        idx = self.block_idx(item)
        if self.blocks[idx] is None:
            self.blocks[idx] = self._create_block(idx)
        self.blocks[idx].mark(item)

    def check(self, item) -> bool:
        block = self.blocks[self.block_idx(item)]
        if block is None:
            return False
        return block.check(item)

    def allocated_blocks(self) -> int:
        return sum(1 for block in self.blocks if block is not None)

    def __repr__(self):
        cfg = self.config
        return (f"BlockedBloom(n={cfg.n}, c={cfg.c}, k={cfg.k}, b={self.block_count}, "
                f"allocated={self.allocated_blocks()})")
