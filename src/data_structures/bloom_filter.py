from abc import ABC, abstractmethod

import pyarrow as pa

from data_structures.filter_config import FilterConfig


class BloomFilter(ABC):
    """Insert-and-test contract shared by every filter in this package.

    A subclass derives a fixed set of bit positions per item; mark sets
    them and check reports whether all of them are set. A checked item that
    was marked is always reported present. One that was not may still be
    reported present, at roughly the rate false_positive_probability gives.

    Members are only ever inserted; there is no removal, resizing or merging.
    Concrete filters differ in how they lay out their bits (see
    StandardBloom and BlockedBloom) but share this contract.

    Attributes:
        name (str): Short label for the filter kind, used in reports.
        config (FilterConfig): The validated sizing parameters.

    Example:
        >>> from data_structures.standard_bloom import StandardBloom
        >>> bf = StandardBloom(n=1000, c=16, k=11)
        >>> bf.add("hello")
        >>> "hello" in bf
        True
        >>> bf.check_batch(pa.array(["hello", "world"])).to_pylist()
        [True, False]  # Potentially True for "world", with a small probability

    """
    name = "bloom"
    config: FilterConfig

    @abstractmethod
    def mark(self, item):
        """Set the bits for item"""

    @abstractmethod
    def check(self, item) -> bool:
        """True if every bit for item is set"""

    @property
    def set_size(self) -> int:
        return self.config.n

    @property
    def bits_per_member(self) -> int:
        return self.config.c

    @property
    def hash_count(self) -> int:
        return self.config.k

    def add(self, item):
        self.mark(item)

    def __contains__(self, item) -> bool:
        return self.check(item)

    def mark_batch(self, items):
        """Mark every item of an iterable or Arrow array"""
        for item in _as_values(items):
            self.mark(item)

    def check_batch(self, items) -> pa.BooleanArray:
        """Check every item of an iterable or Arrow array
        Returns:
        Arrow boolean array aligned with items
        """
        return pa.array([self.check(item) for item in _as_values(items)], type=pa.bool_())


def _as_values(items):
    if isinstance(items, (pa.Array, pa.ChunkedArray)):
        return items.to_pylist()
    return items
