from dataclasses import dataclass
from typing import Optional

from algorithms.false_positive import (
    bits_per_member_for,
    false_positive_probability,
    optimal_hashers,
)


@dataclass(frozen=True)
class FilterConfig:
    """Validated sizing parameters shared by the standard and blocked filters.

    Attributes:
        n (int): Estimated number of distinct members.
        c (int): Bits allocated per member.
        k (int): Hash functions, i.e. bits set and tested per member. Must not exceed c.
        blocks (Optional[int]): Block count for a blocked filter, None for a standard one.

    Example:
        >>> cfg = FilterConfig.from_error_rate(capacity=10_000, error_rate=0.001)
        >>> cfg.c, cfg.k
        (15, 11)
        >>> FilterConfig(n=100, c=4, k=5)
        Traceback (most recent call last):
        ...
        ValueError: k (5) must not exceed bits per member c (4)

    """
    n: int
    c: int
    k: int
    blocks: Optional[int] = None

    def __post_init__(self):
        for field, value in (("n", self.n), ("c", self.c), ("k", self.k)):
            if value <= 0:
                raise ValueError(f"{field} must be positive, got {value}")
        if self.blocks is not None and self.blocks <= 0:
            raise ValueError(f"blocks must be positive, got {self.blocks}")
        if self.k > self.c:
            raise ValueError(
                f"k ({self.k}) must not exceed bits per member c ({self.c})")

    @classmethod
    def from_error_rate(cls, capacity: int, error_rate: float,
                        blocks: Optional[int] = None) -> "FilterConfig":
        c = bits_per_member_for(error_rate)
        return cls(capacity, c, optimal_hashers(c), blocks)

    @property
    def total_bits(self) -> int:
        return self.n * self.c

    @property
    def n_per_block(self) -> int:
        return -(-self.n // (self.blocks or 1))

    def expected_false_positive_rate(self) -> float:
        return false_positive_probability(self.n, self.c, self.k)
