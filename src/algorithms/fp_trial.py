import logging
from dataclasses import dataclass
from typing import Iterable

import pyarrow as pa

from algorithms.false_positive import false_positive_probability
from data_structures.bloom_filter import BloomFilter

logger = logging.getLogger(__name__)


@dataclass
class TrialResult:
    name: str
    n: int
    c: int
    k: int
    false_positives: int

    @property
    def observed_rate(self) -> float:
        return self.false_positives / self.n

    @property
    def expected_rate(self) -> float:
        return false_positive_probability(self.n, self.c, self.k)


def run_trial(bf: BloomFilter) -> TrialResult:
    """Fill a filter to its set size with integers, then probe the next set_size integers.

    Integers the filter already reports as present are skipped during the
    fill so that exactly set_size distinct members end up marked.
    """
    n = bf.set_size
    marked = 0
    i = 0
    while True:
        if not bf.check(i):
            bf.mark(i)
            marked += 1
            if marked >= n:
                break
        i += 1

    false_positives = sum(1 for v in range(i + 1, i + 1 + n) if bf.check(v))
    result = TrialResult(bf.name, n, bf.bits_per_member, bf.hash_count, false_positives)
    logger.info(
        "%s: %d out of %d checks were false positives. "
        "This rate is %.7f with an expected rate of %.7f.",
        result.name, result.false_positives, result.n,
        result.observed_rate, result.expected_rate,
    )
    return result


def trials_table(results: Iterable[TrialResult]) -> pa.Table:
    """Tabulate trial results
        Returns:
        Arrow Table with columns: name, n, c, k, false_positives, observed_rate, expected_rate
    """
    results = list(results)
    return pa.Table.from_arrays(
        [
            pa.array([r.name for r in results], pa.string()),
            pa.array([r.n for r in results], pa.uint64()),
            pa.array([r.c for r in results], pa.uint32()),
            pa.array([r.k for r in results], pa.uint32()),
            pa.array([r.false_positives for r in results], pa.uint64()),
            pa.array([r.observed_rate for r in results], pa.float64()),
            pa.array([r.expected_rate for r in results], pa.float64()),
        ],
        names=['name', 'n', 'c', 'k', 'false_positives', 'observed_rate', 'expected_rate'],
    )
