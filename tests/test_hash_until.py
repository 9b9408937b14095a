import hashlib
import pytest
import numpy as np
from hypothesis import given, strategies as st

from algorithms.hash_until import hash_until
from algorithms.hashers import HashlibHasher, item_bytes
from algorithms.index_mask import WORD_MASK, index_mask

# chi-square critical value, 5 degrees of freedom, p = 0.001
CHI2_CRIT_DF5 = 20.515


class CountingHasher(HashlibHasher):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def rehash(self, value):
        self.calls += 1
        return super().rehash(value)


def chi_square(counts):
    expected = counts.sum() / len(counts)
    return float(((counts - expected) ** 2 / expected).sum())


class TestHashUntil:
    def test_accepted_initial_is_returned_unchanged(self):
        h = CountingHasher()
        prop = lambda v: (0xFF & v) > 128
        assert hash_until(h, 129, prop) == 129
        assert h.calls == 0

    def test_rejected_initial_is_rehashed(self):
        h = CountingHasher()
        prop = lambda v: (0xFF & v) > 128
        assert (0xFF & hash_until(h, 127, prop)) > 128
        assert h.calls >= 1

    def test_rehash_uses_only_the_value(self):
        h = HashlibHasher()
        prop = lambda v: v != 5
        assert hash_until(h, 5, prop) == \
            int.from_bytes(hashlib.blake2b((5).to_bytes(8, 'little'), digest_size=8).digest(), 'little')

    def test_round_cap(self):
        with pytest.raises(RuntimeError):
            hash_until(HashlibHasher(), 1, lambda v: False, max_rounds=10)

    @given(st.integers(0, WORD_MASK), st.integers(0, 1000))
    def test_result_is_in_range(self, initial, upper):
        mask = index_mask(upper)
        value = hash_until(HashlibHasher(), initial, lambda v: v & mask <= upper)
        assert 0 <= value & mask <= upper
        assert 0 <= value <= WORD_MASK

    def test_indices_are_uniform(self):
        # range [0, 5] under mask 7 rejects a quarter of draws
        upper = 5
        mask = index_mask(upper)
        h = HashlibHasher()
        accept = lambda v: v & mask <= upper
        draws = np.array([
            hash_until(h, h.digest(2024, item_bytes(i)), accept) & mask
            for i in range(30000)
        ])
        counts = np.bincount(draws, minlength=upper + 1)
        assert len(counts) == upper + 1
        assert chi_square(counts) < CHI2_CRIT_DF5

    def test_modulo_would_be_biased(self):
        h = HashlibHasher()
        draws = np.array([(h.digest(2024, item_bytes(i)) & 7) % 6 for i in range(30000)])
        counts = np.bincount(draws, minlength=6)
        assert counts[0] > counts[5] and counts[1] > counts[4]
        assert chi_square(counts) > CHI2_CRIT_DF5

# --------------------------
# Running Tests
# --------------------------
#if __name__ == "__main__":
#    pytest.main([
#        "-v",
#        "--hypothesis-show-statistics",
#        "--cov=hash-until",
#        "--cov-report=html:coverage"
#    ])
# --------------------------
