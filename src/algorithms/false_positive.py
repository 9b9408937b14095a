import math


def optimal_hashers(c: int) -> int:
    """Hash count minimising false positives for c bits per member: ceil(c * ln 2)"""
    return math.ceil(c * math.log(2))


def false_positive_probability(n: int, c: int, k: int) -> float:
    """Expected false positive rate after n insertions into n*c bits with k hashers
        Returns:
        (1 - e^(-k*n / (n*c)))^k
    """
    m = n * c
    return (1 - math.exp(-k * n / m)) ** k


def bits_per_member_for(error_rate: float) -> int:
    """Bits per member needed to reach error_rate with optimal hashers"""
    if not 0 < error_rate < 1:
        raise ValueError(f"error_rate must be in (0, 1), got {error_rate}")
    return math.ceil(-math.log(error_rate) / (math.log(2)**2))
