WORD_MASK = (1 << 64) - 1


def index_mask(max_value: int) -> int:
    """Smallest all-ones mask (2**m - 1, m >= 1) covering max_value.

    Values that no mask narrower than 64 bits can cover get the full
    64-bit mask. Only called when a filter or block is built, so the
    linear scan is fine.
    """
    for m in range(1, 64):
        mask = (1 << m) - 1
        if mask >= max_value:
            return mask
    return WORD_MASK
