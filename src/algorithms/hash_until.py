from typing import Callable, Optional


def hash_until(hasher, initial: int, accept: Callable[[int], bool],
               max_rounds: Optional[int] = None) -> int:
    """Re-hash `initial` until `accept` holds for the result.

    The initial value is returned untouched when it already qualifies.
    Otherwise each candidate is fed alone into a fresh hash state and the
    output is tested again. Rejecting out-of-range masked draws instead of
    taking a modulo keeps every in-range index equally likely.

    Args:
    hasher: strategy exposing rehash(value) -> 64-bit int
    initial: first candidate
    accept: predicate over 64-bit values
    max_rounds: optional cap on re-hashes, None retries forever
    """
    value = initial
    rounds = 0
    while not accept(value):
        if max_rounds is not None and rounds >= max_rounds:
            raise RuntimeError(f"no acceptable hash after {rounds} rounds")
        value = hasher.rehash(value)
        rounds += 1
    return value
