import numpy as np
import pyarrow as pa
import pyarrow.compute as pc

WORD_BITS = 64
_WORD_ONES = (1 << WORD_BITS) - 1


def word_index_for_bit(bit: int) -> int:
    return bit // WORD_BITS


class BitArray:
    """Fixed-width bit vector packed into 64-bit words.

    Bit `i` lives in word `i // 64` at position `i % 64`, least significant
    bit first. That is the Arrow validity/boolean bitmap layout, so the
    words can be handed to PyArrow without copying.

    Attributes:
        bits (int): The number of addressable bits, fixed at construction.
        words (numpy.ndarray): Little-endian uint64 backing storage.

    Example:
        >>> ba = BitArray(100)
        >>> ba.set(3)
        >>> ba.get(3)
        True
        >>> ba.to_arrow()[3].as_py()
        True
        >>> ba.get(100)
        Traceback (most recent call last):
        ...
        IndexError: bit 100 out of range for width 100

    """
    def __init__(self, bit_count: int):
        if bit_count <= 0:
            raise ValueError(f"bit_count must be positive, got {bit_count}")
        self.bits = bit_count
        self.words = np.zeros(word_index_for_bit(bit_count - 1) + 1, dtype='<u8')

    def _locate(self, bit: int):
        if not 0 <= bit < self.bits:
            raise IndexError(f"bit {bit} out of range for width {self.bits}")
        return word_index_for_bit(bit), 1 << (bit % WORD_BITS)

    def set_to(self, bit: int, state: bool):
        """Set or clear exactly one bit"""
        word_ix, set_mask = self._locate(bit)
        word = int(self.words[word_ix])
        if state:
            self.words[word_ix] = word | set_mask
        else:
            self.words[word_ix] = word & (_WORD_ONES ^ set_mask)

    def set(self, bit: int):
        self.set_to(bit, True)

    def clear(self, bit: int):
        self.set_to(bit, False)

    def get(self, bit: int) -> bool:
        word_ix, set_mask = self._locate(bit)
        return int(self.words[word_ix]) & set_mask == set_mask

    def width(self) -> int:
        return self.bits

    def to_arrow(self) -> pa.BooleanArray:
        """Zero-copy Arrow view of the bits"""
        return pa.Array.from_buffers(
            pa.bool_(), self.bits, [None, pa.py_buffer(self.words)]
        )

    def count_set(self) -> int:
        return pc.sum(self.to_arrow()).as_py() or 0

    def fill_ratio(self) -> float:
        return self.count_set() / self.bits

    def __repr__(self):
        words = " ".join(f"{int(w):#018X}" for w in self.words)
        return f"BitArray(bits={self.bits}, words=[{words}])"
