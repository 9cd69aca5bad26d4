"""
Bit-addressable view over a buffer of fixed-width unsigned words.

Bits are numbered globally across the buffer, most-significant bit first
within each word, which matches the on-wire order of every MSB-first
bitstream (H.264, MPEG-TS, most framing headers).
"""

from typing import Iterator, Optional

import numpy as np


def word_bits_of(data) -> Optional[int]:
    """Return the word width in bits for a supported buffer, or None."""
    if isinstance(data, np.ndarray):
        if data.dtype.kind != 'u':
            raise TypeError(f"Unsigned integer dtype required, got {data.dtype}")
        return data.dtype.itemsize * 8
    if isinstance(data, (bytes, bytearray)):
        return 8
    if isinstance(data, memoryview):
        if data.format != 'B':
            raise TypeError(f"Unsupported memoryview format: {data.format!r}")
        return 8
    return None


class BitReference:
    """A writable reference to a single bit of a BitArray."""

    __slots__ = ("_parent", "_pos")

    def __init__(self, parent: "BitArray", pos: int):
        self._parent = parent
        self._pos = pos

    @property
    def pos(self) -> int:
        return self._pos

    def get(self) -> bool:
        return self._parent.get(self._pos)

    def set(self, value) -> "BitReference":
        """Write a new value (bool, int or another reference) to the bit."""
        self._parent.set(self._pos, value)
        return self

    def flip(self) -> "BitReference":
        self.set(~self)
        return self

    def __bool__(self) -> bool:
        return self.get()

    def __int__(self) -> int:
        return int(self.get())

    def __invert__(self) -> bool:
        return not self.get()

    def __repr__(self) -> str:
        return f"BitReference(pos={self._pos}, value={int(self)})"


class BitArray:
    """
    Read or write single bits in a caller-owned buffer of words.

    The view never copies the buffer: every access goes straight to
    ``data``. Word index is ``pos // W`` and the bit inside the word is
    ``W - 1 - pos % W`` (MSB first). Positions are not range checked.
    """

    __slots__ = ("_data", "_word_bits", "_word_mask")

    def __init__(self, data, word_bits: Optional[int] = None):
        detected = word_bits_of(data)
        if word_bits is None:
            if detected is None:
                raise TypeError(
                    f"Cannot infer word width of {type(data).__name__}; pass word_bits"
                )
            word_bits = detected
        if word_bits <= 0:
            raise ValueError("word_bits must be positive")

        self._data = data
        self._word_bits = word_bits
        self._word_mask = (1 << word_bits) - 1

    @property
    def data(self):
        return self._data

    @property
    def word_bits(self) -> int:
        return self._word_bits

    def _word(self, pos: int) -> int:
        return pos // self._word_bits

    def _shift(self, pos: int) -> int:
        return self._word_bits - 1 - (pos % self._word_bits)

    def get(self, pos: int) -> bool:
        """Read the bit at global position ``pos``."""
        return bool((int(self._data[self._word(pos)]) >> self._shift(pos)) & 1)

    def set(self, pos: int, value) -> None:
        """Write ``value`` to the bit at ``pos``, leaving the rest of the word alone."""
        i = self._word(pos)
        mask = 1 << self._shift(pos)
        word = int(self._data[i])
        if value:
            self._data[i] = word | mask
        else:
            self._data[i] = word & (self._word_mask ^ mask)

    def flip(self, pos: int) -> None:
        self.set(pos, not self.get(pos))

    def ref(self, pos: int) -> BitReference:
        return BitReference(self, pos)

    def bits(self, start: int = 0, stop: Optional[int] = None) -> Iterator[int]:
        """Yield bits ``start..stop-1`` in stream order as 0/1 ints."""
        if stop is None:
            stop = len(self)
        for pos in range(start, stop):
            yield int(self.get(pos))

    def __getitem__(self, pos: int) -> bool:
        return self.get(pos)

    def __setitem__(self, pos: int, value) -> None:
        self.set(pos, value)

    def __len__(self) -> int:
        return len(self._data) * self._word_bits

    def __repr__(self) -> str:
        return f"BitArray(words={len(self._data)}, word_bits={self._word_bits})"
