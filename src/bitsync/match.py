"""
Streaming bit-string search based on Knuth-Morris-Pratt.

The matcher is fed one bit at a time and reports when the needle has
just been matched. Nothing is buffered; the only state is the number
of needle bits currently matched.
"""

from typing import Iterable, List, Optional, Tuple

from .bitarray import BitArray


def needle_from_bits(needle, needle_len: Optional[int] = None) -> Tuple[int, ...]:
    """
    Normalise a needle to a tuple of 0/1 ints.

    ``needle`` is either packed bytes read MSB first (``needle_len`` bits
    of it are used), a string of '0'/'1' characters, or an iterable of
    bits.
    """
    if isinstance(needle, (bytes, bytearray, memoryview)):
        if needle_len is None:
            needle_len = len(needle) * 8
        view = BitArray(needle)
        if needle_len > len(view):
            raise ValueError(
                f"Needle of {len(view)} bits is shorter than needle_len={needle_len}"
            )
        bits = tuple(view.bits(0, needle_len))
    elif isinstance(needle, str):
        if set(needle) - {'0', '1'}:
            raise ValueError(f"Needle string must contain only '0' and '1': {needle!r}")
        bits = tuple(int(c) for c in needle)
    else:
        bits = tuple(1 if b else 0 for b in needle)

    if needle_len is not None and needle_len != len(bits):
        raise ValueError(f"Needle has {len(bits)} bits, expected {needle_len}")
    if not bits:
        raise ValueError("Needle must be at least one bit long")
    return bits


class BitStreamMatch:
    """
    Look for a fixed bit string in a stream of bits.

    Uses the KMP failure table specialised to a binary alphabet: since
    the table never falls back to a position holding the same bit, a
    single fallback per mismatch is enough and every bit costs O(1).

    A match is reported on the bit that completes the needle; the state
    then returns to 0, so by default matches never share bits. Pass
    ``overlap=True`` to continue from the needle's longest border instead.
    """

    def __init__(self, needle, needle_len: Optional[int] = None, overlap: bool = False):
        self._needle = needle_from_bits(needle, needle_len)
        self._overlap = overlap
        self._table, self._border = self._build_table(self._needle)
        self._k = 0

    @staticmethod
    def _build_table(p: Tuple[int, ...]) -> Tuple[List[int], int]:
        table = [0] * len(p)
        table[0] = -1
        cnd = 0
        for pos in range(1, len(p)):
            if p[pos] == p[cnd]:
                table[pos] = table[cnd]
            else:
                table[pos] = cnd
                while cnd >= 0 and p[pos] != p[cnd]:
                    cnd = table[cnd]
            cnd += 1
        return table, cnd

    @property
    def needle_len(self) -> int:
        return len(self._needle)

    @property
    def needle(self) -> Tuple[int, ...]:
        return self._needle

    @property
    def table(self) -> Tuple[int, ...]:
        """Failure table; -1 means restart with the next bit."""
        return tuple(self._table)

    @property
    def border(self) -> int:
        """Length of the longest proper prefix of the needle that is also its suffix."""
        return self._border

    @property
    def overlap(self) -> bool:
        return self._overlap

    def restart(self):
        """Drop any partial match."""
        self._k = 0

    def handle_bit(self, bit) -> bool:
        """
        Handle a single bit of the haystack.

        Returns True if the needle is fully matched after this bit.
        """
        k = self._k
        if self._needle[k] != (1 if bit else 0):
            k = self._table[k]

        if k == len(self._needle) - 1:
            self._k = self._border if self._overlap else 0
            return True

        self._k = k + 1
        return False

    def handle_bits(self, bits: Iterable) -> List[int]:
        """Feed several bits; return the indices (within ``bits``) that completed a match."""
        return [i for i, bit in enumerate(bits) if self.handle_bit(bit)]

    def get_matched_bits(self) -> int:
        """Number of needle bits matched right now."""
        return self._k

    def __repr__(self) -> str:
        needle = ''.join(str(b) for b in self._needle)
        return f"BitStreamMatch(needle={needle!r}, matched={self._k})"
