"""
Helpers that drive a BitStreamMatch over a buffer or bit iterable.

The matcher never pulls data itself; these functions are the loop a
parser would otherwise write by hand.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from .bitarray import BitArray
from .match import BitStreamMatch

logger = logging.getLogger(__name__)

# Annex B start code prefix used by H.264 and HEVC elementary streams.
ANNEX_B_START_CODE = b'\x00\x00\x01'


def feed(matcher: BitStreamMatch, bits: Iterable, start: int = 0) -> Iterator[int]:
    """Yield ``start + i`` for every bit ``i`` on which ``matcher`` reports a match."""
    for i, bit in enumerate(bits, start):
        if matcher.handle_bit(bit):
            yield i


def find_matches(
    data,
    needle,
    needle_len: Optional[int] = None,
    *,
    start: int = 0,
    stop: Optional[int] = None,
    word_bits: Optional[int] = None,
    overlap: bool = False,
) -> List[int]:
    """
    Return the bit positions in ``data`` where ``needle`` starts.

    ``data`` is any buffer accepted by BitArray; ``start``/``stop`` bound
    the scanned bit range.
    """
    view = BitArray(data, word_bits)
    matcher = BitStreamMatch(needle, needle_len, overlap=overlap)
    if stop is None:
        stop = len(view)

    logger.debug(
        "Scanning bits %d..%d of %r for %d-bit needle",
        start, stop, view, matcher.needle_len,
    )

    offset = matcher.needle_len - 1
    positions = []
    for end in feed(matcher, view.bits(start, stop), start):
        logger.debug("Needle matched at bit %d", end - offset)
        positions.append(end - offset)
    return positions


def find_start_codes(data, *, start: int = 0, stop: Optional[int] = None) -> List[int]:
    """
    Locate Annex B start codes (0x000001) at any bit offset.

    Start codes are byte aligned in a well-formed stream; scanning at bit
    granularity also finds them after bit slips or in bit-packed captures.
    """
    return find_matches(
        data, ANNEX_B_START_CODE, len(ANNEX_B_START_CODE) * 8, start=start, stop=stop
    )
