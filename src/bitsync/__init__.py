"""
bitsync - bit-granular views and streaming sync-pattern search.

Locates sync markers, start codes and framing patterns whose boundaries
are not byte aligned, one bit at a time and without buffering the stream.
"""

from importlib.metadata import version as _get_version, PackageNotFoundError

try:
    __version__ = _get_version("bitsync")
except PackageNotFoundError:
    # Package not installed (running from source)
    __version__ = "0.0.0-dev"

from .bitarray import BitArray, BitReference, word_bits_of
from .match import BitStreamMatch, needle_from_bits
from .scan import ANNEX_B_START_CODE, feed, find_matches, find_start_codes

__all__ = [
    "__version__",
    # Bit view
    "BitArray",
    "BitReference",
    "word_bits_of",
    # Matcher
    "BitStreamMatch",
    "needle_from_bits",
    # Scanning
    "ANNEX_B_START_CODE",
    "feed",
    "find_matches",
    "find_start_codes",
]
