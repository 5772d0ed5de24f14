"""
Lexicographic key-ranges covering a geohash bit prefix.

Because BASE32 is in ascending ASCII order, every geohash that starts with
a given bit prefix sorts into one contiguous run of keys. ``geohash_query``
returns the bounds of that run.
"""
import math
from dataclasses import dataclass
from typing import Iterator

from geoquery.core.math_utils import BASE32, BITS_PER_CHAR
from geoquery.utils.validation import validate_bits, validate_geohash

# Sorts after every BASE32 character, closing a prefix without an upper neighbour
SENTINEL = '~'


@dataclass(frozen=True)
class QueryRange:
    """A [start, end) key-range over geohash-sorted keys. Unpacks as (start, end)."""
    start: str
    end: str

    def __iter__(self) -> Iterator[str]:
        return iter((self.start, self.end))

    def contains(self, geohash: str) -> bool:
        """Check whether a geohash key falls inside this range."""
        return self.start <= geohash < self.end


def geohash_query(geohash: str, bits: int) -> QueryRange:
    """
    Calculate the key-range covering every geohash that shares ``bits`` bits with ``geohash``.

    Args:
        geohash: Geohash whose prefix defines the range
        bits: Number of significant leading bits

    Returns:
        QueryRange whose ``end`` is either the next prefix value or the
        prefix followed by SENTINEL when the next value would overflow
        the last character

    Raises:
        InvalidGeohashError: If the geohash is empty or not base32
        InvalidPrecisionError: If bits is not an integer in [1, 110]

    Example:
        >>> geohash_query("9q8yyk", 27)
        QueryRange(start='9q8yyh', end='9q8yys')
        >>> geohash_query("9q8yyz", 26)
        QueryRange(start='9q8yyh', end='9q8yy~')
    """
    validate_geohash(geohash)
    validate_bits(bits)

    precision = math.ceil(bits / BITS_PER_CHAR)
    if len(geohash) < precision:
        return QueryRange(geohash, geohash + SENTINEL)

    geohash = geohash[:precision]
    base = geohash[:-1]
    last_value = BASE32.index(geohash[-1])
    significant_bits = bits - (len(base) * BITS_PER_CHAR)
    unused_bits = BITS_PER_CHAR - significant_bits

    # Drop the unused low bits of the last character
    start_value = (last_value >> unused_bits) << unused_bits
    end_value = start_value + (1 << unused_bits)

    if end_value > 31:
        return QueryRange(base + BASE32[start_value], base + SENTINEL)
    return QueryRange(base + BASE32[start_value], base + BASE32[end_value])
