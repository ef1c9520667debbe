# map_generator/rng.py

"""
================================================================================
SEEDING & DETERMINISTIC PRNG
================================================================================
This module turns a raw seed token into a 32-bit seed and provides the small
32-bit generator (mulberry32) that drives every random decision of map
generation.

Data Contract:
---------------
- Inputs:
    - parse_seed: an optional string token (e.g. from the command line).
    - Mulberry32: a 32-bit seed (any int; reduced modulo 2^32).
- Outputs:
    - parse_seed: a signed 32-bit integer seed.
    - Mulberry32.draw: a float in [0, 1).
- Side Effects: Mulberry32.draw advances the generator state.
- Invariants: The draw sequence for a seed is bit-for-bit reproducible. All
  integer arithmetic wraps to 32 bits.
================================================================================
"""

import math
import re
from typing import Iterator, Optional

from . import config as DEFAULTS

_UINT32_MASK = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0
_MAX_DOUBLE_BITS = 1023

# Additive constant of the mulberry32 state sequence.
_MULBERRY_INCREMENT = 0x6D2B79F5

# Number literals accepted by the seed parser. Underscores are rejected,
# unlike Python's float().
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_RADIX_RE = re.compile(r"^0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))$")


def to_uint32(value: int) -> int:
    """Wraps an integer to the unsigned 32-bit range."""
    return value & _UINT32_MASK


def to_int32(value: int) -> int:
    """Wraps an integer to the signed 32-bit range."""
    value &= _UINT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def imul(a: int, b: int) -> int:
    """Low 32 bits of the product of two 32-bit integers (unsigned)."""
    return ((a & _UINT32_MASK) * (b & _UINT32_MASK)) & _UINT32_MASK


class Mulberry32:
    """
    A tiny 32-bit seeded generator producing floats in [0, 1).

    The state is a single unsigned 32-bit integer owned by this instance.
    """

    def __init__(self, seed: int):
        self._state = to_uint32(int(seed))

    def draw(self) -> float:
        """Advances the state and returns the next float in [0, 1)."""
        a = (self._state + _MULBERRY_INCREMENT) & _UINT32_MASK
        self._state = a

        t = imul(a ^ (a >> 15), 1 | a)
        t = (t + imul(t ^ (t >> 7), 61 | t)) & _UINT32_MASK
        return (t ^ (t >> 14)) / _TWO_POW_32

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.draw()


def hash_seed_string(text: str) -> int:
    """
    Rolling hash (base 31) of a string, wrapped to a signed 32-bit integer.

    Characters are consumed as UTF-16 code units so that strings outside the
    Basic Multilingual Plane hash the same way a browser would hash them.
    """
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    value = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        value = (value * 31 + code_unit) & _UINT32_MASK
    return to_int32(value)


def _parse_number(token: str) -> Optional[float]:
    """
    Parses a numeric seed token. Returns None when the token is not a number
    or is not finite.
    """
    stripped = token.strip()
    if not stripped:
        # A blank token reads as zero, like an empty numeric field.
        return 0.0

    if _DECIMAL_RE.match(stripped):
        value = float(stripped)
        return value if math.isfinite(value) else None

    radix_match = _RADIX_RE.match(stripped)
    if radix_match:
        if radix_match.group("hex"):
            value = int(radix_match.group("hex"), 16)
        elif radix_match.group("oct"):
            value = int(radix_match.group("oct"), 8)
        else:
            value = int(radix_match.group("bin"), 2)
        # Past the double range the literal reads as Infinity.
        return float(value) if value.bit_length() <= _MAX_DOUBLE_BITS else None

    # Anything else, "Infinity" included, is not a usable number.
    return None


def parse_seed(token: Optional[str]) -> int:
    """
    Converts a raw seed token into a signed 32-bit seed.

    - Missing or empty token: the default seed.
    - Finite number: its integer part, wrapped to 32 bits.
    - Anything else: the rolling hash of the token.
    """
    if not token:
        return DEFAULTS.DEFAULT_SEED

    number = _parse_number(token)
    if number is not None:
        return to_int32(int(number))
    return hash_seed_string(token)
