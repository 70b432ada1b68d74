"""Integer helpers shared by the chain algorithms.

Digit vectors are numpy int8 arrays indexed from the least significant
position, so digits[i] is the coefficient of 2^i.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable

import numpy as np
from numpy.typing import NDArray


def sorted_unique(xs: Iterable[int]) -> list[int]:
    """Sort ascending and drop duplicates."""
    return sorted(set(int(x) for x in xs))


def merge_unique(a: Iterable[int], b: Iterable[int]) -> list[int]:
    return sorted_unique([*a, *b])


def insert_sorted_unique(xs: list[int], x: int) -> list[int]:
    """Insert x into the sorted list xs unless already present."""
    i = bisect_left(xs, x)
    if i < len(xs) and xs[i] == x:
        return xs
    return xs[:i] + [x] + xs[i:]


def contains_sorted(x: int, xs: list[int]) -> bool:
    i = bisect_left(xs, x)
    return i < len(xs) and xs[i] == x


def is_pow2(x: int) -> bool:
    return x > 0 and x & (x - 1) == 0


def pow2_up_to(x: int) -> list[int]:
    """Powers of two 1, 2, 4, ... up to and including the power of two x."""
    assert is_pow2(x)
    return [1 << i for i in range(x.bit_length())]


def ones(n: int) -> int:
    """The integer 2^n - 1 (n ones in binary)."""
    return (1 << n) - 1


def mask(lo: int, hi: int) -> int:
    """Integer with bits lo..hi-1 set."""
    return ones(hi - lo) << lo


def extract(x: int, lo: int, hi: int) -> int:
    """Bits lo..hi-1 of x as an integer."""
    return (x >> lo) & ones(hi - lo)


def bits(x: int) -> NDArray[np.int8]:
    """Binary digits of x, least significant first."""
    n = x.bit_length()
    if n == 0:
        return np.zeros(0, dtype=np.int8)
    raw = np.frombuffer(x.to_bytes((n + 7) // 8, "little"), dtype=np.uint8)
    return np.unpackbits(raw, bitorder="little")[:n].astype(np.int8)


def naf(x: int) -> NDArray[np.int8]:
    """Non-adjacent form of x, least significant digit first.

    Digits are in {-1, 0, 1} with no two adjacent non-zero digits. Uses
    digit i = bit_{i+1}(3x) - bit_{i+1}(x).
    """
    hi = bits((3 * x) >> 1)
    lo = bits(x >> 1)
    lo = np.pad(lo, (0, len(hi) - len(lo)))
    return hi - lo


def digits_value(digits: NDArray[np.int8]) -> int:
    """Integer value of a (possibly signed) digit vector."""
    value = 0
    for i in np.flatnonzero(digits):
        value += int(digits[i]) << int(i)
    return value
