"""Dictionary based chain algorithms.

A decomposer writes the target as a sum of terms d * 2^e. The distinct
d values form a dictionary; a sequence algorithm builds one chain
covering the dictionary, and the target is then assembled from the
terms by doubling and adding, most significant term first.

Decomposers follow the window and run methods surveyed in the Handbook
of Elliptic and Hyperelliptic Curve Cryptography, section 9.1, and the
hybrid method of Bergeron, Berstel, Brlek and Duboc, "Addition chains
using continued fractions".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from addchain.alg.base import ChainAlgorithm, SequenceAlgorithm
from addchain.chain import Chain
from addchain.utils import bigints
from addchain.utils.types import Term


class Decomposition(list):
    """The target written as a sum of terms d * 2^e."""

    def value(self) -> int:
        return sum(t.value for t in self)

    def sort_by_exponent(self) -> None:
        self.sort(key=lambda t: t.e)

    def dictionary(self) -> list[int]:
        """Distinct d values in ascending order."""
        return bigints.sorted_unique(t.d for t in self)


class Decomposer(ABC):
    """Breaks an integer into a decomposition."""

    @abstractmethod
    def decompose(self, x: int) -> Decomposition:
        ...


@dataclass(frozen=True)
class FixedWindow(Decomposer):
    """Non-zero K-bit windows at exponents 0, K, 2K, ..."""

    K: int

    def __str__(self) -> str:
        return f"fixed_window(k={self.K})"

    def decompose(self, x: int) -> Decomposition:
        terms = Decomposition()
        for s in range(0, x.bit_length(), self.K):
            d = bigints.extract(x, s, s + self.K)
            if d:
                terms.append(Term(d, s))
        return terms


@dataclass(frozen=True)
class SlidingWindow(Decomposer):
    """Windows of up to K digits, each starting and ending on a non-zero digit.

    Z > 0 ends a window above the first run of Z zero digits it would
    contain. With S set the windows slide over the non-adjacent form of
    the target. A window is extended down over negative digits, up to K
    digits, so the remainder below it stays non-negative. A window that
    cannot close within K digits is taken from the binary digits of the
    remaining value instead, and the non-adjacent form is recomputed for
    what is left. Every term is positive, odd and at most K bits.
    """

    K: int
    Z: int = 0
    S: bool = False

    def __str__(self) -> str:
        name = f"sliding_window(k={self.K}"
        if self.Z:
            name += f",z={self.Z}"
        if self.S:
            name += ",signed"
        return name + ")"

    def digits(self, x: int) -> NDArray[np.int8]:
        if self.S:
            return bigints.naf(x)
        return bigints.bits(x)

    def decompose(self, x: int) -> Decomposition:
        terms = Decomposition()
        y = x
        while y:
            window = self._window(self.digits(y))
            if window is None:
                window = self._window(bigints.bits(y))
            d, lo = window
            terms.append(Term(d, lo))
            y -= d << lo
        return terms

    def _window(self, digits: NDArray[np.int8]) -> tuple[int, int] | None:
        """Top window of digits as (d, lowest position).

        Returns None when the next non-zero digit below the window stays
        negative for K digits, so no window of width K leaves a
        non-negative remainder.
        """
        nonzero = np.flatnonzero(digits)
        h = int(nonzero[-1])
        assert digits[h] > 0, f"window at {h} has a negative leading digit"
        lo = max(h - self.K + 1, 0)
        if self.Z:
            lo = self._zero_cutoff(digits, h, lo)

        i = int(np.searchsorted(nonzero, lo)) - 1
        while i >= 0 and digits[nonzero[i]] < 0:
            if h - int(nonzero[i]) >= self.K:
                return None
            lo = int(nonzero[i])
            i -= 1

        while digits[lo] == 0:
            lo += 1
        return bigints.digits_value(digits[lo : h + 1]), lo

    def _zero_cutoff(self, digits: NDArray[np.int8], h: int, lo: int) -> int:
        run = 0
        for i in range(h - 1, lo - 1, -1):
            run = run + 1 if digits[i] == 0 else 0
            if run == self.Z:
                return i + self.Z
        return lo


@dataclass(frozen=True)
class RunLength(Decomposer):
    """Runs of ones, each capped at T ones (T = 0 means no cap)."""

    T: int = 0

    def __str__(self) -> str:
        return f"run_length(t={self.T})"

    def decompose(self, x: int) -> Decomposition:
        terms = Decomposition()
        for lo, n in _runs(bigints.bits(x), self.T):
            terms.append(Term(bigints.ones(n), lo))
        return terms


@dataclass(frozen=True)
class Hybrid(Decomposer):
    """Runs longer than K become run terms; the rest is windowed.

    Runs are capped at T ones (T = 0 means no cap) and the remainder is
    decomposed with SlidingWindow(K, Z, S).
    """

    K: int
    T: int = 0
    Z: int = 0
    S: bool = False

    def __str__(self) -> str:
        name = f"hybrid(k={self.K}"
        if self.T:
            name += f",t={self.T}"
        if self.Z:
            name += f",z={self.Z}"
        if self.S:
            name += ",signed"
        return name + ")"

    def decompose(self, x: int) -> Decomposition:
        terms = Decomposition()
        y = x
        for lo, n in _runs(bigints.bits(x), self.T):
            if n <= self.K:
                continue
            terms.append(Term(bigints.ones(n), lo))
            y ^= bigints.mask(lo, lo + n)

        window = SlidingWindow(K=self.K, Z=self.Z, S=self.S)
        terms.extend(window.decompose(y))
        return terms


def _runs(bits: NDArray[np.int8], cap: int) -> list[tuple[int, int]]:
    """Runs of ones as (lowest position, length), most significant first."""
    runs = []
    i = len(bits) - 1
    while i >= 0:
        while i >= 0 and bits[i] == 0:
            i -= 1
        if i < 0:
            break
        s = i
        while i >= 0 and bits[i] == 1 and (cap == 0 or s - i < cap):
            i -= 1
        runs.append((i + 1, s - i))
    return runs


def dict_sum_chain(terms: Decomposition) -> Chain:
    """Chain assembling the decomposition from its dictionary values.

    terms must be sorted by exponent. The dictionary values themselves
    are assumed present, so the result is appended to a dictionary chain.
    """
    c = Chain()
    cur = terms[-1].d
    for k in range(len(terms) - 1, 0, -1):
        for _ in range(terms[k].e - terms[k - 1].e):
            cur <<= 1
            c.append_clone(cur)
        cur += terms[k - 1].d
        c.append_clone(cur)

    for _ in range(terms[0].e):
        cur <<= 1
        c.append_clone(cur)
    return c


@dataclass(frozen=True)
class DictionaryAlgorithm(ChainAlgorithm):
    """Chain algorithm from a decomposer and a sequence algorithm."""

    decomposer: Decomposer
    sequence_algorithm: SequenceAlgorithm

    def __str__(self) -> str:
        return f"dictionary({self.decomposer},{self.sequence_algorithm})"

    def find_chain(self, target: int) -> Chain:
        if target < 0:
            raise ValueError(f"target must be non-negative, got {target}")
        if target == 0:
            return Chain()

        terms = self.decomposer.decompose(target)
        terms.sort_by_exponent()
        assert terms.value() == target, f"{self.decomposer} lost bits of {target}"

        c = self.sequence_algorithm.find_sequence(terms.dictionary())
        c.extend(dict_sum_chain(terms))
        return c.sorted_unique()


def runs_chain(lc: Chain) -> Chain:
    """Lift a chain of run lengths to a chain of runs.

    If lc contains l then the result contains 2^l - 1. Each op a + b of
    the lengths chain (a <= b) becomes the shifts of 2^b - 1 up to
    (2^b - 1) << a followed by 2^(a+b) - 1.
    """
    program = lc.program()
    c = Chain([1])
    shifts: dict[int, int] = {}
    for op in program:
        a, b = sorted((lc[op.i], lc[op.j]))
        rb = bigints.ones(b)
        s = shifts.get(b, 0)
        while s < a:
            s += 1
            c.append(rb << s)
        shifts[b] = s
        c.append(bigints.ones(a + b))
    return c


@dataclass(frozen=True)
class RunsAlgorithm(ChainAlgorithm):
    """Dictionary algorithm over runs of ones, solved through their lengths.

    A dictionary of runs 2^l1 - 1, ..., 2^lk - 1 follows from an addition
    sequence for the lengths l1, ..., lk, so the sequence algorithm is
    applied to the lengths instead of the runs.
    """

    sequence_algorithm: SequenceAlgorithm

    def __str__(self) -> str:
        return f"runs({self.sequence_algorithm})"

    def find_chain(self, target: int) -> Chain:
        if target < 0:
            raise ValueError(f"target must be non-negative, got {target}")
        if target == 0:
            return Chain()

        terms = RunLength().decompose(target)
        terms.sort_by_exponent()
        lengths = bigints.sorted_unique(d.bit_length() for d in terms.dictionary())

        lc = self.sequence_algorithm.find_sequence(lengths).sorted_unique()
        c = runs_chain(lc)
        c.extend(dict_sum_chain(terms))
        return c.sorted_unique()

