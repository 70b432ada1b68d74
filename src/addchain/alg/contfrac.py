"""Continued fraction addition sequences.

Implements the continued fraction method of Bergeron, Berstel and
Brlek, "Efficient computation of addition chains" (1994). A chain for n
is assembled from a chain for an auxiliary value k and the quotient and
remainder of n by k; the strategy decides which k to try.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from math import isqrt
from typing import Iterable

from addchain.alg.base import SequenceAlgorithm, sorted_targets
from addchain.chain import Chain, plus, product
from addchain.utils import bigints


class Strategy(ABC):
    """Chooses the auxiliary integers k for a target n."""

    @abstractmethod
    def k(self, n: int) -> list[int]:
        ...

    @property
    @abstractmethod
    def singleton(self) -> bool:
        """Whether k() always returns exactly one value."""


@dataclass(frozen=True)
class BinaryStrategy(Strategy):
    """k = floor(n/2)."""

    def __str__(self) -> str:
        return "binary"

    @property
    def singleton(self) -> bool:
        return True

    def k(self, n: int) -> list[int]:
        return [n >> 1]


@dataclass(frozen=True)
class CoBinaryStrategy(Strategy):
    """Modified binary: k = floor(n/2), less one when n is even."""

    def __str__(self) -> str:
        return "co_binary"

    @property
    def singleton(self) -> bool:
        return True

    def k(self, n: int) -> list[int]:
        k = n >> 1
        if n & 1 == 0:
            k -= 1
        return [k]


@dataclass(frozen=True)
class DichotomicStrategy(Strategy):
    """k = floor(n / 2^(bitlen(n)/2))."""

    def __str__(self) -> str:
        return "dichotomic"

    @property
    def singleton(self) -> bool:
        return True

    def k(self, n: int) -> list[int]:
        return [n >> (n.bit_length() // 2)]


@dataclass(frozen=True)
class SqrtStrategy(Strategy):
    """k = floor(sqrt(n))."""

    def __str__(self) -> str:
        return "sqrt"

    @property
    def singleton(self) -> bool:
        return True

    def k(self, n: int) -> list[int]:
        return [isqrt(n)]


@dataclass(frozen=True)
class TotalStrategy(Strategy):
    """Every k in 2..n-1. Optimal continued fraction chains, slowly."""

    def __str__(self) -> str:
        return "total"

    @property
    def singleton(self) -> bool:
        return False

    def k(self, n: int) -> list[int]:
        return list(range(2, n))


@dataclass(frozen=True)
class DyadicStrategy(Strategy):
    """k = floor(n / 2^j) for every j with k > 1."""

    def __str__(self) -> str:
        return "dyadic"

    @property
    def singleton(self) -> bool:
        return False

    def k(self, n: int) -> list[int]:
        ks = []
        k = n >> 1
        while k > 1:
            ks.append(k)
            k >>= 1
        return ks


@dataclass(frozen=True)
class FermatStrategy(Strategy):
    """k = floor(n / 2^(2^j)) for every j with k > 1."""

    def __str__(self) -> str:
        return "fermat"

    @property
    def singleton(self) -> bool:
        return False

    def k(self, n: int) -> list[int]:
        ks = []
        s = 1
        k = n >> s
        while k > 1:
            ks.append(k)
            s *= 2
            k = n >> s
        return ks


STRATEGIES: tuple[Strategy, ...] = (
    BinaryStrategy(),
    CoBinaryStrategy(),
    DichotomicStrategy(),
    SqrtStrategy(),
    TotalStrategy(),
    DyadicStrategy(),
    FermatStrategy(),
)


@dataclass(frozen=True)
class ContinuedFractionAlgorithm(SequenceAlgorithm):
    """Sequence algorithm using continued fraction chains."""

    strategy: Strategy

    def __str__(self) -> str:
        return f"continued_fractions({self.strategy})"

    def find_sequence(self, targets: Iterable[int]) -> Chain:
        ns = sorted_targets(targets)
        if not ns:
            return Chain([1])
        return self._chain(ns)

    def _minchain(self, n: int) -> Chain:
        if bigints.is_pow2(n):
            return Chain(bigints.pow2_up_to(n))
        if n == 3:
            return Chain([1, 2, 3])

        best = None
        for k in self.strategy.k(n):
            assert 1 < k < n, f"{self.strategy} chose k={k} for n={n}"
            c = self._chain([k, n])
            if best is None or len(c) < len(best):
                best = c
        assert best is not None
        return best

    def _chain(self, ns: list[int]) -> Chain:
        """Chain containing every value of the sorted list ns, ending at its max."""
        steps = []
        while len(ns) > 1 and ns[-2] > 1:
            q, r = divmod(ns[-1], ns[-2])
            ns = ns[:-1]
            if r:
                ns = bigints.insert_sorted_unique(ns, r)
            steps.append((q, r))

        c = self._minchain(ns[-1])
        for q, r in reversed(steps):
            c = product(c, self._minchain(q))
            if r:
                c = plus(c, r)
        return c
