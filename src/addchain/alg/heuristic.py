"""Heuristic addition sequences.

Implements the Bos-Coster framework: keep a protosequence of values
still to be produced, repeatedly remove the largest and let a heuristic
suggest smaller values from which it can be formed. The heuristics are
the "Halving", "Approximation" and delta rules of Bos and Coster,
"Addition Chain Heuristics" (CRYPTO '89).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from addchain.alg.base import SequenceAlgorithm, SequenceNotFound, sorted_targets
from addchain.chain import Chain
from addchain.utils import bigints


class Heuristic(ABC):
    """Suggests insertions for the largest protosequence value."""

    @abstractmethod
    def suggest(self, f: list[int], target: int) -> list[int] | None:
        """Suggest values to insert so that target becomes reachable.

        f holds the remaining protosequence, sorted and distinct, with
        target already removed. Returns None when the rule does not apply.
        """


@dataclass(frozen=True)
class UseFirst(Heuristic):
    """Composite heuristic returning the first non-empty suggestion."""

    heuristics: tuple[Heuristic, ...]

    def __str__(self) -> str:
        return "use_first(" + ",".join(str(h) for h in self.heuristics) + ")"

    def suggest(self, f: list[int], target: int) -> list[int] | None:
        for h in self.heuristics:
            insert = h.suggest(f, target)
            if insert:
                return insert
        return None


def use_first(*heuristics: Heuristic) -> UseFirst:
    return UseFirst(tuple(heuristics))


@dataclass(frozen=True)
class Halving(Heuristic):
    """Applies when the target is at least twice the next largest value.

    With u = floor(log2(target / next)) and k = target >> u, insert
    k, 2k, ..., k*2^u and the difference target - k*2^u.
    """

    def __str__(self) -> str:
        return "halving"

    def suggest(self, f: list[int], target: int) -> list[int] | None:
        r = target // f[-1]
        if r.bit_length() < 2:
            return None
        u = r.bit_length() - 1
        k = target >> u

        kshifts = [k << e for e in range(u + 1)]
        d = target - kshifts[u]
        if d == 0:
            return kshifts[:u]
        return bigints.insert_sorted_unique(kshifts, d)


@dataclass(frozen=True)
class DeltaLargest(Heuristic):
    """Insert the difference between the target and the next largest value."""

    def __str__(self) -> str:
        return "delta_largest"

    def suggest(self, f: list[int], target: int) -> list[int] | None:
        delta = target - f[-1]
        assert delta > 0, "protosequence must be below the target"
        return [delta]


@dataclass(frozen=True)
class Approximation(Heuristic):
    """Find a + b closest to (and below) the target and insert a + delta."""

    def __str__(self) -> str:
        return "approximation"

    def suggest(self, f: list[int], target: int) -> list[int] | None:
        best = None
        min_delta = None
        for i in range(len(f)):
            for j in range(i, len(f)):
                a, b = f[i], f[j]
                delta = target - (a + b)
                if delta < 0:
                    break
                insert = a + delta
                if bigints.contains_sorted(insert, f):
                    return [insert]
                if min_delta is None or delta < min_delta:
                    min_delta = delta
                    best = insert
        if best is None:
            return None
        return [best]


@dataclass(frozen=True)
class HeuristicAlgorithm(SequenceAlgorithm):
    """Sequence algorithm driven by a heuristic at each step."""

    heuristic: Heuristic

    def __str__(self) -> str:
        return f"heuristic({self.heuristic})"

    def find_sequence(self, targets: Iterable[int]) -> Chain:
        ns = sorted_targets(targets)
        if not ns or ns[-1] < 2:
            return Chain([1])

        proto = bigints.merge_unique([1, 2], ns)
        produced = []
        while len(proto) > 2:
            target = proto.pop()
            produced.append(target)

            insert = self.heuristic.suggest(proto, target)
            if not insert:
                raise SequenceNotFound(f"{self}: no suggestion for {target}")
            proto = bigints.merge_unique(proto, insert)

        return Chain(bigints.merge_unique([1, 2], produced))
