"""Algorithm contracts.

A sequence algorithm covers a set of targets with one chain; a chain
algorithm produces a chain ending at a single target. Concrete
algorithms are frozen dataclasses holding only their parameters, and
str(algorithm) names them for reporting.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from addchain.chain import Chain
from addchain.utils import bigints


class SequenceNotFound(RuntimeError):
    """A sequence algorithm could not cover its targets."""


class SequenceAlgorithm(ABC):
    """Finds a chain containing every value of a target set."""

    @abstractmethod
    def find_sequence(self, targets: Iterable[int]) -> Chain:
        ...


class ChainAlgorithm(ABC):
    """Finds a chain ending at one target."""

    @abstractmethod
    def find_chain(self, target: int) -> Chain:
        ...


def sorted_targets(targets: Iterable[int]) -> list[int]:
    """Sort and deduplicate a target set, rejecting non-positive values."""
    ns = bigints.sorted_unique(targets)
    if ns and ns[0] < 1:
        raise ValueError(f"sequence targets must be positive, got {ns[0]}")
    return ns


@dataclass(frozen=True)
class AsChainAlgorithm(ChainAlgorithm):
    """Adapts a sequence algorithm to the single target contract."""

    sequence_algorithm: SequenceAlgorithm

    def __str__(self) -> str:
        return str(self.sequence_algorithm)

    def find_chain(self, target: int) -> Chain:
        if target < 0:
            raise ValueError(f"target must be non-negative, got {target}")
        if target == 0:
            return Chain()
        return self.sequence_algorithm.find_sequence([target])
