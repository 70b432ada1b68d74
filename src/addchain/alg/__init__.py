"""Chain finding algorithms.

Sequence algorithms (heuristic, continued fraction) cover target sets;
chain algorithms (dictionary, runs, Yacobi, optimized) produce a chain
for one target. ensemble() assembles the full catalog.
"""

from __future__ import annotations

from addchain.alg.base import (
    AsChainAlgorithm,
    ChainAlgorithm,
    SequenceAlgorithm,
    SequenceNotFound,
)
from addchain.alg.ensemble import ensemble
from addchain.alg.yacobi import YacobiAlgorithm

__all__ = [
    "AsChainAlgorithm",
    "ChainAlgorithm",
    "SequenceAlgorithm",
    "SequenceNotFound",
    "YacobiAlgorithm",
    "ensemble",
]
