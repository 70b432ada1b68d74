"""Ensemble of chain algorithms for large targets.

Crosses a parameter sweep of dictionary decomposers with heuristic and
continued fraction sequence algorithms, adds a runs algorithm per
sequence algorithm, and wraps every entry in the optimization pass.
The catalog is rebuilt from scratch on every call and its order is
fixed, so catalog indices are stable between runs.
"""

from __future__ import annotations

import logging

from addchain.alg.base import ChainAlgorithm, SequenceAlgorithm
from addchain.alg.contfrac import STRATEGIES, ContinuedFractionAlgorithm
from addchain.alg.dictionary import (
    Decomposer,
    DictionaryAlgorithm,
    Hybrid,
    RunLength,
    RunsAlgorithm,
    SlidingWindow,
)
from addchain.alg.heuristic import (
    Approximation,
    DeltaLargest,
    Halving,
    HeuristicAlgorithm,
    use_first,
)
from addchain.alg.opt import OptimizedAlgorithm
from addchain.utils.types import EnsembleConfig, doubling

logger = logging.getLogger(__name__)


def sequence_algorithms() -> list[SequenceAlgorithm]:
    """Heuristic algorithms followed by the singleton continued fraction ones."""
    seqalgs: list[SequenceAlgorithm] = [
        HeuristicAlgorithm(use_first(Halving(), DeltaLargest())),
        HeuristicAlgorithm(use_first(Halving(), Approximation())),
    ]
    for strategy in STRATEGIES:
        if strategy.singleton:
            seqalgs.append(ContinuedFractionAlgorithm(strategy))
    return seqalgs


def decomposers(config: EnsembleConfig | None = None) -> list[Decomposer]:
    """Sliding window, run length and hybrid decomposers over the sweep."""
    cfg = config or EnsembleConfig()
    result: list[Decomposer] = []

    for k in doubling(cfg.window_min, cfg.window_max):
        result.append(SlidingWindow(K=k))
        result.append(SlidingWindow(K=k, S=True))
        result.append(SlidingWindow(K=k, Z=k // 2, S=True))

    result.append(RunLength(T=0))
    for t in doubling(cfg.run_min, cfg.run_max):
        result.append(RunLength(T=t))

    for k in range(cfg.hybrid_min, cfg.hybrid_max + 1):
        result.append(Hybrid(K=k))
        result.append(Hybrid(K=k, S=True))
        result.append(Hybrid(K=k, Z=k // 2, S=True))
        for t in doubling(cfg.hybrid_run_min, cfg.hybrid_run_max):
            result.append(Hybrid(K=k, T=t))
            result.append(Hybrid(K=k, T=t, Z=k // 2, S=True))

    for k in range(cfg.fine_min, cfg.fine_max + 1, cfg.fine_step):
        for offset in range(0, cfg.fine_offset_max + 1, cfg.fine_step):
            result.append(Hybrid(K=k, T=k + offset, Z=k // 2, S=True))

    return result


def ensemble(config: EnsembleConfig | None = None) -> list[ChainAlgorithm]:
    """Build the catalog of optimized chain algorithms.

    Order: one dictionary algorithm per (decomposer, sequence algorithm)
    pair, decomposer-major, then one runs algorithm per sequence
    algorithm.
    """
    seqalgs = sequence_algorithms()
    decomps = decomposers(config)

    algorithms: list[ChainAlgorithm] = []
    for decomp in decomps:
        for seqalg in seqalgs:
            algorithms.append(DictionaryAlgorithm(decomp, seqalg))

    for seqalg in seqalgs:
        algorithms.append(RunsAlgorithm(seqalg))

    for i, a in enumerate(algorithms):
        algorithms[i] = OptimizedAlgorithm(a)

    logger.debug(
        "built ensemble: %d decomposers x %d sequence algorithms, %d entries",
        len(decomps), len(seqalgs), len(algorithms),
    )
    return algorithms
