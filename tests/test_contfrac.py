"""Tests for continued fraction addition sequences."""

from __future__ import annotations

import pytest

from addchain.alg.base import AsChainAlgorithm
from addchain.alg.contfrac import (
    STRATEGIES,
    BinaryStrategy,
    CoBinaryStrategy,
    ContinuedFractionAlgorithm,
    DichotomicStrategy,
    DyadicStrategy,
    FermatStrategy,
    SqrtStrategy,
    TotalStrategy,
)


class TestStrategies:
    """Choice of the auxiliary integer k."""

    def test_binary(self):
        assert BinaryStrategy().k(21) == [10]

    def test_co_binary(self):
        assert CoBinaryStrategy().k(21) == [10]
        assert CoBinaryStrategy().k(22) == [10]

    def test_dichotomic(self):
        assert DichotomicStrategy().k(100) == [12]

    def test_sqrt(self):
        assert SqrtStrategy().k(100) == [10]

    def test_total(self):
        assert TotalStrategy().k(6) == [2, 3, 4, 5]

    def test_dyadic(self):
        assert DyadicStrategy().k(100) == [50, 25, 12, 6, 3]

    def test_fermat(self):
        assert FermatStrategy().k(1000) == [500, 250, 62, 3]

    def test_singletons(self):
        singletons = [str(s) for s in STRATEGIES if s.singleton]
        assert singletons == ["binary", "co_binary", "dichotomic", "sqrt"]


class TestContinuedFractionAlgorithm:
    """Chains from every strategy."""

    @pytest.fixture(params=[s for s in STRATEGIES if s.singleton], ids=str)
    def algorithm(self, request):
        return ContinuedFractionAlgorithm(request.param)

    def test_single_targets(self, algorithm, structured_targets, random_targets):
        a = AsChainAlgorithm(algorithm)
        for n in structured_targets + random_targets:
            a.find_chain(n).sorted_unique().produces(n)

    def test_covers_targets(self, algorithm):
        targets = [3, 10, 100, 12345]
        c = algorithm.find_sequence(targets)
        c.sorted_unique().superset(targets)

    @pytest.mark.parametrize("strategy", [DyadicStrategy(), FermatStrategy()], ids=str)
    def test_multi_valued_strategies(self, strategy):
        a = ContinuedFractionAlgorithm(strategy)
        for n in range(1, 200):
            a.find_sequence([n]).sorted_unique().produces(n)

    def test_total_strategy_small(self):
        a = ContinuedFractionAlgorithm(TotalStrategy())
        for n in range(1, 14):
            c = a.find_sequence([n]).sorted_unique()
            c.produces(n)

    def test_total_not_longer_than_binary(self):
        total = ContinuedFractionAlgorithm(TotalStrategy())
        binary = ContinuedFractionAlgorithm(BinaryStrategy())
        for n in range(5, 14):
            t = total.find_sequence([n])
            b = binary.find_sequence([n])
            assert len(t) <= len(b)

    def test_power_of_two(self):
        a = ContinuedFractionAlgorithm(BinaryStrategy())
        assert a.find_sequence([16]) == [1, 2, 4, 8, 16]

    def test_one(self):
        a = ContinuedFractionAlgorithm(BinaryStrategy())
        assert a.find_sequence([1]) == [1]

    def test_name(self):
        a = ContinuedFractionAlgorithm(DichotomicStrategy())
        assert str(a) == "continued_fractions(dichotomic)"
