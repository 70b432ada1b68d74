"""Tests for chains and programs."""

from __future__ import annotations

import numpy as np
import pytest

from addchain.chain import Chain, ChainError, Op, plus, product


class TestProgram:
    """Tests for program construction and validation."""

    def test_binary_chain(self):
        c = Chain([1, 2, 3, 6, 12, 13])
        p = c.program()
        assert p == [Op(0, 0), Op(0, 1), Op(2, 2), Op(3, 3), Op(0, 4)]

    def test_cost_counts_doubles_and_adds(self):
        p = Chain([1, 2, 3, 6, 12, 13]).program()
        assert p.cost() == (3, 2)
        assert p.doubles() == 3
        assert p.adds() == 2

    def test_empty_chain_rejected(self):
        with pytest.raises(ChainError):
            Chain().validate()

    def test_must_start_at_one(self):
        with pytest.raises(ChainError):
            Chain([2, 4]).validate()

    def test_duplicates_rejected(self):
        with pytest.raises(ChainError):
            Chain([1, 2, 2, 4]).validate()

    def test_zero_rejected(self):
        with pytest.raises(ChainError):
            Chain([1, 0, 2]).validate()

    def test_unreachable_position(self):
        with pytest.raises(ChainError, match="position 2"):
            Chain([1, 2, 5]).validate()

    def test_ops_lists_every_pair(self):
        c = Chain([1, 2, 3, 4])
        assert c.ops(3) == [Op(0, 2), Op(1, 1)]
        assert c.op(3) == Op(0, 2)

    def test_op_operands(self):
        assert Op(1, 1).operands() == [1]
        assert Op(0, 2).operands() == [0, 2]
        assert Op(1, 1).is_double


class TestChecks:
    """Tests for produces / superset."""

    def test_produces(self):
        Chain([1, 2, 4, 5]).produces(5)

    def test_produces_wrong_end(self):
        with pytest.raises(ChainError):
            Chain([1, 2, 4, 5]).produces(4)

    def test_superset(self):
        Chain([1, 2, 3, 5, 10]).superset([3, 10])

    def test_superset_missing(self):
        with pytest.raises(ChainError):
            Chain([1, 2, 3, 5, 10]).superset([4])

    def test_is_ascending(self):
        assert Chain([1, 2, 3]).is_ascending()
        assert not Chain([1, 2, 2]).is_ascending()


class TestAppendClone:
    """Appended values must not track the accumulator."""

    def test_accumulator_reuse(self):
        c = Chain([1])
        x = 1
        for _ in range(3):
            x <<= 1
            c.append_clone(x)
        assert c == [1, 2, 4, 8]

    def test_numpy_scalar_detached(self):
        c = Chain()
        acc = np.array([7], dtype=np.int64)
        c.append_clone(acc[0])
        acc[0] = 9
        assert c == [7]
        assert type(c[0]) is int

    def test_sorted_unique(self):
        c = Chain([5, 1, 2, 5, 4, 1])
        assert c.sorted_unique() == [1, 2, 4, 5]
        assert isinstance(c.sorted_unique(), Chain)


class TestComposition:
    """Tests for product and plus."""

    def test_product(self):
        a = Chain([1, 2, 3])
        b = Chain([1, 2, 4, 5])
        c = product(a, b)
        assert c == [1, 2, 3, 6, 12, 15]
        c.produces(15)

    def test_product_does_not_mutate(self):
        a = Chain([1, 2])
        product(a, Chain([1, 2]))
        assert a == [1, 2]

    def test_plus(self):
        c = plus(Chain([1, 2, 4]), 1)
        assert c == [1, 2, 4, 5]
        c.produces(5)
