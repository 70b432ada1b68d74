"""Addition chains and the programs that produce them.

A chain is an ordered sequence of positive integers starting at 1 in
which every later element is the sum of two earlier elements (a
doubling sums an element with itself). Each chain element costs one
multiplication (or one point addition) when the chain drives an
exponentiation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


class ChainError(ValueError):
    """Raised when a sequence is not a valid addition chain."""


@dataclass(frozen=True)
class Op:
    """One chain step: the element at this position is c[i] + c[j]."""

    i: int
    j: int

    @property
    def is_double(self) -> bool:
        return self.i == self.j

    def operands(self) -> list[int]:
        if self.is_double:
            return [self.i]
        return [self.i, self.j]


class Program(list):
    """Sequence of ops producing chain positions 1, 2, ..."""

    def doubles(self) -> int:
        return sum(1 for op in self if op.is_double)

    def adds(self) -> int:
        return len(self) - self.doubles()

    def cost(self) -> tuple[int, int]:
        """Return (doubles, adds)."""
        d = self.doubles()
        return d, len(self) - d


class Chain(list):
    """Addition chain of arbitrary precision integers."""

    def append_clone(self, value: int) -> None:
        """Append an independent copy of value.

        Callers reuse one accumulator across many appends; the copy
        detaches numpy scalars and int subclasses from it.
        """
        self.append(int(value))

    def clone(self) -> Chain:
        return Chain(self)

    def end(self) -> int:
        """Last element of the chain."""
        return self[-1]

    def sorted_unique(self) -> Chain:
        """Return the ascending, duplicate free form of the chain."""
        return Chain(sorted(set(self)))

    def is_ascending(self) -> bool:
        return all(a < b for a, b in zip(self, self[1:]))

    def ops(self, k: int) -> list[Op]:
        """All ops producing position k from earlier positions."""
        index = {x: i for i, x in enumerate(self[:k])}
        target = self[k]
        found = []
        for i in range(k):
            j = index.get(target - self[i])
            if j is not None and j >= i:
                found.append(Op(i, j))
        return found

    def op(self, k: int) -> Op:
        """First op producing position k."""
        found = self.ops(k)
        if not found:
            raise ChainError(f"position {k} has no preceding operation")
        return found[0]

    def program(self) -> Program:
        """Build the program generating this chain.

        Raises ChainError if the chain is not a valid addition chain.
        """
        if len(self) == 0:
            raise ChainError("chain empty")
        if self[0] != 1:
            raise ChainError("chain must start with 1")
        if 0 in self:
            raise ChainError("chain contains zero")
        if len(set(self)) != len(self):
            raise ChainError("chain contains duplicates")

        p = Program()
        for k in range(1, len(self)):
            p.append(self.op(k))
        return p

    def validate(self) -> None:
        self.program()

    def produces(self, target: int) -> None:
        """Check that this is a valid chain ending at target."""
        self.validate()
        if self.end() != target:
            raise ChainError(f"chain ends at {self.end()}, expected {target}")

    def superset(self, targets: Iterable[int]) -> None:
        """Check that this is a valid chain containing every target."""
        self.validate()
        present = set(self)
        for t in targets:
            if t not in present:
                raise ChainError(f"chain does not contain {t}")


def product(a: Chain, b: Chain) -> Chain:
    """Chain for a.end() * b.end(): a followed by a.end() * b[1:]."""
    c = a.clone()
    last = c.end()
    for x in b[1:]:
        c.append(last * x)
    return c


def plus(a: Chain, x: int) -> Chain:
    """Chain a extended by a.end() + x."""
    c = a.clone()
    c.append(c.end() + x)
    return c
