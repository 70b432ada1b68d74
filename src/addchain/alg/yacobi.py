"""Yacobi's chain generation algorithm.

Y. Yacobi, "Exponentiating Faster with Addition Chains", EUROCRYPT '90.
A variant of Lempel-Ziv compression: the exponent is scanned from least
to most significant bit and parsed into symbols, each symbol being a
previously seen symbol extended by one bit. The distinct symbols form a
dictionary; a sequence algorithm covers the dictionary and the exponent
is re-assembled from its symbols, most significant first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from addchain.alg.base import ChainAlgorithm, SequenceAlgorithm
from addchain.chain import Chain
from addchain.utils import bigints

logger = logging.getLogger(__name__)

ABSENT = -1
ROOT = 0


@dataclass
class Node:
    """Symbol tree node.

    Children are indices into the tree's node list. No back pointers are
    kept; only forward descent is needed.
    """

    e: int  # extracted bits of this symbol
    l: int  # bit length, may exceed e.bit_length() for leading zeros
    z: int  # zeros skipped before the symbol was first seen
    children: list[int] = field(default_factory=lambda: [ABSENT, ABSENT])


def build_tree(target: int) -> list[Node]:
    """Parse the target into symbols, least significant first.

    Returns the leaf created for each symbol in encounter order. The
    tree itself is discarded.
    """
    bits = bigints.bits(target)
    n = len(bits)
    nodes = [Node(e=1, l=0, z=0)]
    parses: list[Node] = []

    b = 0
    while b < n:
        z = 0
        while b < n and bits[b] == 0:
            z += 1
            b += 1
        if b >= n:
            break

        start = b
        p = ROOT
        bit = 0
        missing = False
        while b < n:
            bit = int(bits[b])
            b += 1
            child = nodes[p].children[bit]
            if child == ABSENT:
                missing = True
                break
            p = child

        leaf = Node(e=bigints.extract(target, start, b), l=b - start, z=z)
        assert leaf.e.bit_length() <= leaf.l
        nodes.append(leaf)
        if missing:
            nodes[p].children[bit] = len(nodes) - 1
        parses.append(leaf)

    return parses


def derive_chain(
    parses: list[Node],
    sequence_algorithm: SequenceAlgorithm,
    target: int,
) -> Chain:
    """Chain for the target from its parsed symbols.

    Builds a chain for the symbol dictionary, then evaluates
    (((e_k) * 2^(z_k + l_{k-1}) + e_{k-1}) * 2^(z_{k-1} + l_{k-2}) + ...) * 2^z_0
    appending every intermediate value.
    """
    dictionary = bigints.sorted_unique(p.e for p in parses)
    c = sequence_algorithm.find_sequence(dictionary)

    x = 0
    for i in range(len(parses) - 1, -1, -1):
        x += parses[i].e
        c.append_clone(x)

        shift = parses[i].z
        if i > 0:
            shift += parses[i - 1].l
        for _ in range(shift):
            x <<= 1
            c.append_clone(x)

    assert x == target, f"symbols reassemble to {x}, expected {target}"
    return c.sorted_unique()


@dataclass(frozen=True)
class YacobiAlgorithm(ChainAlgorithm):
    """Chain algorithm using Yacobi's symbol tree.

    The sequence algorithm builds the chain for the symbol dictionary.
    """

    sequence_algorithm: SequenceAlgorithm

    def __str__(self) -> str:
        return f"yacobi({self.sequence_algorithm})"

    def find_chain(self, target: int) -> Chain:
        if target < 0:
            raise ValueError(f"target must be non-negative, got {target}")
        if target == 0:
            return Chain()

        parses = build_tree(target)
        logger.debug("yacobi: %d-bit target parsed into %d symbols", target.bit_length(), len(parses))
        return derive_chain(parses, self.sequence_algorithm, target)
