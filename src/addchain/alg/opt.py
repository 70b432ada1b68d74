"""Chain optimization.

Removes chain positions that no later position depends on. A position
is required when it is an operand of the only op producing some later
position; any other position can go as long as every later position
keeps at least one op that avoids it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from addchain.alg.base import ChainAlgorithm
from addchain.chain import Chain, Op

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizedAlgorithm(ChainAlgorithm):
    """Applies chain optimization to the output of a wrapped algorithm."""

    algorithm: ChainAlgorithm

    def __str__(self) -> str:
        return f"opt({self.algorithm})"

    def find_chain(self, target: int) -> Chain:
        c = self.algorithm.find_chain(target)
        return prune(c)


def prune(c: Chain) -> Chain:
    """Drop positions of an ascending chain that are never required.

    The first and last positions are always kept.
    """
    n = len(c)
    ops: list[list[Op]] = [[]] + [c.ops(k) for k in range(1, n)]

    required = [0] * n
    for k in range(1, n):
        if len(ops[k]) == 1:
            for i in ops[k][0].operands():
                required[i] += 1

    removed = set()
    for k in range(1, n - 1):
        if required[k]:
            continue

        pruned = {}
        for m in range(k + 1, n):
            if m in removed:
                continue
            pruned[m] = [op for op in ops[m] if k not in (op.i, op.j)]
        if any(not p for p in pruned.values()):
            continue

        for m, p in pruned.items():
            if len(p) == 1 and len(ops[m]) > 1:
                for i in p[0].operands():
                    required[i] += 1
            ops[m] = p
        removed.add(k)

    if removed:
        logger.debug("pruned %d of %d chain positions", len(removed), n)
    return Chain(x for i, x in enumerate(c) if i not in removed)
