"""Dataclass definitions shared across the algorithms."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Term:
    """The integer d * 2^e contributed by one dictionary entry."""

    d: int
    e: int

    @property
    def value(self) -> int:
        return self.d << self.e


@dataclass
class EnsembleConfig:
    """Parameter sweep for the algorithm catalog.

    Widths and thresholds named *_min/*_max are swept by doubling; the
    fine hybrid sweep steps linearly. Tuned for targets of a few hundred
    bits (elliptic curve field sizes).
    """

    window_min: int = 4
    window_max: int = 128
    run_min: int = 16
    run_max: int = 128
    hybrid_min: int = 2
    hybrid_max: int = 8
    hybrid_run_min: int = 16
    hybrid_run_max: int = 64
    fine_min: int = 10
    fine_max: int = 20
    fine_step: int = 2
    fine_offset_max: int = 10  # T = K + offset, offset in 0, 2, ..., max


def doubling(start: int, stop: int) -> list[int]:
    """start, 2*start, 4*start, ... up to and including stop."""
    values = []
    v = start
    while v <= stop:
        values.append(v)
        v *= 2
    return values
