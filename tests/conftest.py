"""Shared fixtures for the chain algorithm tests."""

from __future__ import annotations

import numpy as np
import pytest

# Targets with distinctive bit patterns.
STRUCTURED_TARGETS = [
    1,
    2,
    3,
    5,
    7,
    11,
    31,
    64,
    127,
    255,
    0b1011_0111,
    0xAAAA,
    0x5555,
    (1 << 40) + 1,
    (1 << 61) - 1,
    0xDEADBEEF,
]


def random_target(rng: np.random.Generator, n_bits: int) -> int:
    """Random integer with exactly n_bits bits."""
    x = int.from_bytes(rng.bytes((n_bits + 7) // 8), "big")
    x &= (1 << n_bits) - 1
    return x | (1 << (n_bits - 1))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def structured_targets():
    return list(STRUCTURED_TARGETS)


@pytest.fixture
def random_targets(rng):
    return [random_target(rng, n) for n in (8, 16, 32, 64, 64, 128)]


@pytest.fixture
def make_target(rng):
    """Factory for random targets of a given bit length."""

    def make(n_bits: int) -> int:
        return random_target(rng, n_bits)

    return make
