"""Addition chain search.

Finds short addition chains for large integers of cryptographic
interest: exponents in modular exponentiation and scalars in elliptic
curve point multiplication.
"""

from __future__ import annotations

from addchain.chain import Chain, ChainError, Op, Program

__version__ = "0.1.0"

__all__ = [
    "Chain",
    "ChainError",
    "Op",
    "Program",
    "__version__",
]
