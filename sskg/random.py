"""Secure seed generation."""

from __future__ import annotations

import os

from .prf import PRF


def random_seed(size: PRF | int) -> bytes:
    """Return a fresh root seed.

    Args:
        size: Either a byte count or a PRF, in which case its ``seed_size``
            is used.
    """

    length = size if isinstance(size, int) else size.seed_size
    if length <= 0:
        raise ValueError("seed length must be positive")
    return os.urandom(length)
