"""Seekable sequential key generators.

The main entry point is :class:`~sskg.sequence.SequenceState`, which derives a
forward-secure sequence of keys from a seed and can fast-forward to any later
key in a logarithmic number of steps. Derivations go through a pluggable
label-keyed PRF from :mod:`sskg.prf`.
"""

from __future__ import annotations

from .config import PRFAlgorithm, SequenceConfig
from .errors import ConfigError, KeyspaceExhausted, SequenceError
from .prf import PRF, HKDFPRF, HMACPRF, TLS12PRF, prf_from_name
from .random import random_seed
from .sequence import FrontierNode, SequenceState

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "FrontierNode",
    "HKDFPRF",
    "HMACPRF",
    "KeyspaceExhausted",
    "PRF",
    "PRFAlgorithm",
    "SequenceConfig",
    "SequenceError",
    "SequenceState",
    "TLS12PRF",
    "prf_from_name",
    "random_seed",
]
