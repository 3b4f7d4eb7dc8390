"""Shared exceptions for :mod:`sskg`.

The library raises a small set of domain-specific exceptions. Argument misuse
(negative seek distances, non-bytes seeds) uses the builtin ``ValueError`` and
``TypeError`` instead.
"""

from __future__ import annotations


class SequenceError(Exception):
    """Base error for key sequence operations."""


class KeyspaceExhausted(SequenceError):
    """Raised when advancing past the capacity declared at construction.

    The sequence that raised it is terminal; construct a new one to continue.
    """


class ConfigError(SequenceError):
    """Raised when a :class:`~sskg.config.SequenceConfig` is invalid."""
