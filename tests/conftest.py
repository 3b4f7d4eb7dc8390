"""Test configuration for sskg package."""

from __future__ import annotations

from typing import Callable

import pytest

from sskg import HMACPRF, SequenceState


class RecordingPRF:
    """Wraps a PRF and remembers every output it produced."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.outputs: list[bytes] = []

    @property
    def output_size(self) -> int:
        return self.inner.output_size

    @property
    def seed_size(self) -> int:
        return self.inner.seed_size

    def __call__(self, label: bytes, secret: bytes) -> bytes:
        out = self.inner(label, secret)
        self.outputs.append(out)
        return out


@pytest.fixture
def prf() -> HMACPRF:
    """HMAC-SHA256 PRF."""
    return HMACPRF()


@pytest.fixture
def zero_seed(prf: HMACPRF) -> bytes:
    """All-zero seed of the PRF's recommended size."""
    return bytes(prf.seed_size)


@pytest.fixture
def make_sequence(prf: HMACPRF, zero_seed: bytes) -> Callable[[int], SequenceState]:
    """Factory for identically seeded sequences of a given capacity."""

    def _make(max_keys: int) -> SequenceState:
        return SequenceState(zero_seed, max_keys, prf)

    return _make


@pytest.fixture
def recording_prf(prf: HMACPRF) -> RecordingPRF:
    return RecordingPRF(prf)
