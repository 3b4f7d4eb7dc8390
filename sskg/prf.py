"""Label-keyed pseudorandom functions.

A sequence only ever calls its PRF as ``prf(label, secret)`` with one of four
domain-separation labels. Any one-way function whose outputs for distinct
labels are independent satisfies that contract; this module provides thin
wrappers around :pypi:`cryptography` for three common choices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

SEED = b"seed"
KEY = b"key"
LEFT = b"left"
RIGHT = b"right"

LABELS = (SEED, KEY, LEFT, RIGHT)


class PRF(Protocol):
    """A deterministic, one-way function of ``(label, secret)``.

    Implementations must return ``output_size`` bytes for every call.
    ``seed_size`` is the recommended length of the root seed; it is advisory
    and never enforced by :class:`~sskg.sequence.SequenceState`.
    """

    @property
    def output_size(self) -> int: ...

    @property
    def seed_size(self) -> int: ...

    def __call__(self, label: bytes, secret: bytes) -> bytes: ...


def _hmac(algorithm: hashes.HashAlgorithm, key: bytes, data: bytes) -> bytes:
    h = hmac.HMAC(key, algorithm)
    h.update(data)
    return h.finalize()


@dataclass(frozen=True, slots=True)
class HMACPRF:
    """``HMAC(key=secret, msg=label)``.

    The output size is fixed to the digest size of ``algorithm``.
    """

    algorithm: hashes.HashAlgorithm = field(default_factory=hashes.SHA256)

    @property
    def output_size(self) -> int:
        return self.algorithm.digest_size

    @property
    def seed_size(self) -> int:
        return self.algorithm.block_size or self.algorithm.digest_size

    def __call__(self, label: bytes, secret: bytes) -> bytes:
        return _hmac(self.algorithm, secret, label)


@dataclass(frozen=True, slots=True)
class HKDFPRF:
    """HKDF with ``ikm=secret`` and ``info=label``.

    Args:
        algorithm: Hash used for extract and expand.
        length: Output size in bytes. Also the size of every internal node
            secret, since node secrets are PRF outputs.
        salt: Optional fixed salt. Binding a whole sequence to an application
            key is done by passing that key here.
    """

    algorithm: hashes.HashAlgorithm = field(default_factory=hashes.SHA256)
    length: int = 32
    salt: bytes | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("length must be positive")
        if self.length > 255 * self.algorithm.digest_size:
            raise ValueError("length is too large for HKDF with this hash")

    @property
    def output_size(self) -> int:
        return self.length

    @property
    def seed_size(self) -> int:
        return self.length

    def __call__(self, label: bytes, secret: bytes) -> bytes:
        hkdf = HKDF(
            algorithm=self.algorithm,
            length=self.length,
            salt=self.salt,
            info=label,
        )
        return hkdf.derive(secret)


@dataclass(frozen=True, slots=True)
class TLS12PRF:
    """The TLS 1.2 pseudorandom function (RFC 5246, section 5).

    Computes ``P_hash(secret, label)`` and truncates it to ``length`` bytes.
    The TLS seed is left empty; the label alone separates the domains.
    """

    algorithm: hashes.HashAlgorithm = field(default_factory=hashes.SHA256)
    length: int = 32

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("length must be positive")

    @property
    def output_size(self) -> int:
        return self.length

    @property
    def seed_size(self) -> int:
        return self.length

    def __call__(self, label: bytes, secret: bytes) -> bytes:
        return _p_hash(self.algorithm, secret, label, self.length)


def _p_hash(algorithm: hashes.HashAlgorithm, secret: bytes, seed: bytes, length: int) -> bytes:
    """P_hash as defined in RFC 4346, section 5."""

    out = bytearray()
    a = _hmac(algorithm, secret, seed)
    while len(out) < length:
        out += _hmac(algorithm, secret, a + seed)
        a = _hmac(algorithm, secret, a)
    return bytes(out[:length])


_HASHES: dict[str, type[hashes.HashAlgorithm]] = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


def prf_from_name(name: str, *, length: int | None = None) -> PRF:
    """Build a PRF from a ``"<family>-<hash>"`` name such as ``"hkdf-sha256"``.

    Args:
        name: One of ``hmac``, ``hkdf`` or ``tls12`` followed by ``sha256``,
            ``sha384`` or ``sha512``. Case-insensitive.
        length: Output size for the HKDF and TLS 1.2 families. HMAC output
            is always the digest size, so any other value is rejected.

    Raises:
        ValueError: If the name or length is not supported.
    """

    family, sep, hash_name = name.strip().lower().partition("-")
    if not sep or hash_name not in _HASHES:
        raise ValueError(f"Unsupported PRF: {name!r}")

    algorithm = _HASHES[hash_name]()

    if family == "hmac":
        if length is not None and length != algorithm.digest_size:
            raise ValueError(f"{name} output size is fixed at {algorithm.digest_size} bytes")
        return HMACPRF(algorithm)
    if family == "hkdf":
        return HKDFPRF(algorithm, length=32 if length is None else length)
    if family == "tls12":
        return TLS12PRF(algorithm, length=32 if length is None else length)

    raise ValueError(f"Unsupported PRF: {name!r}")
