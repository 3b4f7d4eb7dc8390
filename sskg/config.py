"""Configuration management for key sequences."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import os

from .errors import ConfigError
from .prf import PRF, prf_from_name


class PRFAlgorithm(Enum):
    """Supported PRF instantiations."""
    HMAC_SHA256 = "hmac-sha256"
    HMAC_SHA512 = "hmac-sha512"
    HKDF_SHA256 = "hkdf-sha256"
    HKDF_SHA512 = "hkdf-sha512"
    TLS12_SHA256 = "tls12-sha256"
    TLS12_SHA384 = "tls12-sha384"


# Epoch counts covering roughly a century.
DAYS_PER_CENTURY = 36525
SECONDS_PER_CENTURY = DAYS_PER_CENTURY * 24 * 60 * 60


@dataclass
class SequenceConfig:
    """Key sequence configuration settings."""

    max_keys: int = 2**32
    algorithm: PRFAlgorithm = PRFAlgorithm.HMAC_SHA256
    key_size: Optional[int] = None

    @classmethod
    def daily(cls) -> SequenceConfig:
        """Create a configuration for one key per day."""
        return cls(max_keys=DAYS_PER_CENTURY)

    @classmethod
    def per_second(cls) -> SequenceConfig:
        """Create a configuration for one key per second."""
        return cls(max_keys=SECONDS_PER_CENTURY)

    @classmethod
    def from_environment(cls, prefix: str = "SSKG_") -> SequenceConfig:
        """
        Create a configuration from environment variables.

        Reads ``<prefix>MAX_KEYS``, ``<prefix>ALGORITHM`` and
        ``<prefix>KEY_SIZE``; unset variables keep their defaults.

        Args:
            prefix: Environment variable name prefix.

        Returns:
            Configuration object. Call :meth:`validate` before use.

        Raises:
            ConfigError: If a variable cannot be parsed.
        """
        config = cls()

        max_keys = os.getenv(f"{prefix}MAX_KEYS")
        if max_keys is not None:
            config.max_keys = _parse_int(f"{prefix}MAX_KEYS", max_keys)

        algorithm = os.getenv(f"{prefix}ALGORITHM")
        if algorithm is not None:
            try:
                config.algorithm = PRFAlgorithm(algorithm.strip().lower())
            except ValueError:
                raise ConfigError(f"{prefix}ALGORITHM: unsupported algorithm {algorithm!r}") from None

        key_size = os.getenv(f"{prefix}KEY_SIZE")
        if key_size is not None:
            config.key_size = _parse_int(f"{prefix}KEY_SIZE", key_size)

        return config

    def validate(self) -> List[str]:
        """
        Validate current configuration.

        Returns:
            List of validation errors. Empty if valid.
        """
        errors = []

        if self.max_keys < 1:
            errors.append("max_keys must be at least 1")

        if self.key_size is not None:
            if self.key_size <= 0:
                errors.append("key_size must be positive")
            elif self.algorithm.value.startswith("hmac-"):
                try:
                    prf_from_name(self.algorithm.value, length=self.key_size)
                except ValueError as exc:
                    errors.append(str(exc))

        return errors

    def build_prf(self) -> PRF:
        """
        Build the configured PRF.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        errors = self.validate()
        if errors:
            raise ConfigError("; ".join(errors))
        try:
            return prf_from_name(self.algorithm.value, length=self.key_size)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip(), 0)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
