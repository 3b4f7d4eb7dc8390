"""Seekable sequential key generation.

This module implements the binary tree based seekable sequential key
generator of Marson and Poettering (https://eprint.iacr.org/2014/479.pdf).

A sequence produces forward-secure keys: once it has advanced past a key,
nothing left in its state can reproduce that key. Unlike a plain hash chain,
it can also fast-forward to an arbitrary later position with a logarithmic
number of PRF evaluations, which keeps auditing a long log cheap.

The key tree is implicit. Keys are emitted in pre-order, one per tree node,
so a tree of height ``H`` addresses ``2**H - 1`` keys. Only the frontier is
stored: a stack of ``(secret, height)`` entries whose top is the current node
and whose lower entries are the right siblings still waiting to be visited.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import KeyspaceExhausted
from .prf import KEY, LEFT, PRF, RIGHT, SEED

if TYPE_CHECKING:
    from .config import SequenceConfig

logger = logging.getLogger(__name__)


def _wipe(buf: bytearray) -> None:
    """Overwrite ``buf`` with zeros in place."""

    buf[:] = bytes(len(buf))


@dataclass(slots=True)
class FrontierNode:
    """Root of a subtree that has not been consumed yet.

    Args:
        secret: Node secret. Never leaves the owning sequence.
        height: Remaining depth; 1 is a leaf, ``h`` spans ``2**h - 1`` keys.
    """

    secret: bytearray = field(repr=False)
    height: int


class SequenceState:
    """A forward-secure, seekable sequence of keys.

    Instances are not thread-safe and must not be shared between producers.

    Example:
        >>> seq = SequenceState(random_seed(prf), 2**32, prf)
        >>> k0 = seq.key()
        >>> seq.next()
        >>> seq.seek(1000)
    """

    def __init__(self, seed: bytes, max_keys: int, prf: PRF) -> None:
        """
        Create a sequence positioned at its first key.

        Args:
            seed: Secret root material, sized to the PRF's requirement.
            max_keys: Lower bound on the number of keys the sequence must
                address. The tree height is ``max_keys.bit_length()``.
            prf: Label-keyed one-way function used for every derivation.

        Raises:
            TypeError: If ``seed`` is not bytes-like.
            ValueError: If ``max_keys`` is less than 1.
        """
        if not isinstance(seed, (bytes, bytearray, memoryview)):
            raise TypeError("seed must be bytes")
        if max_keys < 1:
            raise ValueError("max_keys must be at least 1")

        self._prf = prf
        self._max_keys = max_keys
        self._height = max_keys.bit_length()
        self._position = 0
        self._nodes: list[FrontierNode] = [FrontierNode(self._derive(SEED, seed), self._height)]

        logger.debug("Created key sequence: height=%d capacity=%d", self._height, self.capacity)

    @classmethod
    def from_config(cls, seed: bytes, config: SequenceConfig) -> SequenceState:
        """Create a sequence from a :class:`~sskg.config.SequenceConfig`."""
        return cls(seed, config.max_keys, config.build_prf())

    @property
    def prf(self) -> PRF:
        return self._prf

    @property
    def max_keys(self) -> int:
        return self._max_keys

    @property
    def height(self) -> int:
        """Height of the whole key tree, fixed at construction."""
        return self._height

    @property
    def capacity(self) -> int:
        """Total number of addressable keys (at least ``max_keys``)."""
        return (1 << self._height) - 1

    @property
    def position(self) -> int:
        """Index of the current key; 0 on construction."""
        return self._position

    @property
    def remaining(self) -> int:
        """Keys still addressable, counting the current one."""
        if not self._nodes:
            return 0
        return self.capacity - self._position

    @property
    def depth(self) -> int:
        """Number of frontier entries currently held."""
        return len(self._nodes)

    @property
    def exhausted(self) -> bool:
        return not self._nodes

    def key(self) -> bytes:
        """Return the current key.

        Raises:
            KeyspaceExhausted: If the sequence is exhausted.
        """
        self._require_active()
        return bytes(self._prf(KEY, self._nodes[-1].secret))

    def next(self) -> None:
        """Advance to the following key.

        (In the literature, this operation is called Evolve.)

        Advancing from the last addressable key succeeds and leaves the
        sequence exhausted.

        Raises:
            KeyspaceExhausted: If the sequence is already exhausted.
        """
        self._require_active()

        node = self._nodes.pop()
        if node.height > 1:
            self._push(self._derive(RIGHT, node.secret), node.height - 1)
            self._push(self._derive(LEFT, node.secret), node.height - 1)
        _wipe(node.secret)
        self._position += 1

        if not self._nodes:
            logger.warning("Key sequence exhausted at position %d", self._position)

    def seek(self, n: int) -> None:
        """Advance ``n`` keys at once.

        Equivalent to ``n`` calls to :meth:`next`, but costs at most two PRF
        evaluations per tree level. Skipped subtrees are discarded without
        ever deriving their secrets.

        Args:
            n: Number of keys to skip. ``0`` is a no-op.

        Raises:
            ValueError: If ``n`` is negative.
            KeyspaceExhausted: If the target lies beyond the last addressable
                key. The sequence is left exhausted.
        """
        if n < 0:
            raise ValueError("n must be non-negative")
        self._require_active()
        if n == 0:
            return

        if n >= self.remaining:
            remaining = self.remaining
            self._exhaust()
            raise KeyspaceExhausted(
                f"cannot advance {n} keys: only {remaining - 1} keys remain after the current one"
            )

        logger.debug("Seeking from position %d by %d", self._position, n)
        target = self._position + n

        node = self._nodes.pop()
        secret, height = node.secret, node.height

        # Drop pending subtrees that end before the target.
        while n >= (1 << height) - 1:
            n -= (1 << height) - 1
            _wipe(secret)
            node = self._nodes.pop()
            secret, height = node.secret, node.height

        while n > 0:
            height -= 1
            if height <= 0:
                _wipe(secret)
                self._exhaust()
                raise KeyspaceExhausted("keyspace exhausted")

            subtree = 1 << height
            if n < subtree:
                self._push(self._derive(RIGHT, secret), height)
                child = self._derive(LEFT, secret)
                n -= 1
            else:
                child = self._derive(RIGHT, secret)
                n -= subtree
            _wipe(secret)
            secret = child

        self._push(secret, height)
        self._position = target

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(height={self._height}, position={self._position}, "
            f"depth={len(self._nodes)}, exhausted={self.exhausted})"
        )

    def __copy__(self) -> SequenceState:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo: dict) -> SequenceState:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def _derive(self, label: bytes, secret: bytes | bytearray) -> bytearray:
        return bytearray(self._prf(label, secret))

    def _push(self, secret: bytearray, height: int) -> None:
        self._nodes.append(FrontierNode(secret, height))

    def _require_active(self) -> None:
        if not self._nodes:
            raise KeyspaceExhausted("keyspace exhausted")

    def _exhaust(self) -> None:
        for node in self._nodes:
            _wipe(node.secret)
        self._nodes.clear()
        logger.warning("Key sequence exhausted at position %d", self._position)
