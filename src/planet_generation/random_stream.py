"""Seeded random streams for deterministic planet generation.

Every facet of a planet (day attributes, events, satellites, lifeforms,
terrain, biome) draws from its own stream. A stream is identified by a
string key built from the planet seed plus a namespace and/or numeric
key, e.g. ``"Terra-1000-events-12"``. The key is hashed with SHA-256 into
a 128-bit seed for a ``numpy.random.Generator`` backed by PCG64, which
gives the same sequence on every platform and every run.

Streams are never shared between facets, so the number of draws one
facet makes can never shift the values another facet sees.
"""

import hashlib
from typing import Any, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


def sub_seed(seed: str, *keys: Any) -> str:
    """Build the key of a sub-stream.

    Args:
        seed: Parent seed string
        *keys: Namespace strings and/or numeric keys appended in order

    Returns:
        ``"<seed>-<key1>-<key2>..."``
    """
    return "-".join([seed, *(str(k) for k in keys)])


def _seed_to_int(seed: str) -> int:
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:16], byteorder="big")


class SeededRandomStream:
    """A reproducible stream of floats in [0, 1) derived from a string.

    The empty string is a valid seed. Two streams built from equal seed
    strings always produce equal sequences.
    """

    def __init__(self, seed: str):
        self.seed = seed
        self._generator = np.random.Generator(np.random.PCG64(_seed_to_int(seed)))

    def __repr__(self) -> str:
        return f"SeededRandomStream({self.seed!r})"

    def next(self) -> float:
        """Draw the next float in [0, 1)."""
        return float(self._generator.random())

    def uniform(self, low: float, high: float) -> float:
        """Draw a float in [low, high) using one draw of the stream."""
        return low + (high - low) * self.next()

    def index(self, length: int) -> int:
        """Draw an integer index in [0, length) using one draw."""
        return min(int(self.next() * length), length - 1)

    def choice(self, items: Sequence[T]) -> T:
        """Pick one item uniformly using one draw."""
        return items[self.index(len(items))]

    def chance(self, probability: float) -> bool:
        """Roll once; True when the draw falls below ``probability``."""
        return self.next() < probability

    def derive(self, *keys: Any) -> "SeededRandomStream":
        """Create an independent sub-stream keyed off this stream's seed.

        The parent's position is irrelevant: the child depends only on the
        parent seed string and ``keys``.
        """
        return SeededRandomStream(sub_seed(self.seed, *keys))


def create_stream(seed: str, *keys: Any) -> SeededRandomStream:
    """Create the stream for ``seed`` or, with keys, one of its sub-streams."""
    return SeededRandomStream(sub_seed(seed, *keys))
