"""Domain-separated deterministic RNG using xxhash.

The outcome of tick T depends only on the seed, the domain, the subject
handle and T, so simulator runs replay exactly for a given seed.

Formula: RNG_Value = Hash(Seed, Domain, SubjectID, Tick)
"""

from __future__ import annotations

import struct

import xxhash

from heli_leash.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, subject_id, tick) —
    no internal mutable state, therefore fully thread-safe.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, subject_id: int, tick: int) -> int:
        payload = struct.pack("<qiqi", self._seed, domain.value, subject_id, tick)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, subject_id: int, tick: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, subject_id, tick) / (self._MAX_UINT64 + 1)

    def next_range(self, domain: Domain, subject_id: int, tick: int, low: float, high: float) -> float:
        """Return a deterministic float in [low, high)."""
        return low + self.next_float(domain, subject_id, tick) * (high - low)

    def next_bool(self, domain: Domain, subject_id: int, tick: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, subject_id, tick) < probability
