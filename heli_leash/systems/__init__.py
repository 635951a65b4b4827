"""Runtime systems: simulated host, deterministic RNG, patrol simulator."""

from heli_leash.systems.host_sim import SimulatedHost
from heli_leash.systems.rng import DeterministicRNG
from heli_leash.systems.simulator import PatrolSimulator

__all__ = ["DeterministicRNG", "PatrolSimulator", "SimulatedHost"]
