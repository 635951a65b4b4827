"""PatrolSimulator — a deterministic patrol-helicopter engagement.

Per tick:
  1. Flight — the heli flies toward its navigation target if one was
     commanded, otherwise along its patrol waypoints
  2. Players — each connected player wanders a little
  3. Combat — players in range may hit the heli; every hit is routed
     through the LeashService exactly like a host damage hook
  4. Cleanup — a heli at 0 HP is destroyed and forgotten
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from heli_leash.core.enums import Domain
from heli_leash.core.models import Vector3
from heli_leash.systems.host_sim import HELI_TYPE

if TYPE_CHECKING:
    from heli_leash.config import SimulationConfig
    from heli_leash.core.models import EntityId, LeashDecision
    from heli_leash.leash.service import LeashService
    from heli_leash.systems.host_sim import SimulatedHost
    from heli_leash.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

PLAYER_NAMES = ("Rook", "Scrap", "Nomad", "Vex", "Hatchet", "Ember", "Quill", "Dusk")


class PatrolSimulator:
    """Drives a SimulatedHost and feeds its events to a LeashService."""

    __slots__ = (
        "_cfg", "_host", "_service", "_rng",
        "tick", "heli_id", "waypoints", "_waypoint_idx", "decisions",
    )

    def __init__(
        self,
        config: SimulationConfig,
        host: SimulatedHost,
        service: LeashService,
        rng: DeterministicRNG,
    ) -> None:
        self._cfg = config
        self._host = host
        self._service = service
        self._rng = rng
        self.tick: int = 0
        self.heli_id: EntityId | None = None
        self.waypoints: list[Vector3] = []
        self._waypoint_idx: int = 0
        self.decisions: list[LeashDecision] = []

    # -- setup --

    def setup(self) -> None:
        """Spawn the heli, its patrol route, and the players."""
        cfg = self._cfg
        ext = cfg.map_extent
        for i in range(cfg.num_waypoints):
            x = self._rng.next_range(Domain.SPAWN, 1000 + i, 0, -ext, ext)
            z = self._rng.next_range(Domain.SPAWN, 1000 + i, 1, -ext, ext)
            self.waypoints.append(Vector3(x, cfg.patrol_altitude, z))

        start = self.waypoints[0] if self.waypoints else Vector3(0.0, cfg.patrol_altitude, 0.0)
        heli = self._host.spawn_entity(start, HELI_TYPE, health=cfg.heli_health)
        heli.speed = cfg.heli_speed
        self.heli_id = heli.id
        self._waypoint_idx = 1 % max(1, len(self.waypoints))

        # Players start near the route so the heli actually passes them
        for i in range(cfg.num_players):
            anchor = self.waypoints[i % len(self.waypoints)] if self.waypoints else start
            dx = self._rng.next_range(Domain.SPAWN, 2000 + i, 0, -200.0, 200.0)
            dz = self._rng.next_range(Domain.SPAWN, 2000 + i, 1, -200.0, 200.0)
            name = PLAYER_NAMES[i % len(PLAYER_NAMES)]
            self._host.add_player(name, Vector3(anchor.x + dx, 0.0, anchor.z + dz))

        logger.info("Patrol heli #%d spawned at %s with %d waypoints, %d players",
                    heli.id, start, len(self.waypoints), cfg.num_players)

    # -- tick --

    @property
    def finished(self) -> bool:
        return self.heli_id is None or self.tick >= self._cfg.max_ticks

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False once the engagement is over."""
        if self.finished:
            return False

        self._phase_flight()
        self._phase_players()
        self._phase_combat()
        self.tick += 1
        return not self.finished

    def run(self) -> list[LeashDecision]:
        """Run until the heli dies or max_ticks is reached."""
        logger.info("=== Simulation started (seed=%d) ===", self._rng.seed)
        while self.tick_once():
            if self.tick % 50 == 0 and self.heli_id is not None:
                logger.info("Tick %d: heli at %s, %.0f HP",
                            self.tick, self._host.entity_position(self.heli_id),
                            self._host.health(self.heli_id))
        logger.info("=== Simulation finished at tick %d (%d leash pulls) ===",
                    self.tick, sum(1 for d in self.decisions if d.retargeted))
        return self.decisions

    # -- phases --

    def _phase_flight(self) -> None:
        if self.heli_id is None:
            return
        heli = self._host.entities[self.heli_id]
        if heli.nav_target is not None:
            if self._host.move_towards(heli.id, heli.nav_target):
                heli.nav_target = None
            return
        if not self.waypoints:
            return
        if self._host.move_towards(heli.id, self.waypoints[self._waypoint_idx]):
            self._waypoint_idx = (self._waypoint_idx + 1) % len(self.waypoints)

    def _phase_players(self) -> None:
        step = self._cfg.player_step
        for player in self._host.players.values():
            if not player.connected or not player.alive:
                continue
            dx = self._rng.next_range(Domain.MOVEMENT, player.id, self.tick * 2, -step, step)
            dz = self._rng.next_range(Domain.MOVEMENT, player.id, self.tick * 2 + 1, -step, step)
            player.pos = player.pos + Vector3(dx, 0.0, dz)

    def _phase_combat(self) -> None:
        if self.heli_id is None:
            return
        cfg = self._cfg
        heli_id = self.heli_id
        for pid in sorted(self._host.players):
            player = self._host.players[pid]
            if not player.connected or not player.alive:
                continue
            if player.pos.distance(self._host.entity_position(heli_id)) > cfg.shot_range:
                continue
            if not self._rng.next_bool(Domain.SHOT, pid, self.tick, cfg.shot_chance):
                continue

            amount = self._rng.next_range(Domain.DAMAGE, pid, self.tick, cfg.damage_min, cfg.damage_max)
            remaining = self._host.apply_damage(heli_id, amount)
            decision = self._service.on_entity_damaged(heli_id, pid)
            if decision is not None:
                self.decisions.append(decision)
                if decision.retargeted:
                    logger.info("Tick %d: heli #%d pulled toward %s (%.1fm)",
                                self.tick, heli_id, player.name, decision.distance)

            if remaining <= 0:
                self._host.destroy_entity(heli_id)
                self._service.on_entity_destroyed(heli_id)
                self.heli_id = None
                logger.info("Tick %d: heli #%d shot down by %s", self.tick, heli_id, player.name)
                return
