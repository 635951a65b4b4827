"""ServiceManager — owns the LeashService and runs the patrol simulator on a background thread.

HTTP handlers and the simulator thread share one SimulatedHost; every host
mutation happens under ``lock`` so the world has a single writer at a time.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from heli_leash.config import SimulationConfig
from heli_leash.config_store import load_config, save_config
from heli_leash.leash.service import LeashService
from heli_leash.systems.host_sim import SimulatedHost
from heli_leash.systems.rng import DeterministicRNG
from heli_leash.systems.simulator import PatrolSimulator

if TYPE_CHECKING:
    from heli_leash.config import LeashConfig

logger = logging.getLogger(__name__)


class ServiceManager:
    """Manages the leash service lifecycle and the optional simulator loop.

    Provides thread-safe access to:
      - the shared host world (``lock``)
      - the service event log (lock-guarded inside EventLog)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(
        self,
        config: LeashConfig,
        sim_config: SimulationConfig | None = None,
        config_path: str | Path | None = None,
    ) -> None:
        self._config_path = Path(config_path) if config_path is not None else None
        if self._config_path is not None:
            config = load_config(self._config_path, base=config)
        self.sim_config = sim_config or SimulationConfig()
        self._tick_rate: float = self.sim_config.tick_rate

        self.lock = threading.RLock()
        self.host: SimulatedHost
        self.service: LeashService
        self.simulator: PatrolSimulator

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._stop_requested = threading.Event()

        self._build(config)

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def config(self) -> LeashConfig:
        return self.service.config

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    @property
    def tick(self) -> int:
        return self.simulator.tick

    # -- config --

    def update_config(self, config: LeashConfig) -> None:
        self.service.update_config(config)
        if self._config_path is not None:
            save_config(config, self._config_path)

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="patrol-sim", daemon=True)
        self._thread.start()
        logger.info("ServiceManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("ServiceManager paused at tick %d", self.tick)

    def resume(self) -> None:
        self._paused.clear()
        logger.info("ServiceManager resumed at tick %d", self.tick)

    def step(self) -> bool:
        """Execute exactly one simulator tick on the calling thread, pausing the loop first."""
        if self._running.is_set() and not self._paused.is_set():
            self.pause()
        with self.lock:
            return self.simulator.tick_once()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("ServiceManager stopped.")

    def shutdown(self) -> None:
        """Stop the loop and tear down the leash service."""
        self.stop()
        self.service.stop()

    def reset(self) -> None:
        """Stop, rebuild the world from the seed, keep the current leash config."""
        config = self.service.config
        self.shutdown()
        self._build(config)
        logger.info("ServiceManager reset.")

    # -- internals --

    def _build(self, config: LeashConfig) -> None:
        with self.lock:
            self.host = SimulatedHost()
            self.service = LeashService(self.host, config)
            self.service.start()
            self.simulator = PatrolSimulator(
                self.sim_config, self.host, self.service, DeterministicRNG(self.sim_config.seed),
            )
            self.simulator.setup()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Simulator thread started.")

        while not self._stop_requested.is_set():
            if self._paused.is_set():
                time.sleep(0.01)
                continue

            with self.lock:
                can_continue = self.simulator.tick_once()
            if not can_continue:
                logger.info("Simulation ended at tick %d.", self.tick)
                break

            time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Simulator thread exited.")
