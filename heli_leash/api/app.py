"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heli_leash import __version__
from heli_leash.api.dependencies import set_service_manager
from heli_leash.api.routes import api_router
from heli_leash.api.service_manager import ServiceManager
from heli_leash.config import LeashConfig, SimulationConfig
from heli_leash.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    config: LeashConfig | None = None,
    sim_config: SimulationConfig | None = None,
    config_path: str | Path | None = None,
    autostart: bool = False,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    With *config_path* set the leash config is loaded from (and saved back
    to) that JSON file. *autostart* starts the patrol simulator loop.
    """
    if config is None:
        config = LeashConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = ServiceManager(_config, sim_config=sim_config, config_path=config_path)
        set_service_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started — leash service running.")
        yield
        manager.shutdown()
        set_service_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Heli Leash Control",
        description=(
            "Keeps the patrol helicopter close to its last attacker once it is heavily damaged.\n\n"
            "## API Groups\n\n"
            "- **State** — Simulated world, attacker associations, event feed\n"
            "- **Events** — Host hooks: entity damaged, entity destroyed\n"
            "- **Host** — Spawn helicopters, add and disconnect players\n"
            "- **Grid** — World coordinate to map grid label\n"
            "- **Control** — Patrol simulator lifecycle: start, pause, resume, step, reset\n"
            "- **Config** — Leash configuration (read and partial update)\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live simulated world, current attacker associations and the event feed."},
            {"name": "Events", "description": "Damage and destruction hooks, exactly as a host server would deliver them."},
            {"name": "Host", "description": "Shape the simulated host world: helicopters and players."},
            {"name": "Grid", "description": "Map grid labels as shown in chat announcements."},
            {"name": "Control", "description": "Patrol simulator lifecycle controls: start, pause, resume, single-step, and reset."},
            {"name": "Config", "description": "Leash configuration. Updates are persisted when the server runs with a config file."},
        ],
    )

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
