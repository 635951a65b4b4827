"""Entry point: ``python -m heli_leash``.

Supports two modes:
  - ``python -m heli_leash``             → Launch the FastAPI server
  - ``python -m heli_leash simulate``    → Headless patrol simulation
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Heli Leash Control")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--config", type=str, default="HeliLeashControl.json", help="JSON config file")
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--autostart", action="store_true", help="Start the patrol simulator immediately")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless simulation ---
    sim = sub.add_parser("simulate", help="Run a headless patrol simulation")
    sim.add_argument("--seed", type=int, default=42)
    sim.add_argument("--ticks", type=int, default=600)
    sim.add_argument("--players", type=int, default=4)
    sim.add_argument("--config", type=str, default=None, help="JSON config file (defaults if omitted)")
    sim.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from heli_leash.api.app import create_app
    from heli_leash.config import LeashConfig, SimulationConfig

    app = create_app(
        LeashConfig(log_level=args.log_level),
        sim_config=SimulationConfig(seed=args.seed),
        config_path=args.config,
        autostart=args.autostart,
    )
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_simulation(args: argparse.Namespace) -> None:
    from heli_leash.config import LeashConfig, SimulationConfig
    from heli_leash.config_store import load_config
    from heli_leash.leash.service import LeashService
    from heli_leash.systems.host_sim import SimulatedHost
    from heli_leash.systems.rng import DeterministicRNG
    from heli_leash.systems.simulator import PatrolSimulator
    from heli_leash.utils.logging import setup_logging

    setup_logging(args.log_level)

    config = LeashConfig(log_level=args.log_level)
    if args.config:
        config = load_config(args.config, base=config)
    sim_config = SimulationConfig(seed=args.seed, max_ticks=args.ticks, num_players=args.players)

    host = SimulatedHost()
    service = LeashService(host, config)
    service.start()
    simulator = PatrolSimulator(sim_config, host, service, DeterministicRNG(sim_config.seed))
    simulator.setup()

    try:
        decisions = simulator.run()
    finally:
        service.stop()

    pulls = [d for d in decisions if d.retargeted]
    logger.info("Done. %d damage events evaluated, %d leash pulls.", len(decisions), len(pulls))
    for player in host.players.values():
        if player.inbox:
            logger.info("%s received %d announcements, last: %s", player.name, len(player.inbox), player.inbox[-1])
            break


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "simulate":
        _run_simulation(args)


if __name__ == "__main__":
    main()
