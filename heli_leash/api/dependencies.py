"""FastAPI dependency injection — provides the ServiceManager singleton."""

from __future__ import annotations

from heli_leash.api.service_manager import ServiceManager

_service_manager: ServiceManager | None = None


def set_service_manager(manager: ServiceManager | None) -> None:
    global _service_manager
    _service_manager = manager


def get_service_manager() -> ServiceManager:
    if _service_manager is None:
        raise RuntimeError("ServiceManager not initialized — server not started correctly.")
    return _service_manager
