"""Per-app simulation service.

One ``SimulationService`` is built per Flask app and kept in
``app.extensions`` so tests get a fresh one with every app instance.
"""

from __future__ import annotations

from flask import Flask, current_app

from kuji.services.setup_service import SetupService
from kuji.services.simulation_service import SimulationService


def init_store(app: Flask) -> None:
    """Create the simulation and setup services for this app."""

    app.extensions["simulation"] = SimulationService(
        seed=app.config.get("KUJI_RANDOM_SEED"),
        small_prize_label=str(app.config.get("KUJI_SMALL_PRIZE_LABEL") or "Small Prize"),
    )
    app.extensions["setup"] = SetupService(strict=bool(app.config.get("KUJI_STRICT_SETUP")))


def get_simulation_service() -> SimulationService:
    service: SimulationService | None = current_app.extensions.get("simulation")
    if service is None:
        raise RuntimeError("Simulation service not initialized")
    return service


def get_setup_service() -> SetupService:
    service: SetupService | None = current_app.extensions.get("setup")
    if service is None:
        raise RuntimeError("Setup service not initialized")
    return service
