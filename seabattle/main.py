"""Application entry point."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from seabattle.game.app.services.battle import BattleService
from seabattle.game.app.services.planning_flow import PlanningService
from seabattle.game.infra.app_data import DEFAULT_SESSION, ensure_app_data_dirs, resolve_session_dir
from seabattle.game.infra.config import load_app_config, load_default_env_files
from seabattle.game.infra.logging import setup_logging
from seabattle.game.persistence.repository import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionServices:
    """Services a transport layer calls for one game session."""

    repository: SessionRepository
    planning: PlanningService
    battle: BattleService


def open_session(session: str = DEFAULT_SESSION) -> SessionServices:
    """Wire repository and services for one session, creating missing files."""
    repository = SessionRepository(resolve_session_dir(session))
    created = repository.ensure_defaults()
    if created:
        logger.info("session_initialized session=%s files=%s", session, created)
    return SessionServices(
        repository=repository,
        planning=PlanningService(repository),
        battle=BattleService.from_config(repository, load_app_config()),
    )


def main() -> None:
    """Prepare configuration, logging and the default session."""
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    logger.info(
        "app_data_paths root=%s logs=%s sessions=%s",
        paths["root"],
        paths["logs"],
        paths["sessions"],
    )
    services = open_session()
    status = services.battle.status()
    logger.info(
        "session_ready dir=%s game_in_progress=%s",
        services.repository.root,
        status is not None and not status.game_over,
    )


if __name__ == "__main__":
    main()
