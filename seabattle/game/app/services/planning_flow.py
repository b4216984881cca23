"""Planning-screen use cases over the persisted planning snapshot."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from seabattle.game.core import planning
from seabattle.game.core.catalog import ship_colors
from seabattle.game.core.errors import ErrorKind, GameRuleError
from seabattle.game.core.grid import Grid
from seabattle.game.core.models import PlacedShip, Rotation
from seabattle.game.core.planning import PlanningState
from seabattle.game.persistence.repository import SessionRepository
from seabattle.game.persistence.schema import BOARD_SIZES, GameSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlanningActionResult:
    """Outcome of one planning operation."""

    success: bool
    status: str
    planning: PlanningState
    active_ship: PlacedShip | None = None
    error_kind: ErrorKind | None = None


class PlanningService:
    """Load-transform-persist wrapper around the placement engine."""

    def __init__(self, repository: SessionRepository) -> None:
        self._repository = repository

    def get_planning(self) -> PlanningState:
        with self._repository.transaction() as repo:
            return repo.load_planning()

    def get_settings(self) -> GameSettings:
        with self._repository.transaction() as repo:
            return repo.load_settings()

    def ship_colors(self) -> dict[str, str]:
        return ship_colors(self.get_planning().all_ships)

    def select_board(self, board: str) -> PlanningActionResult:
        """Store the board choice and start planning over on a grid of that size.

        Any battle in progress is dropped along with the PC roster; its grids no
        longer exist at the new size.
        """
        if board not in BOARD_SIZES:
            raise ValueError(f"Unsupported board '{board}'.")
        with self._repository.transaction() as repo:
            current = repo.load_planning()
            settings = GameSettings(selected_board=board)
            next_state = planning.reset_planning(current)
            next_state.player_grid = Grid(size=settings.grid_size)
            repo.save_settings(settings)
            repo.save_planning(next_state)
            repo.save_player_grid(Grid(size=settings.grid_size))
            repo.save_pc_grid(Grid(size=settings.grid_size))
            discarded = repo.discard_game()
        logger.info(
            "planning_board_selected board=%s grid_size=%d discarded_game=%s",
            board,
            settings.grid_size,
            discarded,
        )
        return PlanningActionResult(
            success=True, status=f"Board set to {board}.", planning=next_state
        )

    def set_available_ships(self) -> PlanningActionResult:
        return self._apply(
            "set_available_ships",
            planning.initialize_available_ships,
            "Available ships set successfully.",
        )

    def place_ship(
        self, ship_id: str, row: int, col: int, rotation: Rotation | int | None = None
    ) -> PlanningActionResult:
        return self._apply(
            "place_ship",
            lambda state: planning.place_ship(state, ship_id, row, col, rotation),
            f"Ship {ship_id} placed at ({row}, {col}).",
        )

    def handle_active_ship(self, row: int, col: int) -> PlanningActionResult:
        return self._apply(
            "handle_active_ship",
            lambda state: planning.handle_active_ship(state, row, col)[0],
            "Active ship updated.",
        )

    def remove_active_ship(self) -> PlanningActionResult:
        return self._apply(
            "remove_active_ship",
            planning.remove_active_ship,
            "Active ship removed successfully.",
        )

    def rotate_active_ship(self) -> PlanningActionResult:
        return self._apply(
            "rotate_active_ship",
            planning.rotate_active_ship,
            "Active ship rotated successfully.",
        )

    def clear_grid(self) -> PlanningActionResult:
        return self._apply("clear_grid", planning.clear_grid, "Grid cleared successfully.")

    def reset_planning(self) -> PlanningActionResult:
        return self._apply(
            "reset_planning", planning.reset_planning, "Planning data reset successfully."
        )

    def _apply(
        self,
        action: str,
        transform: Callable[[PlanningState], PlanningState],
        status: str,
    ) -> PlanningActionResult:
        with self._repository.transaction() as repo:
            state = repo.load_planning()
            try:
                next_state = transform(state)
            except GameRuleError as exc:
                logger.warning(
                    "planning_rejected action=%s kind=%s reason=%s", action, exc.kind, exc.message
                )
                return PlanningActionResult(
                    success=False,
                    status=exc.message,
                    planning=state,
                    active_ship=state.active_ship,
                    error_kind=exc.kind,
                )
            repo.save_planning(next_state)
        active_name = next_state.active_ship.name if next_state.active_ship else None
        logger.info(
            "planning_applied action=%s available=%d placed=%d active=%s",
            action,
            len(next_state.available_ships),
            len(next_state.placed_ships),
            active_name,
        )
        return PlanningActionResult(
            success=True, status=status, planning=next_state, active_ship=next_state.active_ship
        )
