"""Hunt/Target AI strategy implementation."""

from __future__ import annotations

import random

from seabattle.game.ai.strategy import AIStrategy
from seabattle.game.core.errors import NoTargetsAvailable
from seabattle.game.core.grid import Grid
from seabattle.game.core.models import AIMode, AttackOutcome, AttackResult, Coord
from seabattle.game.core.rules import GameState


class HuntTargetAI(AIStrategy):
    """Random hunting until a hit, then FIFO follow-up of orthogonal neighbors."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def select_target(self, game: GameState, grid: Grid) -> Coord:
        while game.ai_targets:
            coord = game.ai_targets.pop(0)
            if grid.in_bounds(coord.row, coord.col) and not grid.is_resolved(coord.row, coord.col):
                return coord

        candidates = grid.unresolved_cells()
        if not candidates:
            raise NoTargetsAvailable("Every cell of the grid has already been attacked.")
        return self._rng.choice(candidates)

    def notify_result(self, game: GameState, grid: Grid, outcome: AttackOutcome) -> None:
        if outcome.result is AttackResult.HIT:
            game.ai_last_hit = outcome.coord
            self._enqueue_target_neighbors(game, grid, outcome.coord)
            # A hit boxed in by resolved cells leaves nothing to follow up.
            game.ai_mode = AIMode.TARGET if game.ai_targets else AIMode.HUNT
        elif outcome.result is AttackResult.SUNK:
            game.ai_targets.clear()
            game.ai_mode = AIMode.HUNT
            game.ai_last_hit = None
        elif not game.ai_targets:
            game.ai_mode = AIMode.HUNT

    @staticmethod
    def _enqueue_target_neighbors(game: GameState, grid: Grid, coord: Coord) -> None:
        candidates = (
            Coord(coord.row - 1, coord.col),
            Coord(coord.row + 1, coord.col),
            Coord(coord.row, coord.col - 1),
            Coord(coord.row, coord.col + 1),
        )
        for cell in candidates:
            if not grid.in_bounds(cell.row, cell.col):
                continue
            if grid.is_resolved(cell.row, cell.col):
                continue
            if cell in game.ai_targets:
                continue
            game.ai_targets.append(cell)
