"""AI strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from seabattle.game.core.grid import Grid
from seabattle.game.core.models import AttackOutcome, Coord
from seabattle.game.core.rules import GameState


class AIStrategy(ABC):
    """Attack-selection contract over the persisted AI fields of a game state.

    Implementations keep no state of their own between turns: everything they
    need lives in ``GameState.ai_*`` so a reloaded snapshot resumes exactly.
    """

    @abstractmethod
    def select_target(self, game: GameState, grid: Grid) -> Coord:
        """Return next coordinate to attack, consuming queued follow-ups."""

    @abstractmethod
    def notify_result(self, game: GameState, grid: Grid, outcome: AttackOutcome) -> None:
        """Update AI fields of ``game`` with an attack outcome."""
