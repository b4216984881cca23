"""Battle flow orchestration over persisted game snapshots."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from seabattle.game.ai.hunt_target import HuntTargetAI
from seabattle.game.ai.strategy import AIStrategy
from seabattle.game.core.errors import (
    ErrorKind,
    GameRuleError,
    NoGameInProgress,
    PlacementFailed,
    PlacementIncomplete,
)
from seabattle.game.core.fleet import PcFleet, generate_pc_fleet
from seabattle.game.core.models import AttackOutcome, AttackResult, Side
from seabattle.game.core.planning import placement_complete
from seabattle.game.core.rules import (
    GameState,
    GameStatus,
    ai_attack,
    create_game_state,
    game_status,
    player_attack,
)
from seabattle.game.infra.config import DEFAULT_PC_LAYOUT_RETRIES, AppConfig
from seabattle.game.persistence.repository import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StartGameResult:
    """Outcome of starting a new battle."""

    success: bool
    status: str
    game: GameState | None = None
    error_kind: ErrorKind | None = None


@dataclass(frozen=True, slots=True)
class AttackTurnResult:
    """Outcome of a single attack by either side."""

    success: bool
    status: str
    row: int | None = None
    col: int | None = None
    result: AttackResult | None = None
    ship_sunk: str | None = None
    game_over: bool = False
    winner: Side | None = None
    error_kind: ErrorKind | None = None


@dataclass(frozen=True, slots=True)
class PlayerTurnResult:
    """Outcome of a full player action (player attack + optional AI response)."""

    player: AttackTurnResult
    ai: AttackTurnResult | None


class BattleService:
    """Game init, attacks and status on top of one session repository."""

    def __init__(
        self,
        repository: SessionRepository,
        rng: random.Random,
        *,
        ai_strategy: AIStrategy | None = None,
        pc_layout_retries: int = DEFAULT_PC_LAYOUT_RETRIES,
    ) -> None:
        self._repository = repository
        self._rng = rng
        self._ai = ai_strategy if ai_strategy is not None else HuntTargetAI(rng)
        self._pc_layout_retries = max(1, pc_layout_retries)

    @classmethod
    def from_config(cls, repository: SessionRepository, config: AppConfig) -> BattleService:
        return cls(
            repository,
            random.Random(config.rng_seed),
            pc_layout_retries=config.pc_layout_retries,
        )

    def start_game(self) -> StartGameResult:
        """Freeze the planned layout, generate the PC fleet and open a fresh battle."""
        with self._repository.transaction() as repo:
            planning = repo.load_planning()
            try:
                if not placement_complete(planning):
                    raise PlacementIncomplete(
                        f"{len(planning.available_ships)} ship(s) still need to be placed."
                    )
                fleet = self._generate_pc_fleet(planning.player_grid.size)
            except GameRuleError as exc:
                logger.warning("game_init_rejected kind=%s reason=%s", exc.kind, exc.message)
                return StartGameResult(success=False, status=exc.message, error_kind=exc.kind)

            game = create_game_state(planning.placed_ships, fleet.ships)
            repo.save_player_grid(planning.player_grid.copy())
            repo.save_pc_grid(fleet.build_grid())
            repo.save_pc_fleet(fleet)
            repo.save_game_state(game)
        logger.info(
            "game_started grid_size=%d player_ships=%d pc_ships=%d",
            fleet.grid_size,
            game.player_ships_remaining,
            game.pc_ships_remaining,
        )
        return StartGameResult(success=True, status="Game started. Your turn.", game=game)

    def player_attack(self, row: int, col: int) -> AttackTurnResult:
        with self._repository.transaction() as repo:
            try:
                game = self._require_game(repo)
                next_game, next_grid, outcome = player_attack(game, repo.load_pc_grid(), row, col)
            except GameRuleError as exc:
                return self._rejected(Side.PLAYER, exc)
            repo.save_pc_grid(next_grid)
            repo.save_game_state(next_game)
        return self._resolved(Side.PLAYER, next_game, outcome)

    def ai_attack(self) -> AttackTurnResult:
        with self._repository.transaction() as repo:
            try:
                game = self._require_game(repo)
                next_game, next_grid, outcome = ai_attack(game, repo.load_player_grid(), self._ai)
            except GameRuleError as exc:
                return self._rejected(Side.PC, exc)
            repo.save_player_grid(next_grid)
            repo.save_game_state(next_game)
        return self._resolved(Side.PC, next_game, outcome)

    def resolve_player_turn(self, row: int, col: int) -> PlayerTurnResult:
        """Apply the player attack and let the AI answer when the battle goes on."""
        with self._repository.transaction():
            player = self.player_attack(row, col)
            if not player.success or player.game_over:
                return PlayerTurnResult(player=player, ai=None)
            return PlayerTurnResult(player=player, ai=self.ai_attack())

    def status(self) -> GameStatus | None:
        """Return the battle summary, or None before the first game starts."""
        with self._repository.transaction() as repo:
            game = repo.load_game_state()
        return game_status(game) if game is not None else None

    def _generate_pc_fleet(self, grid_size: int) -> PcFleet:
        for attempt in range(1, self._pc_layout_retries + 1):
            try:
                return generate_pc_fleet(self._rng, grid_size)
            except PlacementFailed as exc:
                logger.warning("pc_layout_retry attempt=%d reason=%s", attempt, exc.message)
        raise PlacementFailed(
            f"Could not lay out the PC fleet in {self._pc_layout_retries} attempt(s)."
        )

    @staticmethod
    def _require_game(repo: SessionRepository) -> GameState:
        game = repo.load_game_state()
        if game is None:
            raise NoGameInProgress("No game in progress; start a game first.")
        return game

    @staticmethod
    def _rejected(side: Side, exc: GameRuleError) -> AttackTurnResult:
        logger.warning(
            "attack_rejected side=%s kind=%s reason=%s", side.value, exc.kind, exc.message
        )
        return AttackTurnResult(success=False, status=exc.message, error_kind=exc.kind)

    @staticmethod
    def _resolved(side: Side, game: GameState, outcome: AttackOutcome) -> AttackTurnResult:
        coord = outcome.coord
        label = "You" if side is Side.PLAYER else "AI"
        status = f"{label} fired at ({coord.row}, {coord.col}): {outcome.result.value}."
        if outcome.ship_sunk:
            status = f"{label} fired at ({coord.row}, {coord.col}): sunk {outcome.ship_sunk}."
        if game.game_over:
            status = "You win." if game.winner is Side.PLAYER else "AI wins."
        logger.info(
            "attack_resolved side=%s row=%d col=%d result=%s sunk=%s game_over=%s",
            side.value,
            coord.row,
            coord.col,
            outcome.result.value,
            outcome.ship_sunk,
            game.game_over,
        )
        return AttackTurnResult(
            success=True,
            status=status,
            row=coord.row,
            col=coord.col,
            result=outcome.result,
            ship_sunk=outcome.ship_sunk,
            game_over=game.game_over,
            winner=game.winner,
        )
