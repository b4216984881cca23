"""Game state, turn sequencing and win detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from seabattle.game.core.errors import GameOver, NotYourTurn
from seabattle.game.core.fleet import initial_health
from seabattle.game.core.grid import Grid
from seabattle.game.core.models import AIMode, AttackOutcome, AttackResult, Coord, PlacedShip, Side
from seabattle.game.core.shot_resolution import resolve_attack

if TYPE_CHECKING:
    from seabattle.game.ai.strategy import AIStrategy


@dataclass(slots=True)
class GameState:
    """Runtime battle state shared by both sides."""

    player_ships_remaining: int
    pc_ships_remaining: int
    is_player_turn: bool = True
    game_over: bool = False
    winner: Side | None = None
    ai_mode: AIMode = AIMode.HUNT
    ai_last_hit: Coord | None = None
    ai_targets: list[Coord] = field(default_factory=list)
    player_ship_health: dict[str, int] = field(default_factory=dict)
    pc_ship_health: dict[str, int] = field(default_factory=dict)

    def copy(self) -> GameState:
        return GameState(
            player_ships_remaining=self.player_ships_remaining,
            pc_ships_remaining=self.pc_ships_remaining,
            is_player_turn=self.is_player_turn,
            game_over=self.game_over,
            winner=self.winner,
            ai_mode=self.ai_mode,
            ai_last_hit=self.ai_last_hit,
            ai_targets=list(self.ai_targets),
            player_ship_health=dict(self.player_ship_health),
            pc_ship_health=dict(self.pc_ship_health),
        )


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Summary exposed to callers polling the battle."""

    player_ships_remaining: int
    pc_ships_remaining: int
    is_player_turn: bool
    game_over: bool
    winner: Side | None


def create_game_state(player_ships: list[PlacedShip], pc_ships: list[PlacedShip]) -> GameState:
    """Create a fresh battle from the committed player layout and the PC roster."""
    return GameState(
        player_ships_remaining=len(player_ships),
        pc_ships_remaining=len(pc_ships),
        player_ship_health=initial_health(player_ships),
        pc_ship_health=initial_health(pc_ships),
    )


def game_status(game: GameState) -> GameStatus:
    return GameStatus(
        player_ships_remaining=game.player_ships_remaining,
        pc_ships_remaining=game.pc_ships_remaining,
        is_player_turn=game.is_player_turn,
        game_over=game.game_over,
        winner=game.winner,
    )


def player_attack(
    game: GameState, pc_grid: Grid, row: int, col: int
) -> tuple[GameState, Grid, AttackOutcome]:
    """Resolve a player attack on the PC grid."""
    _require_turn(game, Side.PLAYER)
    next_grid, health, outcome = resolve_attack(pc_grid, game.pc_ship_health, row, col)
    next_game = game.copy()
    next_game.pc_ship_health = health
    _finish_attack(next_game, Side.PLAYER, outcome)
    return next_game, next_grid, outcome


def ai_attack(
    game: GameState, player_grid: Grid, ai: AIStrategy
) -> tuple[GameState, Grid, AttackOutcome]:
    """Let the AI pick a cell on the player grid and resolve the attack."""
    _require_turn(game, Side.PC)
    next_game = game.copy()
    target = ai.select_target(next_game, player_grid)
    next_grid, health, outcome = resolve_attack(
        player_grid, next_game.player_ship_health, target.row, target.col
    )
    next_game.player_ship_health = health
    ai.notify_result(next_game, next_grid, outcome)
    _finish_attack(next_game, Side.PC, outcome)
    return next_game, next_grid, outcome


def _require_turn(game: GameState, side: Side) -> None:
    if game.game_over:
        raise GameOver(f"Game is over; winner is {game.winner}.")
    if game.is_player_turn != (side is Side.PLAYER):
        raise NotYourTurn(f"It is not the {side.value}'s turn.")


def _finish_attack(game: GameState, attacker: Side, outcome: AttackOutcome) -> None:
    if outcome.result is AttackResult.SUNK:
        if attacker is Side.PLAYER:
            game.pc_ships_remaining -= 1
            defender_remaining = game.pc_ships_remaining
        else:
            game.player_ships_remaining -= 1
            defender_remaining = game.player_ships_remaining
        if defender_remaining <= 0:
            game.game_over = True
            game.winner = attacker
    game.is_player_turn = attacker is not Side.PLAYER
