"""Attack outcome evaluation (miss/hit/sunk)."""

from __future__ import annotations

from seabattle.game.core.errors import AlreadyAttacked, NotFound, OutOfBounds
from seabattle.game.core.grid import Grid
from seabattle.game.core.models import EMPTY, HIT, MISS, AttackOutcome, AttackResult, Coord


def resolve_attack(
    grid: Grid, ship_health: dict[str, int], row: int, col: int
) -> tuple[Grid, dict[str, int], AttackOutcome]:
    """Resolve an attack against a grid, returning updated copies and the outcome."""
    if not grid.in_bounds(row, col):
        raise OutOfBounds(f"Cell ({row}, {col}) is outside the grid.")
    if grid.is_resolved(row, col):
        raise AlreadyAttacked(f"Cell ({row}, {col}) was already attacked.")

    next_grid = grid.copy()
    next_health = dict(ship_health)
    coord = Coord(row, col)
    value = grid.cell(row, col)
    if value == EMPTY:
        next_grid.tiles[row, col] = MISS
        return next_grid, next_health, AttackOutcome(coord, AttackResult.MISS)

    if value not in next_health:
        raise NotFound(f"No health entry for ship '{value}'.")
    next_grid.tiles[row, col] = HIT
    next_health[value] -= 1
    if next_health[value] <= 0:
        return next_grid, next_health, AttackOutcome(coord, AttackResult.SUNK, ship_sunk=value)
    return next_grid, next_health, AttackOutcome(coord, AttackResult.HIT)
