"""PC fleet generation and ship-health bookkeeping."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from seabattle.game.core.catalog import instance_of, pc_catalog
from seabattle.game.core.errors import PlacementFailed
from seabattle.game.core.grid import Grid
from seabattle.game.core.models import DEFAULT_GRID_SIZE, PlacedShip, Rotation

MAX_PLACEMENT_ATTEMPTS = 100


@dataclass(slots=True)
class PcFleet:
    """PC-side roster and the grid it is painted on."""

    grid_size: int
    ships: list[PlacedShip] = field(default_factory=list)

    def build_grid(self) -> Grid:
        grid = Grid(size=self.grid_size)
        for ship in self.ships:
            grid.write_footprint(ship.row, ship.col, ship.size, ship.rotation, ship.name)
        return grid


def generate_pc_fleet(
    rng: random.Random,
    grid_size: int = DEFAULT_GRID_SIZE,
    *,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> PcFleet:
    """Randomly place the PC catalog, sampling anchor and rotation per ship."""
    grid = Grid(size=grid_size)
    ships: list[PlacedShip] = []
    for definition in pc_catalog():
        placed = _sample_placement(rng, grid, definition.size, max_attempts)
        if placed is None:
            raise PlacementFailed(
                f"Could not place {definition.name} after {max_attempts} attempts."
            )
        row, col, rotation = placed
        ship = instance_of(definition).at(row, col, rotation)
        grid.write_footprint(row, col, ship.size, ship.rotation, ship.name)
        ships.append(ship)
    return PcFleet(grid_size=grid_size, ships=ships)


def initial_health(ships: list[PlacedShip]) -> dict[str, int]:
    """Map ship name to remaining hitpoints for an untouched fleet."""
    return {ship.name: ship.size for ship in ships}


def _sample_placement(
    rng: random.Random, grid: Grid, size: int, max_attempts: int
) -> tuple[int, int, Rotation] | None:
    for _ in range(max_attempts):
        row = rng.randrange(grid.size)
        col = rng.randrange(grid.size)
        rotation = rng.choice([Rotation.HORIZONTAL, Rotation.VERTICAL])
        if grid.can_place(row, col, size, rotation):
            return row, col, rotation
    return None
