"""Ship placement engine over the planning snapshot.

Every operation takes a :class:`PlanningState` and returns a new one. The input
snapshot is never mutated, so a raised :class:`GameRuleError` leaves the
caller's state exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from seabattle.game.core.catalog import fresh_available, player_catalog
from seabattle.game.core.errors import Collision, NoActiveShip, NotFound, OutOfBounds
from seabattle.game.core.grid import Grid, validate_placement
from seabattle.game.core.models import (
    DEFAULT_GRID_SIZE,
    EMPTY,
    RESOLVED_STATES,
    PlacedShip,
    Rotation,
    ShipDefinition,
    ShipInstance,
)


@dataclass(slots=True)
class PlanningState:
    """Player grid plus catalog, available, placed and selected ships."""

    player_grid: Grid
    all_ships: list[ShipDefinition] = field(default_factory=list)
    available_ships: list[ShipInstance] = field(default_factory=list)
    placed_ships: list[PlacedShip] = field(default_factory=list)
    active_ship: PlacedShip | None = None

    def copy(self) -> PlanningState:
        return PlanningState(
            player_grid=self.player_grid.copy(),
            all_ships=list(self.all_ships),
            available_ships=list(self.available_ships),
            placed_ships=list(self.placed_ships),
            active_ship=self.active_ship,
        )


def new_planning_state(grid_size: int = DEFAULT_GRID_SIZE) -> PlanningState:
    """Create an empty grid with the default catalog fully available."""
    catalog = player_catalog()
    return PlanningState(
        player_grid=Grid(size=grid_size),
        all_ships=catalog,
        available_ships=fresh_available(catalog),
    )


def initialize_available_ships(state: PlanningState) -> PlanningState:
    """Install the default catalog if missing and rebuild available ships from it."""
    next_state = state.copy()
    if not next_state.all_ships:
        next_state.all_ships = player_catalog()
    next_state.available_ships = fresh_available(next_state.all_ships)
    return next_state


def place_ship(
    state: PlanningState,
    ship_id: str,
    row: int,
    col: int,
    rotation: Rotation | int | None = None,
) -> PlanningState:
    """Move an available ship onto the grid at (row, col)."""
    ship = _find_available(state, ship_id)
    chosen = ship.rotation if rotation is None else Rotation(rotation)
    validate_placement(state.player_grid, row, col, ship.size, chosen)

    placed = ship.at(row, col, chosen)
    next_state = state.copy()
    next_state.player_grid.write_footprint(row, col, placed.size, placed.rotation, placed.name)
    next_state.available_ships = [s for s in next_state.available_ships if s.id != ship_id]
    next_state.placed_ships.append(placed)
    return next_state


def handle_active_ship(
    state: PlanningState, row: int, col: int
) -> tuple[PlanningState, PlacedShip | None]:
    """Toggle selection of the placed ship under (row, col).

    Clicking open water leaves the selection untouched; the current active ship
    (possibly ``None``) is returned either way.
    """
    grid = state.player_grid
    if not grid.in_bounds(row, col):
        raise OutOfBounds(f"Cell ({row}, {col}) is outside the grid.")
    value = grid.cell(row, col)
    next_state = state.copy()
    if value == EMPTY or value in RESOLVED_STATES:
        return next_state, next_state.active_ship

    active = state.active_ship
    if active is not None and value == active.name:
        next_state.active_ship = None
    else:
        next_state.active_ship = _find_placed_by_name(state, value)
    return next_state, next_state.active_ship


def remove_active_ship(state: PlanningState) -> PlanningState:
    """Lift the active ship off the grid and return it to the available list."""
    active = _require_active(state)
    next_state = state.copy()
    next_state.player_grid.clear_footprint(active.row, active.col, active.size, active.rotation)
    next_state.available_ships.append(active.to_available())
    next_state.placed_ships = [s for s in next_state.placed_ships if s.id != active.id]
    next_state.active_ship = None
    return next_state


def rotate_active_ship(state: PlanningState) -> PlanningState:
    """Toggle the active ship between horizontal and vertical around its anchor."""
    active = _require_active(state)
    target = active.rotation.toggled()
    # The ship's own cells are still painted on the grid.
    validate_placement(
        state.player_grid,
        active.row,
        active.col,
        active.size,
        target,
        passable=active.name,
        overlap_error=Collision,
    )

    rotated = replace(active, rotation=target)
    next_state = state.copy()
    grid = next_state.player_grid
    grid.clear_footprint(active.row, active.col, active.size, active.rotation)
    grid.write_footprint(rotated.row, rotated.col, rotated.size, rotated.rotation, rotated.name)
    next_state.active_ship = rotated
    next_state.placed_ships = [
        rotated if ship.name == active.name else ship for ship in next_state.placed_ships
    ]
    return next_state


def clear_grid(state: PlanningState) -> PlanningState:
    """Empty the grid and return placed ships to the available list."""
    next_state = state.copy()
    next_state.player_grid.clear()
    next_state.available_ships.extend(ship.to_available() for ship in next_state.placed_ships)
    next_state.placed_ships = []
    next_state.active_ship = None
    return next_state


def reset_planning(state: PlanningState) -> PlanningState:
    """Empty the grid and rebuild available ships from the catalog."""
    next_state = state.copy()
    next_state.player_grid.clear()
    next_state.available_ships = fresh_available(next_state.all_ships)
    next_state.placed_ships = []
    next_state.active_ship = None
    return next_state


def placement_complete(state: PlanningState) -> bool:
    """Return whether every catalog ship is on the grid."""
    if not state.all_ships or state.available_ships:
        return False
    placed_ids = {ship.id for ship in state.placed_ships}
    return placed_ids == {definition.id for definition in state.all_ships}


def _find_available(state: PlanningState, ship_id: str) -> ShipInstance:
    for ship in state.available_ships:
        if ship.id == ship_id:
            return ship
    raise NotFound(f"Ship '{ship_id}' is not available.")


def _find_placed_by_name(state: PlanningState, name: str) -> PlacedShip:
    for ship in state.placed_ships:
        if ship.name == name:
            return ship
    raise NotFound(f"No placed ship named '{name}'.")


def _require_active(state: PlanningState) -> PlacedShip:
    if state.active_ship is None:
        raise NoActiveShip("No active ship selected.")
    return state.active_ship
