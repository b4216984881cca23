import pytest

from seabattle.game.core import planning
from seabattle.game.core.errors import Collision, NoActiveShip, NotFound, OutOfBounds, Overlap
from seabattle.game.core.models import EMPTY, Rotation
from seabattle.game.core.planning import PlanningState


def _ids(ships) -> set[str]:
    return {ship.id for ship in ships}


def test_place_size_two_ship_horizontally_at_origin(planning_state: PlanningState) -> None:
    placed = planning.place_ship(planning_state, "1", 0, 0)

    row = placed.player_grid.to_payload()["tiles"][0]
    assert row[:3] == ["ship1", "ship1", EMPTY]
    assert "1" not in _ids(placed.available_ships)
    assert len(placed.available_ships) == len(planning_state.available_ships) - 1
    assert len(placed.placed_ships) == len(planning_state.placed_ships) + 1
    assert (placed.placed_ships[0].row, placed.placed_ships[0].col) == (0, 0)


def test_place_writes_name_on_every_footprint_cell(planning_state: PlanningState) -> None:
    placed = planning.place_ship(planning_state, "5", 2, 7, rotation=90)
    ship = placed.placed_ships[0]
    assert ship.rotation is Rotation.VERTICAL
    assert all(placed.player_grid.cell(c.row, c.col) == "ship5" for c in ship.footprint())
    assert sum(cell == "ship5" for row in placed.player_grid.to_payload()["tiles"] for cell in row) == 4


def test_place_rejections_leave_state_unchanged(planning_state: PlanningState) -> None:
    state = planning.place_ship(planning_state, "3", 4, 4)
    snapshot = state.copy()

    with pytest.raises(OutOfBounds):
        planning.place_ship(state, "5", 0, 8)
    with pytest.raises(Overlap):
        planning.place_ship(state, "5", 3, 5, rotation=Rotation.VERTICAL)
    with pytest.raises(NotFound):
        planning.place_ship(state, "3", 8, 0)
    with pytest.raises(NotFound):
        planning.place_ship(state, "missing", 8, 0)

    assert state == snapshot


def test_operations_never_mutate_input(planning_state: PlanningState) -> None:
    before = planning_state.copy()
    planning.place_ship(planning_state, "1", 0, 0)
    assert planning_state == before


def test_handle_active_ship_toggles_selection(full_layout: PlanningState) -> None:
    selected, active = planning.handle_active_ship(full_layout, 2, 1)
    assert active is not None and active.name == "ship3"
    assert selected.active_ship == active

    other, active = planning.handle_active_ship(selected, 4, 3)
    assert active is not None and active.name == "ship5"

    cleared, active = planning.handle_active_ship(other, 4, 0)
    assert active is None
    assert cleared.active_ship is None


def test_handle_active_ship_on_water_returns_current_selection(full_layout: PlanningState) -> None:
    selected, _ = planning.handle_active_ship(full_layout, 0, 0)
    unchanged, active = planning.handle_active_ship(selected, 9, 9)
    assert active is not None and active.name == "ship1"
    assert unchanged == selected

    _, nothing = planning.handle_active_ship(full_layout, 9, 9)
    assert nothing is None


def test_handle_active_ship_rejects_out_of_grid(full_layout: PlanningState) -> None:
    with pytest.raises(OutOfBounds):
        planning.handle_active_ship(full_layout, 10, 0)


def test_remove_active_ship_returns_ship_to_available(full_layout: PlanningState) -> None:
    with pytest.raises(NoActiveShip):
        planning.remove_active_ship(full_layout)

    selected, _ = planning.handle_active_ship(full_layout, 4, 0)
    rotated = planning.rotate_active_ship(selected)
    removed = planning.remove_active_ship(rotated)

    assert removed.active_ship is None
    assert "5" not in _ids(removed.placed_ships)
    returned = [ship for ship in removed.available_ships if ship.id == "5"]
    assert len(returned) == 1 and returned[0].rotation is Rotation.HORIZONTAL
    assert all(cell != "ship5" for row in removed.player_grid.to_payload()["tiles"] for cell in row)


def test_rotate_requires_selection(full_layout: PlanningState) -> None:
    with pytest.raises(NoActiveShip):
        planning.rotate_active_ship(full_layout)


def test_rotate_twice_restores_layout(planning_state: PlanningState) -> None:
    state = planning.place_ship(planning_state, "4", 5, 5)
    selected, _ = planning.handle_active_ship(state, 5, 6)

    once = planning.rotate_active_ship(selected)
    assert once.active_ship is not None and once.active_ship.rotation is Rotation.VERTICAL
    assert once.placed_ships[0].rotation is Rotation.VERTICAL
    assert [once.player_grid.cell(r, 5) for r in range(5, 8)] == ["ship4"] * 3
    assert once.player_grid.cell(5, 6) == EMPTY

    twice = planning.rotate_active_ship(once)
    assert twice.player_grid == selected.player_grid
    assert twice.placed_ships == selected.placed_ships
    assert twice.active_ship == selected.active_ship


def test_rotate_rejects_out_of_bounds_and_collision(planning_state: PlanningState) -> None:
    edge = planning.place_ship(planning_state, "5", 8, 0)
    edge, _ = planning.handle_active_ship(edge, 8, 0)
    snapshot = edge.copy()
    with pytest.raises(OutOfBounds):
        planning.rotate_active_ship(edge)
    assert edge == snapshot

    blocked = planning.place_ship(planning_state, "3", 0, 0)
    blocked = planning.place_ship(blocked, "1", 1, 0)
    blocked, _ = planning.handle_active_ship(blocked, 0, 0)
    snapshot = blocked.copy()
    with pytest.raises(Collision):
        planning.rotate_active_ship(blocked)
    assert blocked == snapshot


def test_rotate_treats_own_cells_as_passable(planning_state: PlanningState) -> None:
    state = planning.place_ship(planning_state, "2", 0, 0)
    state, _ = planning.handle_active_ship(state, 0, 1)
    rotated = planning.rotate_active_ship(state)
    assert rotated.player_grid.cell(0, 0) == "ship2"
    assert rotated.player_grid.cell(1, 0) == "ship2"
    assert rotated.player_grid.cell(0, 1) == EMPTY


def test_clear_grid_returns_all_ships(full_layout: PlanningState) -> None:
    selected, _ = planning.handle_active_ship(full_layout, 4, 2)
    selected = planning.rotate_active_ship(selected)
    cleared = planning.clear_grid(selected)

    assert cleared.player_grid == planning.new_planning_state(10).player_grid
    assert _ids(cleared.available_ships) == _ids(cleared.all_ships)
    assert all(ship.rotation is Rotation.HORIZONTAL for ship in cleared.available_ships)
    assert cleared.placed_ships == []
    assert cleared.active_ship is None


def test_reset_planning_rebuilds_from_catalog(full_layout: PlanningState) -> None:
    partial = full_layout.copy()
    partial.available_ships = []
    reset = planning.reset_planning(partial)

    assert all(cell == EMPTY for row in reset.player_grid.to_payload()["tiles"] for cell in row)
    assert [ship.id for ship in reset.available_ships] == ["1", "2", "3", "4", "5"]
    assert reset.placed_ships == []


def test_clear_then_reset_agree(full_layout: PlanningState) -> None:
    cleared = planning.clear_grid(full_layout)
    reset = planning.reset_planning(cleared)
    assert _ids(reset.available_ships) == _ids(cleared.available_ships)
    assert reset.player_grid == cleared.player_grid


def test_initialize_available_ships_installs_default_catalog() -> None:
    state = PlanningState(player_grid=planning.new_planning_state(7).player_grid)
    initialized = planning.initialize_available_ships(state)
    assert len(initialized.all_ships) == 5
    assert _ids(initialized.available_ships) == _ids(initialized.all_ships)


def test_placement_complete(planning_state: PlanningState, full_layout: PlanningState) -> None:
    assert not planning.placement_complete(planning_state)
    assert planning.placement_complete(full_layout)
    selected, _ = planning.handle_active_ship(full_layout, 0, 0)
    assert not planning.placement_complete(planning.remove_active_ship(selected))
