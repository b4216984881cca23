from __future__ import annotations

import random

import pytest

from seabattle.game.core.planning import PlanningState, new_planning_state, place_ship
from seabattle.game.persistence.repository import SessionRepository


def make_full_layout(grid_size: int = 10) -> PlanningState:
    """Place ship1..ship5 horizontally at column 0 of rows 0-4."""
    state = new_planning_state(grid_size)
    for index, ship in enumerate(list(state.available_ships)):
        state = place_ship(state, ship.id, index, 0)
    return state


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def planning_state() -> PlanningState:
    return new_planning_state(10)


@pytest.fixture
def full_layout() -> PlanningState:
    return make_full_layout()


@pytest.fixture
def repository(tmp_path) -> SessionRepository:
    repo = SessionRepository(tmp_path / "session")
    repo.ensure_defaults()
    return repo
