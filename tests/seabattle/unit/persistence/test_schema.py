import pytest

from seabattle.game.core.models import AIMode, Coord, Side
from seabattle.game.core.planning import PlanningState, handle_active_ship
from seabattle.game.core.rules import GameState
from seabattle.game.persistence.schema import (
    GameSettings,
    game_state_to_payload,
    payload_to_game_state,
    payload_to_planning,
    payload_to_settings,
    planning_to_payload,
    settings_to_payload,
)


def test_settings_payload_and_grid_size() -> None:
    assert settings_to_payload(GameSettings()) == {"selectedBoard": "10x10"}
    settings = payload_to_settings({"selectedBoard": "7x7"})
    assert settings.grid_size == 7
    assert payload_to_settings({}).selected_board == "10x10"
    with pytest.raises(ValueError):
        payload_to_settings({"selectedBoard": "12x12"})


def test_planning_payload_shape(planning_state: PlanningState) -> None:
    payload = planning_to_payload(planning_state)
    assert payload["placed_ships"] is None
    assert payload["active_ship"] is None
    assert payload["all_ships"][0] == {
        "id": "1",
        "size": 2,
        "color": "purple",
        "rotation": 0,
        "name": "ship1",
    }
    assert payload["player_grid"]["gridSize"] == 10


def test_planning_payload_restores_placed_and_active(full_layout: PlanningState) -> None:
    selected, _ = handle_active_ship(full_layout, 4, 0)
    payload = planning_to_payload(selected)
    assert payload["placed_ships"][4] == {
        "id": "5",
        "size": 4,
        "color": "grey",
        "rotation": 0,
        "name": "ship5",
        "row": 4,
        "col": 0,
    }

    restored = payload_to_planning(payload)
    assert restored == selected


def test_planning_payload_accepts_null_lists(planning_state: PlanningState) -> None:
    payload = planning_to_payload(planning_state)
    payload["available_ships"] = None
    restored = payload_to_planning(payload)
    assert restored.available_ships == []
    assert restored.placed_ships == []


def test_planning_payload_rejects_ship_in_both_lists(full_layout: PlanningState) -> None:
    payload = planning_to_payload(full_layout)
    payload["available_ships"] = [dict(payload["placed_ships"][0])]
    with pytest.raises(ValueError):
        payload_to_planning(payload)


def test_planning_payload_rejects_malformed_entries(planning_state: PlanningState) -> None:
    payload = planning_to_payload(planning_state)
    payload["available_ships"] = [{"id": "1", "size": 2}]
    with pytest.raises(ValueError):
        payload_to_planning(payload)

    payload = planning_to_payload(planning_state)
    payload["available_ships"][0]["rotation"] = 45
    with pytest.raises(ValueError):
        payload_to_planning(payload)

    payload = planning_to_payload(planning_state)
    payload["all_ships"][0]["size"] = True
    with pytest.raises(ValueError):
        payload_to_planning(payload)


def test_game_state_payload_uses_camel_case() -> None:
    game = GameState(
        player_ships_remaining=4,
        pc_ships_remaining=3,
        is_player_turn=False,
        game_over=False,
        winner=None,
        ai_mode=AIMode.TARGET,
        ai_last_hit=Coord(3, 3),
        ai_targets=[Coord(2, 3), Coord(4, 3)],
        player_ship_health={"ship1": 1},
        pc_ship_health={"pc_ship1": 2},
    )
    payload = game_state_to_payload(game)
    assert payload["aiMode"] == "target"
    assert payload["aiLastHit"] == {"row": 3, "col": 3}
    assert payload["aiTargets"][1] == {"row": 4, "col": 3}
    assert payload["isPlayerTurn"] is False
    assert payload["winner"] is None
    assert payload_to_game_state(payload) == game


def test_game_state_payload_winner_and_errors() -> None:
    game = GameState(player_ships_remaining=0, pc_ships_remaining=2, game_over=True, winner=Side.PC)
    payload = game_state_to_payload(game)
    assert payload["winner"] == "pc"
    assert payload_to_game_state(payload).winner is Side.PC

    del payload["pcShipsRemaining"]
    with pytest.raises(ValueError):
        payload_to_game_state(payload)
    with pytest.raises(ValueError):
        payload_to_game_state("not an object")


def test_planning_payload_rejects_stale_active_ship(full_layout: PlanningState) -> None:
    selected, _ = handle_active_ship(full_layout, 4, 0)
    payload = planning_to_payload(selected)
    payload["active_ship"] = dict(payload["active_ship"], row=6)
    with pytest.raises(ValueError):
        payload_to_planning(payload)

    payload = planning_to_payload(selected)
    payload["active_ship"] = dict(payload["active_ship"], rotation=90)
    with pytest.raises(ValueError):
        payload_to_planning(payload)
