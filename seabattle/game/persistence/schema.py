"""Snapshot data schema and validation helpers.

Payload field names follow the JSON shapes existing callers already exchange:
snake_case for planning data, camelCase for grids and game state.
"""

from __future__ import annotations

from dataclasses import dataclass

from seabattle.game.core.fleet import PcFleet
from seabattle.game.core.grid import Grid
from seabattle.game.core.models import (
    DEFAULT_GRID_SIZE,
    AIMode,
    Coord,
    PlacedShip,
    Rotation,
    ShipDefinition,
    ShipInstance,
    Side,
)
from seabattle.game.core.planning import PlanningState
from seabattle.game.core.rules import GameState

BOARD_SIZES: dict[str, int] = {"7x7": 7, "10x10": 10}
DEFAULT_BOARD = "10x10"


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Persisted menu settings."""

    selected_board: str = DEFAULT_BOARD

    @property
    def grid_size(self) -> int:
        return BOARD_SIZES.get(self.selected_board, DEFAULT_GRID_SIZE)


def settings_to_payload(settings: GameSettings) -> dict[str, object]:
    return {"selectedBoard": settings.selected_board}


def payload_to_settings(payload: object) -> GameSettings:
    data = _require_dict(payload, "Settings")
    board = str(data.get("selectedBoard", DEFAULT_BOARD)).strip()
    if board not in BOARD_SIZES:
        raise ValueError(f"Unsupported board '{board}'.")
    return GameSettings(selected_board=board)


def definition_to_payload(ship: ShipDefinition) -> dict[str, object]:
    # Catalog entries carry a rotation for compatibility with the ship shape.
    return {"id": ship.id, "size": ship.size, "color": ship.color, "rotation": 0, "name": ship.name}


def payload_to_definition(payload: object) -> ShipDefinition:
    data = _require_dict(payload, "Ship")
    try:
        return ShipDefinition(
            id=str(data["id"]),
            size=_int(data["size"], "size"),
            color=str(data["color"]),
            name=str(data["name"]),
        )
    except KeyError as exc:
        raise ValueError(f"Malformed ship entry: missing {exc}.") from exc


def ship_to_payload(ship: ShipInstance | PlacedShip) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": ship.id,
        "size": ship.size,
        "color": ship.color,
        "rotation": int(ship.rotation),
        "name": ship.name,
    }
    if isinstance(ship, PlacedShip):
        payload["row"] = ship.row
        payload["col"] = ship.col
    return payload


def payload_to_instance(payload: object) -> ShipInstance:
    data = _require_dict(payload, "Ship")
    try:
        return ShipInstance(
            id=str(data["id"]),
            size=_int(data["size"], "size"),
            color=str(data["color"]),
            rotation=_rotation(data.get("rotation", 0)),
            name=str(data["name"]),
        )
    except KeyError as exc:
        raise ValueError(f"Malformed ship entry: missing {exc}.") from exc


def payload_to_placed(payload: object) -> PlacedShip:
    data = _require_dict(payload, "Placed ship")
    instance = payload_to_instance(data)
    try:
        return instance.at(_int(data["row"], "row"), _int(data["col"], "col"))
    except KeyError as exc:
        raise ValueError(f"Malformed placed ship entry: missing {exc}.") from exc


def planning_to_payload(state: PlanningState) -> dict[str, object]:
    """Convert a planning snapshot to its JSON-serializable payload."""
    return {
        "player_grid": state.player_grid.to_payload(),
        "all_ships": [definition_to_payload(ship) for ship in state.all_ships],
        "available_ships": [ship_to_payload(ship) for ship in state.available_ships],
        "placed_ships": [ship_to_payload(ship) for ship in state.placed_ships] or None,
        "active_ship": ship_to_payload(state.active_ship) if state.active_ship else None,
    }


def payload_to_planning(payload: object) -> PlanningState:
    """Convert a loaded payload into a planning snapshot."""
    data = _require_dict(payload, "Planning")
    grid = Grid.from_payload(data.get("player_grid"))
    all_ships = [payload_to_definition(item) for item in _list_or_empty(data, "all_ships")]
    available = [payload_to_instance(item) for item in _list_or_empty(data, "available_ships")]
    placed = [payload_to_placed(item) for item in _list_or_empty(data, "placed_ships")]
    raw_active = data.get("active_ship")
    active = payload_to_placed(raw_active) if raw_active is not None else None

    shared = {ship.id for ship in available} & {ship.id for ship in placed}
    if shared:
        raise ValueError(f"Ships both available and placed: {', '.join(sorted(shared))}.")
    if active is not None and active not in placed:
        raise ValueError(f"Active ship '{active.id}' does not match any placed ship.")
    return PlanningState(
        player_grid=grid,
        all_ships=all_ships,
        available_ships=available,
        placed_ships=placed,
        active_ship=active,
    )


def game_state_to_payload(game: GameState) -> dict[str, object]:
    return {
        "playerShipsRemaining": game.player_ships_remaining,
        "pcShipsRemaining": game.pc_ships_remaining,
        "isPlayerTurn": game.is_player_turn,
        "gameOver": game.game_over,
        "winner": game.winner.value if game.winner else None,
        "aiMode": game.ai_mode.value,
        "aiLastHit": _coord_to_payload(game.ai_last_hit) if game.ai_last_hit else None,
        "aiTargets": [_coord_to_payload(coord) for coord in game.ai_targets],
        "playerShipHealth": dict(game.player_ship_health),
        "pcShipHealth": dict(game.pc_ship_health),
    }


def payload_to_game_state(payload: object) -> GameState:
    data = _require_dict(payload, "Game state")
    try:
        raw_winner = data.get("winner")
        raw_last_hit = data.get("aiLastHit")
        return GameState(
            player_ships_remaining=_int(data["playerShipsRemaining"], "playerShipsRemaining"),
            pc_ships_remaining=_int(data["pcShipsRemaining"], "pcShipsRemaining"),
            is_player_turn=bool(data.get("isPlayerTurn", True)),
            game_over=bool(data.get("gameOver", False)),
            winner=Side(str(raw_winner)) if raw_winner is not None else None,
            ai_mode=AIMode(str(data.get("aiMode", AIMode.HUNT.value))),
            ai_last_hit=_payload_to_coord(raw_last_hit) if raw_last_hit is not None else None,
            ai_targets=[_payload_to_coord(item) for item in _list_or_empty(data, "aiTargets")],
            player_ship_health=_health(data.get("playerShipHealth", {})),
            pc_ship_health=_health(data.get("pcShipHealth", {})),
        )
    except KeyError as exc:
        raise ValueError(f"Malformed game state: missing {exc}.") from exc


def pc_fleet_to_payload(fleet: PcFleet) -> dict[str, object]:
    return {"gridSize": fleet.grid_size, "ships": [ship_to_payload(ship) for ship in fleet.ships]}


def payload_to_pc_fleet(payload: object) -> PcFleet:
    data = _require_dict(payload, "PC ships")
    grid_size = _int(data.get("gridSize", DEFAULT_GRID_SIZE), "gridSize")
    ships = [payload_to_placed(item) for item in _list_or_empty(data, "ships")]
    return PcFleet(grid_size=grid_size, ships=ships)


def _coord_to_payload(coord: Coord) -> dict[str, int]:
    return {"row": coord.row, "col": coord.col}


def _payload_to_coord(payload: object) -> Coord:
    data = _require_dict(payload, "Coordinate")
    try:
        return Coord(row=_int(data["row"], "row"), col=_int(data["col"], "col"))
    except KeyError as exc:
        raise ValueError(f"Malformed coordinate: missing {exc}.") from exc


def _health(payload: object) -> dict[str, int]:
    data = _require_dict(payload, "Ship health")
    return {str(name): _int(value, "health") for name, value in data.items()}


def _rotation(value: object) -> Rotation:
    try:
        return Rotation(_int(value, "rotation"))
    except ValueError as exc:
        raise ValueError(f"Unsupported rotation {value!r}.") from exc


def _int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{name} must be int-compatible.")
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be int-compatible.") from exc


def _list_or_empty(data: dict[str, object], key: str) -> list[object]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list.")
    return value


def _require_dict(payload: object, label: str) -> dict[str, object]:
    if not isinstance(payload, dict):
        raise ValueError(f"{label} payload must be an object.")
    return payload
