"""Canonical ship definitions and per-game instance construction."""

from __future__ import annotations

from collections.abc import Iterable

from seabattle.game.core.models import Rotation, ShipDefinition, ShipInstance

SHIP_SIZES: tuple[int, ...] = (2, 2, 3, 3, 4)
SHIP_COLORS: tuple[str, ...] = ("purple", "orange", "green", "blue", "grey")


def player_catalog() -> list[ShipDefinition]:
    """Return the fixed player fleet (ids "1".."5", names ship1..ship5)."""
    return [
        ShipDefinition(id=str(index + 1), size=size, color=color, name=f"ship{index + 1}")
        for index, (size, color) in enumerate(zip(SHIP_SIZES, SHIP_COLORS, strict=True))
    ]


def pc_catalog() -> list[ShipDefinition]:
    """Return the fixed PC fleet (ids pc_1.., names pc_ship1..)."""
    return [
        ShipDefinition(id=f"pc_{index + 1}", size=size, color=color, name=f"pc_ship{index + 1}")
        for index, (size, color) in enumerate(zip(SHIP_SIZES, SHIP_COLORS, strict=True))
    ]


def instance_of(definition: ShipDefinition) -> ShipInstance:
    return ShipInstance(
        id=definition.id,
        size=definition.size,
        color=definition.color,
        rotation=Rotation.HORIZONTAL,
        name=definition.name,
    )


def fresh_available(all_ships: Iterable[ShipDefinition]) -> list[ShipInstance]:
    """Build unplaced instances, rotation reset, in catalog order."""
    return [instance_of(definition) for definition in all_ships]


def ship_colors(all_ships: Iterable[ShipDefinition]) -> dict[str, str]:
    """Map ship name to display color."""
    return {definition.name: definition.color for definition in all_ships}
