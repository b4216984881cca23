"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

DEFAULT_GRID_SIZE = 10

EMPTY = "empty"
HIT = "hit"
MISS = "miss"
RESOLVED_STATES: frozenset[str] = frozenset({HIT, MISS})


class Rotation(IntEnum):
    """Ship rotation in degrees."""

    HORIZONTAL = 0
    VERTICAL = 90

    def toggled(self) -> Rotation:
        return Rotation.VERTICAL if self is Rotation.HORIZONTAL else Rotation.HORIZONTAL


class AttackResult(StrEnum):
    """Result of a single attack."""

    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"


class Side(StrEnum):
    """Game participant."""

    PLAYER = "player"
    PC = "pc"


class AIMode(StrEnum):
    """AI targeting mode."""

    HUNT = "hunt"
    TARGET = "target"


@dataclass(frozen=True, slots=True)
class Coord:
    """Grid coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class ShipDefinition:
    """Immutable catalog entry."""

    id: str
    size: int
    color: str
    name: str

    def __post_init__(self) -> None:
        if not 2 <= self.size <= 4:
            raise ValueError(f"Ship size must be between 2 and 4, got {self.size}.")


@dataclass(frozen=True, slots=True)
class ShipInstance:
    """Ship that is not on the grid yet."""

    id: str
    size: int
    color: str
    rotation: Rotation
    name: str

    def at(self, row: int, col: int, rotation: Rotation | None = None) -> PlacedShip:
        return PlacedShip(
            id=self.id,
            size=self.size,
            color=self.color,
            rotation=self.rotation if rotation is None else rotation,
            name=self.name,
            row=row,
            col=col,
        )


@dataclass(frozen=True, slots=True)
class PlacedShip:
    """Ship anchored at (row, col)."""

    id: str
    size: int
    color: str
    rotation: Rotation
    name: str
    row: int
    col: int

    def footprint(self) -> list[Coord]:
        return footprint(self.row, self.col, self.size, self.rotation)

    def to_available(self) -> ShipInstance:
        """Return the ship as an unplaced instance with rotation reset."""
        return ShipInstance(
            id=self.id,
            size=self.size,
            color=self.color,
            rotation=Rotation.HORIZONTAL,
            name=self.name,
        )


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Resolved attack with optional sunk ship name."""

    coord: Coord
    result: AttackResult
    ship_sunk: str | None = None


def footprint(row: int, col: int, size: int, rotation: Rotation) -> list[Coord]:
    """Compute occupied cells for a ship anchored at (row, col)."""
    if rotation is Rotation.HORIZONTAL:
        return [Coord(row, col + i) for i in range(size)]
    return [Coord(row + i, col) for i in range(size)]
