"""Grid state representation, placement validation and mutation helpers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from seabattle.game.core.errors import GameRuleError, OutOfBounds, Overlap
from seabattle.game.core.models import (
    DEFAULT_GRID_SIZE,
    EMPTY,
    HIT,
    MISS,
    Coord,
    Rotation,
    footprint,
)


def _empty_tiles(size: int) -> np.ndarray:
    return np.full((size, size), EMPTY, dtype=object)


@dataclass(slots=True, eq=False)
class Grid:
    """Numpy-backed square matrix of cell states."""

    size: int = DEFAULT_GRID_SIZE
    tiles: np.ndarray = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("Grid size must be positive.")
        if self.tiles is None:
            self.tiles = _empty_tiles(self.size)
        elif self.tiles.shape != (self.size, self.size):
            raise ValueError(
                f"Grid tiles shape {self.tiles.shape} does not match size {self.size}."
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.tiles, other.tiles))

    def copy(self) -> Grid:
        return Grid(size=self.size, tiles=self.tiles.copy())

    def in_bounds(self, row: int, col: int) -> bool:
        """Return whether the coordinate is in grid bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> str:
        return str(self.tiles[row, col])

    def is_resolved(self, row: int, col: int) -> bool:
        """Return whether this cell was previously attacked."""
        return self.tiles[row, col] in (HIT, MISS)

    def fits(self, row: int, col: int, size: int, rotation: Rotation | int) -> bool:
        """Return whether a footprint stays inside the grid."""
        if not self.in_bounds(row, col):
            return False
        if Rotation(rotation) is Rotation.HORIZONTAL:
            return col + size <= self.size
        return row + size <= self.size

    def is_free(
        self,
        row: int,
        col: int,
        size: int,
        rotation: Rotation | int,
        *,
        passable: str | None = None,
    ) -> bool:
        """Return whether an in-bounds footprint covers only empty (or passable) cells."""
        segment = self._segment(row, col, size, Rotation(rotation))
        free = segment == EMPTY
        if passable is not None:
            free |= segment == passable
        return bool(np.all(free))

    def can_place(
        self,
        row: int,
        col: int,
        size: int,
        rotation: Rotation | int,
        *,
        passable: str | None = None,
    ) -> bool:
        """Return whether a placement is in bounds and non-overlapping."""
        if not self.fits(row, col, size, rotation):
            return False
        return self.is_free(row, col, size, rotation, passable=passable)

    def write_footprint(
        self, row: int, col: int, size: int, rotation: Rotation | int, value: str
    ) -> None:
        for cell in footprint(row, col, size, Rotation(rotation)):
            self.tiles[cell.row, cell.col] = value

    def clear_footprint(self, row: int, col: int, size: int, rotation: Rotation | int) -> None:
        self.write_footprint(row, col, size, rotation, EMPTY)

    def clear(self) -> None:
        self.tiles[:, :] = EMPTY

    def unresolved_cells(self) -> list[Coord]:
        """Return every cell that has not been hit or missed, row-major."""
        mask = (self.tiles != HIT) & (self.tiles != MISS)
        return [Coord(int(row), int(col)) for row, col in np.argwhere(mask)]

    def to_payload(self) -> dict[str, object]:
        return {"gridSize": self.size, "tiles": self.tiles.tolist()}

    @classmethod
    def from_payload(cls, payload: object) -> Grid:
        """Build a grid from its JSON shape, rejecting non-square matrices."""
        if not isinstance(payload, dict):
            raise ValueError("Grid payload must be an object.")
        raw_size = payload.get("gridSize")
        if not isinstance(raw_size, int) or raw_size <= 0:
            raise ValueError("Grid gridSize must be a positive int.")
        rows = payload.get("tiles")
        if not isinstance(rows, list) or len(rows) != raw_size:
            raise ValueError("Grid tiles must have gridSize rows.")
        tiles = _empty_tiles(raw_size)
        for r, row in enumerate(rows):
            if not isinstance(row, list) or len(row) != raw_size:
                raise ValueError("Grid tiles must be square.")
            for c, value in enumerate(row):
                if not isinstance(value, str) or not value:
                    raise ValueError(f"Invalid cell state at ({r}, {c}).")
                tiles[r, c] = value
        return cls(size=raw_size, tiles=tiles)

    def _segment(self, row: int, col: int, size: int, rotation: Rotation) -> np.ndarray:
        if rotation is Rotation.HORIZONTAL:
            return self.tiles[row, col : col + size]
        return self.tiles[row : row + size, col]


def validate_placement(
    grid: Grid,
    row: int,
    col: int,
    size: int,
    rotation: Rotation | int,
    *,
    passable: str | None = None,
    overlap_error: type[GameRuleError] = Overlap,
) -> None:
    """Raise when a footprint leaves the grid or hits a foreign occupied cell."""
    if not grid.fits(row, col, size, rotation):
        raise OutOfBounds(f"Ship at ({row}, {col}) exceeds grid boundaries.")
    if not grid.is_free(row, col, size, rotation, passable=passable):
        raise overlap_error(f"Ship at ({row}, {col}) overlaps with existing ship.")
