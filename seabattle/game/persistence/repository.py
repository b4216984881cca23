"""Persistence layer for loading/saving session snapshots."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from seabattle.game.core.fleet import PcFleet
from seabattle.game.core.grid import Grid
from seabattle.game.core.planning import PlanningState, new_planning_state
from seabattle.game.core.rules import GameState
from seabattle.game.persistence.schema import (
    GameSettings,
    game_state_to_payload,
    payload_to_game_state,
    payload_to_pc_fleet,
    payload_to_planning,
    payload_to_settings,
    pc_fleet_to_payload,
    planning_to_payload,
    settings_to_payload,
)

SETTINGS_FILE = "settings.json"
PLANNING_FILE = "planning.json"
PLAYER_GRID_FILE = "player_grid.json"
PC_GRID_FILE = "pc_grid.json"
PC_SHIPS_FILE = "pc_ships.json"
GAME_STATE_FILE = "game_state.json"

_SESSION_LOCKS: dict[Path, threading.RLock] = {}
_SESSION_LOCKS_GUARD = threading.Lock()


def _session_lock(root: Path) -> threading.RLock:
    """Return the lock shared by every repository opened on ``root``."""
    key = root.resolve()
    with _SESSION_LOCKS_GUARD:
        lock = _SESSION_LOCKS.get(key)
        if lock is None:
            lock = threading.RLock()
            _SESSION_LOCKS[key] = lock
        return lock


class SessionRepository:
    """JSON file repository for one game session.

    Services must run each load-transform-save sequence inside
    :meth:`transaction`. Every repository opened on the same directory shares
    one lock, so concurrent requests against a session are serialized.
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)
        self._lock = _session_lock(root)

    @property
    def root(self) -> Path:
        return self._root

    @contextmanager
    def transaction(self) -> Iterator[SessionRepository]:
        """Hold the session lock for a whole read-modify-write."""
        with self._lock:
            yield self

    def ensure_defaults(self) -> list[str]:
        """Create any missing session file with its default content."""
        created: list[str] = []
        with self._lock:
            if not self._path(SETTINGS_FILE).exists():
                self.save_settings(GameSettings())
                created.append(SETTINGS_FILE)
            size = self.load_settings().grid_size
            if not self._path(PLANNING_FILE).exists():
                self.save_planning(new_planning_state(size))
                created.append(PLANNING_FILE)
            for name in (PLAYER_GRID_FILE, PC_GRID_FILE):
                if not self._path(name).exists():
                    self._write(name, Grid(size=size).to_payload())
                    created.append(name)
        return created

    def load_settings(self) -> GameSettings:
        if not self._path(SETTINGS_FILE).exists():
            return GameSettings()
        return payload_to_settings(self._read(SETTINGS_FILE))

    def save_settings(self, settings: GameSettings) -> None:
        self._write(SETTINGS_FILE, settings_to_payload(settings))

    def load_planning(self) -> PlanningState:
        if not self._path(PLANNING_FILE).exists():
            return new_planning_state(self.load_settings().grid_size)
        return payload_to_planning(self._read(PLANNING_FILE))

    def save_planning(self, state: PlanningState) -> None:
        self._write(PLANNING_FILE, planning_to_payload(state))

    def load_player_grid(self) -> Grid:
        return self._load_grid(PLAYER_GRID_FILE)

    def save_player_grid(self, grid: Grid) -> None:
        self._write(PLAYER_GRID_FILE, grid.to_payload())

    def load_pc_grid(self) -> Grid:
        return self._load_grid(PC_GRID_FILE)

    def save_pc_grid(self, grid: Grid) -> None:
        self._write(PC_GRID_FILE, grid.to_payload())

    def load_pc_fleet(self) -> PcFleet | None:
        if not self._path(PC_SHIPS_FILE).exists():
            return None
        return payload_to_pc_fleet(self._read(PC_SHIPS_FILE))

    def save_pc_fleet(self, fleet: PcFleet) -> None:
        self._write(PC_SHIPS_FILE, pc_fleet_to_payload(fleet))

    def load_game_state(self) -> GameState | None:
        if not self._path(GAME_STATE_FILE).exists():
            return None
        return payload_to_game_state(self._read(GAME_STATE_FILE))

    def save_game_state(self, game: GameState) -> None:
        self._write(GAME_STATE_FILE, game_state_to_payload(game))

    def discard_game(self) -> bool:
        """Delete the game state and PC roster; return whether a game existed."""
        with self._lock:
            existed = self._path(GAME_STATE_FILE).exists()
            for name in (GAME_STATE_FILE, PC_SHIPS_FILE):
                self._path(name).unlink(missing_ok=True)
        return existed

    def _load_grid(self, name: str) -> Grid:
        if not self._path(name).exists():
            return Grid(size=self.load_settings().grid_size)
        return Grid.from_payload(self._read(name))

    def _path(self, name: str) -> Path:
        return self._root / name

    def _read(self, name: str) -> object:
        with self._path(name).open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def _write(self, name: str, payload: dict[str, object]) -> None:
        path = self._path(name)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self._root, prefix=f"{name}.", suffix=".tmp", delete=False
        ) as handle:
            json.dump(payload, handle, indent=2)
        os.replace(handle.name, path)
