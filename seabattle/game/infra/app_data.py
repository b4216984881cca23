"""Unified SeaBattle app-data paths."""

from __future__ import annotations

import os
import sys
from pathlib import Path

DEFAULT_SESSION = "default"


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for SeaBattle runtime state."""
    configured = os.getenv("SEABATTLE_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_game_root() / candidate
    return resolve_game_root() / "appdata"


def resolve_game_root() -> Path:
    """Resolve the runtime game root directory."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[3]


def resolve_logs_dir() -> Path:
    """Resolve logs directory, honoring SEABATTLE_LOG_DIR."""
    configured = os.getenv("SEABATTLE_LOG_DIR", "").strip()
    if not configured:
        return resolve_app_data_root() / "logs"
    candidate = Path(configured)
    if candidate.is_absolute():
        return candidate
    return resolve_app_data_root() / candidate


def resolve_sessions_dir() -> Path:
    """Resolve sessions directory under app-data root."""
    return resolve_app_data_root() / "sessions"


def resolve_session_dir(session: str = DEFAULT_SESSION) -> Path:
    """Resolve the directory holding one session's snapshot files."""
    cleaned = "".join(char if char.isalnum() or char in {"-", "_"} else "_" for char in session)
    return resolve_sessions_dir() / (cleaned.strip("_") or DEFAULT_SESSION)


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create app-data directories and return resolved paths."""
    root = resolve_app_data_root()
    logs = resolve_logs_dir()
    sessions = resolve_sessions_dir()
    root.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    sessions.mkdir(parents=True, exist_ok=True)
    return {"root": root, "logs": logs, "sessions": sessions}
