"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PC_LAYOUT_RETRIES = 5


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Immutable runtime configuration resolved from env vars."""

    log_level: str = "INFO"
    log_format: str = "json"
    pc_layout_retries: int = DEFAULT_PC_LAYOUT_RETRIES
    rng_seed: int | None = None


def load_app_config() -> AppConfig:
    """Resolve configuration from the current process environment."""
    level = os.getenv("SEABATTLE_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    log_format = os.getenv("LOG_FORMAT", "json").strip().lower()
    retries = _int("SEABATTLE_PC_LAYOUT_RETRIES", DEFAULT_PC_LAYOUT_RETRIES)
    raw_seed = os.getenv("SEABATTLE_RNG_SEED", "").strip()
    seed = int(raw_seed) if raw_seed.lstrip("-").isdigit() else None
    return AppConfig(
        log_level=level or "INFO",
        log_format=log_format if log_format in {"text", "json"} else "json",
        pc_layout_retries=max(1, retries),
        rng_seed=seed,
    )


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides.

    Precedence is left-to-right because later loads may overwrite previous values.
    Default order:
    1) appdata/config/.env.app
    2) appdata/config/.env.app.local
    3) .env.app
    4) .env.app.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.app",
            "appdata/config/.env.app.local",
            ".env.app",
            ".env.app.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path
