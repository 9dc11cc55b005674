"""Deterministic runtime executable resolution helpers.

Responsibilities:
- Resolve external executable paths with deterministic bundled-first precedence.
- Fail fast with `MissingToolError` when a required tool is unavailable.
"""

from __future__ import annotations

from pathlib import Path
import shutil
import sys

from .errors import MissingToolError


def find_executable(command_name: str) -> str | None:
    """Return a bundled or PATH executable location, or `None` when absent."""

    for candidate in _bundled_candidates(command_name):
        if candidate.is_file():
            return str(candidate)
    return shutil.which(command_name)


def require_executable(command_name: str, *, stage: str) -> str:
    """Resolve an executable or raise `MissingToolError` for the given stage."""

    found = find_executable(command_name.strip())
    if found is None:
        raise MissingToolError(
            stage=stage,
            detail=f"The `{command_name}` command is required but was not found.",
            hint=f"Install `{command_name}` or use `--encoding-backend chardet`.",
        )
    return found


def _bundled_candidates(command_name: str) -> list[Path]:
    """Return deterministic bundled candidate paths for one executable name."""

    app_root = _app_root()
    names = _candidate_names(command_name)
    candidates: list[Path] = []
    for name in names:
        candidates.append(app_root / "bin" / name)
        candidates.append(app_root / name)
    return candidates


def _candidate_names(command_name: str) -> tuple[str, ...]:
    """Return command name variants including Windows `.exe` fallback."""

    lowered = command_name.lower()
    if lowered.endswith(".exe"):
        return (command_name,)
    return (command_name, f"{command_name}.exe")


def _app_root() -> Path:
    """Resolve runtime application root for frozen and non-frozen execution."""

    frozen = bool(getattr(sys, "frozen", False))
    if frozen:
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]
