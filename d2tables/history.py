"""Undo history of configuration snapshots and persisted application settings."""

from __future__ import annotations

import configparser
import copy
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_UNDO_LIMIT = 50
DEFAULT_LANG_ID = "en_US"
DEFAULT_THEME_ID = "dark"

_SECTION = "General"


class UndoHistory:
    """Bounded stack of configuration snapshots; the last one is the current state."""

    def __init__(self, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._states: deque[Any] = deque()

    def push(self, data: Any) -> None:
        """Record a new snapshot, dropping the oldest ones beyond the limit."""
        self._states.append(copy.deepcopy(data))
        while len(self._states) > self.limit:
            self._states.popleft()

    def undo(self) -> Any:
        """Discard the current snapshot and return the one before it."""
        if not self.can_undo():
            raise IndexError("nothing to undo")
        self._states.pop()
        return copy.deepcopy(self._states[-1])

    def can_undo(self) -> bool:
        return len(self._states) > 1

    def __len__(self) -> int:
        return len(self._states)


@dataclass(frozen=True)
class AppSettings:
    """User interface language and theme."""

    lang_id: str = DEFAULT_LANG_ID
    theme_id: str = DEFAULT_THEME_ID


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # type: ignore[assignment, method-assign]
    if path.is_file():
        parser.read(path, encoding="utf-8")
    return parser


def load_app_settings(path: str | Path) -> AppSettings:
    """Read settings from an INI file; missing file or keys give the defaults."""
    parser = _read_ini(Path(path))
    if not parser.has_section(_SECTION):
        return AppSettings()
    section = parser[_SECTION]
    return AppSettings(
        lang_id=section.get("langId", DEFAULT_LANG_ID),
        theme_id=section.get("themeId", DEFAULT_THEME_ID),
    )


def save_app_setting(path: str | Path, key: str, value: str) -> None:
    """Store one setting in the INI file, keeping the others."""
    path = Path(path)
    parser = _read_ini(path)
    if not parser.has_section(_SECTION):
        parser.add_section(_SECTION)
    parser[_SECTION][key] = value
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        parser.write(handle)