"""Log message formatting backends: level labels, timestamps and time offsets."""

from __future__ import annotations

import sys
import threading
import time
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum, IntEnum


class LogLevel(IntEnum):
    """Severity levels, most severe first."""

    Emerg = 0
    Alert = 1
    Crit = 2
    Err = 3
    Warning = 4
    Notice = 5
    Info = 6
    Debug = 7


_LABELS: dict[int, str] = {
    LogLevel.Emerg: "EMERG",
    LogLevel.Alert: "ALERT",
    LogLevel.Crit: "CRIT ",
    LogLevel.Err: "ERROR",
    LogLevel.Warning: "WARNI",
    LogLevel.Notice: "NOTIC",
    LogLevel.Info: "INFO ",
    LogLevel.Debug: "DEBUG",
}


def level_label(level: int) -> str:
    """Return the five-character label of a level, '?????' if unknown."""
    return _LABELS.get(int(level), "?????")


def _now_us() -> int:
    return time.monotonic_ns() // 1000


class LoggerBackend(ABC):
    """Formats messages with optional level, timestamp and offsets, then writes them."""

    def __init__(
        self,
        max_level: int,
        output_level: bool,
        output_timestamp: bool,
        output_time_offsets: bool,
        append_newline: bool,
    ) -> None:
        self.max_level = int(max_level)
        self.output_level = output_level
        self.output_timestamp = output_timestamp
        self.output_time_offsets = output_time_offsets
        self.append_newline = append_newline
        self._start_us = _now_us()
        self._prev_us = self._start_us
        self._lock = threading.Lock()

    def log_enabled(self, level: int) -> bool:
        return int(level) <= self.max_level

    def flush_message(self, message: str, level: int) -> None:
        """Decorate ``message`` according to the settings and pass it to :meth:`write`."""
        parts: list[str] = []
        if self.output_level:
            parts.append(level_label(level) + " ")
        if self.output_timestamp:
            stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            parts.append(f"[{stamp}] ")
        if self.output_time_offsets:
            with self._lock:
                now = _now_us()
                from_start = now - self._start_us
                from_prev = now - self._prev_us
                self._prev_us = now
            parts.append(f"[{from_start}, +{from_prev}] ")
        parts.append(message)
        if self.append_newline:
            parts.append("\n")
        self.write("".join(parts), level)

    @abstractmethod
    def write(self, message: str, level: int) -> None:
        """Emit an already formatted message."""


class ConsoleTarget(Enum):
    """Where console output goes."""

    COUT = "cout"
    CERR = "cerr"
    PRINTF = "printf"


class ConsoleBackend(LoggerBackend):
    """Writes each message as a line to standard output or standard error."""

    def __init__(
        self,
        max_level: int,
        output_level: bool,
        output_timestamp: bool,
        output_time_offsets: bool,
        target: ConsoleTarget = ConsoleTarget.COUT,
    ) -> None:
        super().__init__(max_level, output_level, output_timestamp, output_time_offsets, False)
        self.target = target

    def write(self, message: str, level: int) -> None:
        if self.target is ConsoleTarget.PRINTF:
            print(message)
        elif self.target is ConsoleTarget.CERR:
            print(message, file=sys.stderr, flush=True)
        else:
            print(message, file=sys.stdout, flush=True)