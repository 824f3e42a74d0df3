"""
Provides structured logging with log levels.

Every entry is a single line: a UTC timestamp, the level, a dotted event name
and key-value pairs, e.g.::

    2024-05-01 12:00:00 | [INFO] | mkv.extract.complete | file="Movie.mkv" | track=2

Lines go through ``tqdm.write`` so they never break an active progress bar.
"""
import sys
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from tqdm import tqdm

_print_lock = threading.Lock()
_separator = " | "


class LogLevel(Enum):
    """Log level enumeration."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


_current_level = LogLevel.INFO


def set_log_level(level: LogLevel) -> None:
    """Set the current log level."""
    global _current_level
    _current_level = level


def get_log_level() -> LogLevel:
    """Get the current log level."""
    return _current_level


def _format_kv(data: Dict[str, Any]) -> str:
    """Format key-value pairs for logging."""
    parts = []
    for key, value in data.items():
        if isinstance(value, str):
            # Escape quotes and newlines to keep log entries single-line.
            escaped = value.replace("\r", "\\r").replace("\n", "\\n")
            escaped = escaped.replace('"', '\\"')
            parts.append(f'{key}="{escaped}"')
        elif value is None:
            parts.append(f'{key}=null')
        elif isinstance(value, bool):
            parts.append(f'{key}={str(value).lower()}')
        else:
            parts.append(f'{key}={value}')
    return _separator.join(parts)


def _write_line(text: str, file=None) -> None:
    tqdm.write(text, file=file or sys.stdout)


def _should_log(level: LogLevel) -> bool:
    """Check if a message at the given level should be logged."""
    return level.value >= _current_level.value


def log(event: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
    """
    Structured logging function.

    Args:
        event: Event name (e.g., 'probe.failed', 'organize.move.complete')
        level: Log level (TRACE, DEBUG, INFO, WARN, ERROR)
        **kwargs: Key-value pairs to log
    """
    if not _should_log(level):
        return

    with _print_lock:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        kv_str = _format_kv(kwargs) if kwargs else ""
        header = f"{timestamp}{_separator}[{level.name}]{_separator}{event}"

        if kv_str:
            _write_line(f"{header}{_separator}{kv_str}")
        else:
            _write_line(header)


def safe_print(*args, **kwargs) -> None:
    """
    Thread-safe print function for human-facing output.
    Use log() for structured logging instead.
    """
    with _print_lock:
        print(*args, **kwargs, flush=True)
