"""
HoleBreaker Logging

Console loggers with per-module levels, plus a JSONL sink for the
session timeline (start, levels cleared, game over, win).

Usage:
    from holebreaker.logging import get_logger

    log = get_logger('game_mode')
    log.info("Level %d cleared", level)

    from holebreaker.logging import FileSink, emit_record, register_sink
    register_sink('session', FileSink())
    emit_record('session', {'type': 'level_cleared', 'level': 2, 'score': 340})

Configuration:
    HOLEBREAKER_LOG_LEVEL=DEBUG          # Level for every module
    HOLEBREAKER_LOG_GAME_MODE=DEBUG      # Level for one module
    HOLEBREAKER_LOG_DIR=/tmp/hb-logs     # Where FileSink writes
"""

import json
import os
import sys
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

_ENV_PREFIX = 'HOLEBREAKER_LOG_'


class LogLevel(IntEnum):
    """Console thresholds, numbered like the stdlib levels."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100


# =============================================================================
# Session records
# =============================================================================

class LogSink(ABC):
    """Destination for structured session records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record for ``module``."""

    @abstractmethod
    def close(self) -> None:
        """Release whatever the sink holds open."""


class FileSink(LogSink):
    """
    One JSONL file per record stream, named ``<session>_<module>.jsonl``.

    The first record in a file is a header and ``close()`` appends a
    footer, so a truncated file is easy to spot.

    Args:
        log_dir: Output directory (default: get_log_dir())
        session_name: File name prefix (default: start timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def _open(self, module: str) -> TextIO:
        if module in self._files:
            return self._files[module]

        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)

        f = open(self._log_dir / f"{self._session_name}_{module}.jsonl", 'a')
        f.write(json.dumps({
            "type": "header",
            "module": module,
            "session_name": self._session_name,
            "start_time": time.time(),
        }) + "\n")
        self._files[module] = f
        return f

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        self._open(module).write(json.dumps(record) + "\n")

    def close(self) -> None:
        for module, f in self._files.items():
            f.write(json.dumps({"type": "footer", "module": module, "end_time": time.time()}) + "\n")
            f.close()
        self._files.clear()


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route records for ``module`` to ``sink``."""
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to the sink registered for ``module``.

    Returns:
        False when nothing is registered and the record was dropped
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and forget every registered sink."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


# =============================================================================
# Console loggers
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
}


def get_log_dir() -> str:
    """HOLEBREAKER_LOG_DIR if set, else $XDG_DATA_HOME/holebreaker/logs."""
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())

    xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return str(Path(xdg_data) / 'holebreaker' / 'logs')


def _level_from_string(level_str: str) -> LogLevel:
    name = level_str.upper()
    if name == 'WARN':
        name = 'WARNING'
    return LogLevel.__members__.get(name, LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Set console levels from code instead of the environment.

    Args:
        level: Level for modules without their own entry
        modules: module_name -> level overrides
        log_dir: Directory for FileSink output
    """
    _config['default_level'] = _level_from_string(level)
    for mod, mod_level in (modules or {}).items():
        _config['module_levels'][mod] = _level_from_string(mod_level)
    if log_dir:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    level_key = _ENV_PREFIX + 'LEVEL'
    dir_key = _ENV_PREFIX + 'DIR'

    for key, value in os.environ.items():
        if key == level_key:
            _config['default_level'] = _level_from_string(value)
        elif key == dir_key:
            _config['log_dir'] = value
        elif key.startswith(_ENV_PREFIX):
            # HOLEBREAKER_LOG_GAME_MODE=DEBUG -> game_mode
            _config['module_levels'][key[len(_ENV_PREFIX):].lower()] = _level_from_string(value)


_load_env_config()


class HoleBreakerLogger:
    """Prints ``[module] LEVEL: message`` lines to stderr."""

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_')

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._module_key, _config['default_level'])

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}", file=sys.stderr)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> HoleBreakerLogger:
    """Cached per-module logger."""
    return HoleBreakerLogger(module)
