"""Logging setup shared by the HTTP service and the CLI scripts.

One call to setup_logging() at the top of an entrypoint wires the root
logger; library modules only ever do ``logging.getLogger(__name__)``.

Features:
    - Console handler (human format, optional ANSI level colors)
    - Optional file handler, plain or rotating by size/time, human or JSON lines
    - Per-request fields (app, algorithm) carried in a ContextVar
    - Python warnings and uncaught exceptions routed into the log

Public API:
    setup_logging(**cfg.logging.as_kwargs(), context={"app": "serve"})
    get_logger(name)
    with log_context(algorithm="dda"): ...
    push_context(app="draw") / pop_context(["app"]) / get_context()
    install_excepthook()

Line formats:
    human  2026-10-16T13:45:12.345Z INFO     [app=serve algorithm=dda] rasterlab.service.app: Drew 12 samples
    json   {"ts": "2026-10-16T13:45:12.345000+00:00", "level": "INFO", "logger": "...", "msg": "...", "app": "serve"}

Fields live in a ContextVar, so uvicorn worker threads and asyncio tasks
each see only their own request's fields.  Reconfiguring replaces the
handlers installed by the previous setup_logging() call and leaves any
others (pytest's capture handler, for instance) alone.
"""

import contextvars
import json as _json
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

_fields: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "rasterlab_log_fields", default={}
)

_owned_handlers: List[logging.Handler] = []

_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


# ============================================================================
# FORMATTERS
# ============================================================================

class ContextFormatter(logging.Formatter):
    """Base formatter: record timestamp plus the current context fields."""

    def __init__(self, tz: str = "UTC"):
        super().__init__()
        if tz not in ("UTC", "local"):
            raise ValueError(f"tz must be 'UTC' or 'local', got {tz!r}")
        self.tz = tz

    def timestamp(self, record: logging.LogRecord) -> datetime:
        if self.tz == "UTC":
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created).astimezone()

    @staticmethod
    def fields() -> Dict[str, Any]:
        return dict(_fields.get())


class HumanFormatter(ContextFormatter):
    """Single-line text: timestamp, padded level, [fields], logger, message."""

    def __init__(self, color: bool = False, tz: str = "UTC"):
        super().__init__(tz)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        ts = self.timestamp(record)
        stamp = ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}"
        if self.tz == "UTC":
            stamp += "Z"

        level = f"{record.levelname:<8}"
        if self.color:
            level = f"{_LEVEL_COLORS.get(record.levelno, '')}{level}{_RESET}"

        head = f"{stamp} {level}"
        fields = self.fields()
        if fields:
            head += " [" + " ".join(f"{k}={v}" for k, v in fields.items()) + "]"

        text = f"{head} {record.name}: {record.getMessage()}"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class JsonFormatter(ContextFormatter):
    """One JSON object per line; context fields are merged at top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(self.fields())
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return _json.dumps(payload, default=str)


# ============================================================================
# HANDLERS
# ============================================================================

def _file_handler(path: str, rotate: Optional[Dict[str, Any]]) -> logging.Handler:
    """Plain or rotating file handler; parent directories are created."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    if not rotate:
        return logging.FileHandler(path, encoding="utf-8")

    mode = rotate.get("mode", "size")
    if mode == "size":
        return logging.handlers.RotatingFileHandler(
            path,
            maxBytes=int(rotate.get("max_bytes", 10_000_000)),
            backupCount=int(rotate.get("backup_count", 5)),
            encoding="utf-8",
        )
    if mode == "time":
        return logging.handlers.TimedRotatingFileHandler(
            path,
            when=rotate.get("when", "midnight"),
            interval=int(rotate.get("interval", 1)),
            backupCount=int(rotate.get("backup_count", 7)),
            encoding="utf-8",
            utc=True,
        )
    raise ValueError(f"Unknown rotation mode {mode!r}; use 'size' or 'time'")


# ============================================================================
# PUBLIC API
# ============================================================================

def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Configure the root logger; safe to call more than once.

    Parameters
    ----------
    log_level : str
        Root level name, case-insensitive ("debug", "INFO", ...)
    log_file : str, optional
        Also write to this file; None disables file output
    json : bool
        JSON lines in the file instead of the human format
    color : bool
        Color level names on the console (only when stderr is a TTY)
    to_stderr : bool
        Install the console handler
    rotate : dict, optional
        ``{"mode": "size", "max_bytes": ..., "backup_count": ...}`` or
        ``{"mode": "time", "when": "midnight", "interval": 1, "backup_count": ...}``
    tz : str
        "UTC" or "local" timestamps
    capture_warnings : bool
        Route ``warnings.warn`` through the ``py.warnings`` logger
    quiet_libs : list[str], optional
        Loggers raised to WARNING (e.g. "uvicorn.access")
    context : dict, optional
        Fields pushed for the rest of the process (e.g. {"app": "serve"})

    Returns
    -------
    dict
        ``{"level": int, "handlers": [...]}`` describing what was installed

    Raises
    ------
    ValueError
        Unknown level, timezone or rotation mode
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(HumanFormatter(color=color and sys.stderr.isatty(), tz=tz))
        handlers.append(console)
    if log_file:
        file_handler = _file_handler(str(log_file), rotate)
        file_handler.setFormatter(JsonFormatter(tz) if json else HumanFormatter(tz=tz))
        handlers.append(file_handler)

    root = logging.getLogger()
    while _owned_handlers:
        old = _owned_handlers.pop()
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        root.addHandler(handler)
        _owned_handlers.append(handler)
    root.setLevel(level)

    for lib in quiet_libs or ():
        logging.getLogger(lib).setLevel(logging.WARNING)
    if capture_warnings:
        logging.captureWarnings(True)
    if context:
        push_context(**context)

    return {"level": level, "handlers": list(handlers)}


def get_logger(name: str) -> logging.Logger:
    """Module logger (pass __name__)."""
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the root level without touching handlers (e.g. on -v)."""
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.getLogger().setLevel(value)


def push_context(**fields: Any) -> None:
    """Merge fields into the current context; they stay until popped."""
    _fields.set({**_fields.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop the named fields, or every field when keys is None."""
    if keys is None:
        _fields.set({})
        return
    _fields.set({k: v for k, v in _fields.get().items() if k not in keys})


def get_context() -> Dict[str, Any]:
    """Copy of the fields attached to records logged from here."""
    return dict(_fields.get())


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach fields for the duration of a block, then restore the previous set.

    Examples
    --------
    >>> with log_context(algorithm="wu-antialiased"):
    ...     logger.info("Drew %d samples", n)   # → "... [algorithm=wu-antialiased] ..."
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield
    finally:
        _fields.reset(token)


def install_excepthook() -> None:
    """Send uncaught exceptions (but not Ctrl+C) to the log at CRITICAL."""
    def _hook(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        logging.getLogger("rasterlab").critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_tb)
        )

    sys.excepthook = _hook


def shutdown() -> None:
    """Flush and close every handler; call once at process exit."""
    logging.shutdown()
