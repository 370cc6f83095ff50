"""ResuMate log output: structlog events and stdlib records through one formatter."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

# Chatty client libraries stay at WARNING unless we run in DEBUG.
_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai")

# Resumes, job descriptions and model replies can be pages long.
MAX_FIELD_CHARS = 2000


def _clip_long_strings(_logger, _method, event_dict: dict) -> dict:
    """Shorten oversized string fields so a pasted document never floods the log."""
    for key, value in event_dict.items():
        if isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
            event_dict[key] = f"{value[:MAX_FIELD_CHARS]}... [{len(value)} chars]"
    return event_dict


def _build_formatter(shared_processors: list, debug: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def _open_log_file(file_path: str, max_mb: int, backups: int) -> RotatingFileHandler | None:
    path = Path(file_path.strip()).resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=max_mb * 1024 * 1024,
            backupCount=backups,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Log file disabled: could not open {path}: {e}\n")
        return None


def setup_logging(
    level: str = "INFO",
    file_path: str = "",
    rotation_max_mb: int = 5,
    rotation_backups: int = 3,
) -> None:
    """Route workflow, store and backend logs to stdout and an optional file.

    Production runs emit one JSON object per line; DEBUG switches to the
    console renderer and lets the HTTP and Gemini client loggers through.
    Long string fields are clipped to MAX_FIELD_CHARS.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    debug = log_level <= logging.DEBUG

    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _clip_long_strings,
    ]
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    formatter = _build_formatter(shared_processors, debug)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path and file_path.strip():
        file_handler = _open_log_file(file_path, rotation_max_mb, rotation_backups)
        if file_handler is not None:
            handlers.append(file_handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
