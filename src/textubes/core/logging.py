# src/textubes/core/logging.py
"""Logging setup: structlog layered over stdlib logging.

Loggers from get_logger() and plain logging.getLogger() loggers share one
handler on stderr. A ProcessorFormatter renders both as JSON lines or as
console output; stdout stays free for command output such as
`textubes run --format json`.

Node values can be very long (repeat, zalgo, wraptext of a whole file), so
string fields in log events are clipped to MAX_FIELD_CHARS before rendering.
"""

import logging
import sys
from typing import IO, Any

import structlog
from structlog.stdlib import ProcessorFormatter

from textubes.core.config import LoggingSettings

LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

MAX_FIELD_CHARS = 200

# Chatty at DEBUG; held at WARNING or the root level, whichever is stricter
_QUIET_LOGGERS: tuple[str, ...] = ("dynaconf", "pluggy")


def clip(text: str, limit: int = MAX_FIELD_CHARS) -> str:
    """Shorten text past limit, noting how many characters were cut."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... (+{len(text) - limit} chars)"


def _clip_text_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Clip string fields, and string values one level inside dict fields."""
    for key, value in list(event_dict.items()):
        if key == "event":
            continue
        if isinstance(value, str):
            event_dict[key] = clip(value)
        elif isinstance(value, dict):
            event_dict[key] = {k: clip(v) if isinstance(v, str) else v for k, v in value.items()}
    return event_dict


def _drop_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # ProcessorFormatter always sets both
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _render_chain(json_output: bool, stream: IO[str]) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_keys,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [
        _drop_formatter_keys,
        structlog.dev.ConsoleRenderer(colors=stream.isatty()),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: IO[str] | None = None,
) -> None:
    """Route structlog and stdlib logging through a single handler.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        json_output: Emit JSON lines instead of console output.
        level: DEBUG, INFO, WARNING or ERROR (case-insensitive).
        stream: Destination; defaults to the current sys.stderr.

    Raises:
        ValueError: If level is not one of LEVELS
    """
    try:
        log_level = LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LEVELS)}") from None
    if stream is None:
        stream = sys.stderr

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        _clip_text_fields,
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output, stream), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    quiet_level = max(log_level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def configure_from_settings(settings: LoggingSettings, *, verbose: bool = False, json_logs: bool = False) -> None:
    """Apply a settings file's logging section.

    The --verbose and --json-logs command-line flags take precedence over
    the file.
    """
    configure_logging(
        json_output=json_logs or settings.json_output,
        level="DEBUG" if verbose else settings.level,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for a module (pass __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
