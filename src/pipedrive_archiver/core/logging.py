"""structlog setup for pipedrive-archiver.

Log events always go to stderr so they never mix with the run report on
stdout. A terminal gets the console renderer; anything else gets one JSON
object per line.
"""

import logging
import re
import sys

import structlog

from pipedrive_archiver.output.colors import use_color


_PRIORITY_KEYS = ("timestamp", "level", "component", "event")

# httpx error text embeds the request URL, which carries the token.
_API_TOKEN_RE = re.compile(r"(api_token=)[^&\s'\"]+")


def redact_api_token(
    logger: object, method_name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    """Mask ``api_token=...`` query values in every string field."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "api_token=" in value:
            event_dict[key] = _API_TOKEN_RE.sub(r"\1***", value)
    return event_dict


def reorder_keys(
    logger: object, method_name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    """Put timestamp, level, component and event first in JSON lines."""
    ordered: dict[str, object] = {
        key: event_dict[key] for key in _PRIORITY_KEYS if key in event_dict
    }
    ordered.update(event_dict)
    return ordered


def configure_logging(log_level: str = "warning") -> None:
    """Configure structlog from the ``logging.level`` setting.

    Unknown level names fall back to warning, so a run only reports
    archive failures unless asked for more.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    if sys.stderr.isatty():
        processors.append(redact_api_token)
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(
            colors=use_color(sys.stderr)
        )
    else:
        processors += [structlog.processors.dict_tracebacks, redact_api_token, reorder_keys]
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **context: object) -> structlog.stdlib.BoundLogger:
    """Logger bound to a component name (``archiver``, ``main``)."""
    return structlog.get_logger(component=component, **context)
