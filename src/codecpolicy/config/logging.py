"""Log routing for codecpolicy, driven by :class:`CodecSettings`.

``verbose`` opens the ``codecpolicy`` loggers to DEBUG; ``log_json`` swaps
the console renderer for JSON lines. Records from stdlib loggers (the
codec, registry and extension manager use those) and from structlog loggers
leave through the same stderr handler in the same format.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

from codecpolicy.config.settings import CodecSettings

HANDLER_NAME = "codecpolicy"

# Transport loggers kept at WARNING even when verbose.
QUIET_LOGGERS = ("httpx", "httpcore")


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _render_chain(log_json: bool) -> list[Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(settings: CodecSettings | None = None) -> logging.Handler:
    """Install the codecpolicy stderr handler on the root logger.

    Reads ``verbose`` and ``log_json`` from *settings*, or from the
    environment when none are given. Calling again replaces the handler
    installed by the previous call; handlers owned by the host application
    are left in place.
    """
    settings = settings or CodecSettings()
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(settings.log_json),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("codecpolicy").setLevel(
        logging.DEBUG if settings.verbose else logging.WARNING
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
