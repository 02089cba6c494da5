"""Structured logging for the engine and tool layer, built on structlog.

The engine itself never configures logging; hosts call ``setup_logging`` once
at startup. Concurrent tool calls keep their own context through
structlog.contextvars (see ``tool_call_context``).
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


def setup_logging(log_level: str = "INFO") -> None:
    """Route engine and tool-call events through stdlib logging.

    Called by the host application, never by the engine. Engine events
    (``confluence_scored``, ``position_sized``, ``position_unsafe``,
    ``engine_call_failed``) carry Decimal figures pre-rendered as strings,
    and anything bound by ``tool_call_context`` is merged into every line
    emitted while a tool call runs, so concurrent chat sessions stay
    distinguishable in one stream.

    Rendering is chosen by the LOG_FORMAT environment variable:
    - "json" for log shipping
    - "console" for local development (default)

    Args:
        log_level: Root level name; unknown names fall back to INFO.
    """
    log_format = os.environ.get("LOG_FORMAT", "console").lower()

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))


@contextmanager
def tool_call_context(tool: str, **fields: object) -> Iterator[None]:
    """Bind ``tool`` (plus any extra fields) to every log line in the block."""
    with structlog.contextvars.bound_contextvars(tool=tool, **fields):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)
