"""Logging setup for the precompiler CLI: structlog events rendered through stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

_ENV_LEVEL = "SHADER_PRECOMPILER_LOG_LEVEL"
_ENV_FORMAT = "SHADER_PRECOMPILER_LOG_FORMAT"


def _pre_chain() -> list[structlog.types.Processor]:
    # Applied both to structlog events and to records from plain stdlib loggers.
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    # No colours when stderr is redirected, e.g. into an IDE build log.
    return structlog.dev.ConsoleRenderer(colors=os.isatty(2))


def setup_logging(verbose: bool = False) -> None:
    """Route build events to stderr.

    ``SHADER_PRECOMPILER_LOG_LEVEL`` sets the level (default INFO; ``verbose``
    forces DEBUG) and ``SHADER_PRECOMPILER_LOG_FORMAT`` picks ``console`` or
    ``json``. Stdout stays reserved for compiler output and the summary line.
    """
    level = "DEBUG" if verbose else os.environ.get(_ENV_LEVEL, "INFO").upper()
    pre_chain = _pre_chain()

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(os.environ.get(_ENV_FORMAT, "console").lower()),
        ],
    )
    handler = logging.StreamHandler()  # stderr
    handler.setFormatter(formatter)

    logging.config.dictConfig({"version": 1, "disable_existing_loggers": False})
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
