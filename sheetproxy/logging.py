"""Logging configuration using loguru.

Human-readable colored output for development and serialized JSON for
deployments that ship stdout to a log collector. Each request gets a short
id stored in a context variable so concurrent requests can be told apart.
"""

import sys
from contextvars import ContextVar

from loguru import logger

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def _dev_formatter(_record: dict) -> str:
    request_id = request_id_ctx.get()
    context_str = f"[req={request_id}] " if request_id else ""
    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        + context_str
        + "<level>{message}</level>\n"
        "{exception}"
    )


def _add_request_id(record: dict) -> None:
    request_id = request_id_ctx.get()
    if request_id:
        record["extra"]["request_id"] = request_id


def setup_logging(json_logs: bool = False, log_level: str = "INFO") -> None:
    """Configure loguru for the application.

    Args:
        json_logs: If True, emit one JSON object per line
        log_level: Minimum log level to output
    """
    logger.remove()
    logger.configure(patcher=_add_request_id)

    if json_logs:
        logger.add(sys.stdout, format="{message}", level=log_level, serialize=True)
    else:
        logger.add(sys.stdout, format=_dev_formatter, level=log_level, colorize=True)


def set_request_context(request_id: str | None = None) -> None:
    if request_id:
        request_id_ctx.set(request_id)


def clear_request_context() -> None:
    request_id_ctx.set(None)


__all__ = [
    "logger",
    "setup_logging",
    "set_request_context",
    "clear_request_context",
    "request_id_ctx",
]
