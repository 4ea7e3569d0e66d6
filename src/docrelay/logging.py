"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


_batch_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("docrelay_batch_id", default="-")
_action_var: contextvars.ContextVar[str] = contextvars.ContextVar("docrelay_action", default="-")


class _ContextFilter(logging.Filter):
    """Inject batch context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.batch_id = _batch_id_var.get()  # type: ignore[attr-defined]
        record.action = _action_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def batch_context(*, batch_id: str, action: str | None = None) -> Any:
    """Temporarily bind batch context for structured logging.

    Args:
        batch_id: Batch identifier.
        action: Optional action label (e.g. ``"3:delete"``).
    """

    token_batch = _batch_id_var.set(batch_id)
    token_action = _action_var.set(action or _action_var.get())
    try:
        yield
    finally:
        _batch_id_var.reset(token_batch)
        _action_var.reset(token_action)


def set_action(action: str) -> None:
    """Update current action in context."""

    _action_var.set(action)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    # stderr keeps stdout clean for JSON printed by the CLI.
    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_time=True, show_level=True
    )
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s batch=%(batch_id)s action=%(action)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers if configure_logging is called multiple times
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                if not any(isinstance(f, _ContextFilter) for f in h.filters):
                    h.addFilter(_ContextFilter())
                h.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log an exception with optional structured context."""

    if context:
        logger.exception("%s | context=%s", msg, context)
    else:
        logger.exception("%s", msg)
