# src/logging/context.py — v3
"""Contextual logging support: attach batch_id, group and path to log records.

Each concurrently classified file runs in its own asyncio task, which
gets a copy of the context, so ``path`` set inside one task never leaks
into a sibling.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

_batch_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "batch_id", default=None
)
_group: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "group", default=None
)
_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "path", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    batch_id: str | None = None
    group: int | None = None
    path: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        batch_id=_batch_id.get(),
        group=_group.get(),
        path=_path.get(),
    )


def set_batch_context(batch_id: str) -> None:
    """Set batch-level context until cleared; see batch_context for a scoped form."""
    _batch_id.set(batch_id)
    _group.set(None)
    _path.set(None)


@contextmanager
def batch_context(batch_id: str) -> Iterator[None]:
    """Scope batch context to a block; the caller's values are restored on exit."""
    tokens = (_batch_id.set(batch_id), _group.set(None), _path.set(None))
    try:
        yield
    finally:
        for var, token in zip((_batch_id, _group, _path), tokens):
            var.reset(token)


def set_group_context(group: int) -> None:
    """Set the 1-based index of the group being processed."""
    _group.set(group)


def set_path_context(path: str) -> None:
    """Set the file being classified (called inside the per-file task)."""
    _path.set(path)


def clear_context() -> None:
    """Reset all context variables."""
    _batch_id.set(None)
    _group.set(None)
    _path.set(None)
