"""Translate SQLAlchemy failures into record-store errors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from ...errors import RecordStoreError
from ...logging_config import get_logger

logger = get_logger(__name__)

# Marks an update argument the caller did not pass.
KEEP = object()


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise database errors raised inside the block as RecordStoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Record store failure while %s", action, exc_info=True)
        raise RecordStoreError(f"Failed {action}: {exc}") from exc
