"""Exception types raised across DebtTrack."""

from __future__ import annotations


class DebtTrackError(Exception):
    """Base class for application errors."""


class DebtNotConfiguredError(DebtTrackError):
    """Raised when an operation needs a debt but none has been set up."""


class RecordStoreError(DebtTrackError):
    """The record store failed to read or persist a record."""


class RecordNotFoundError(RecordStoreError):
    """A record targeted by an update or delete does not exist."""

    def __init__(self, kind: str, record_id: object) -> None:
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class ReportError(DebtTrackError):
    """The report builder received data it cannot render."""


class ReportExportError(DebtTrackError):
    """Producing or saving the report artifact failed."""


class ChartExportError(DebtTrackError):
    """Rendering or saving a chart image failed."""


__all__ = [
    "DebtTrackError",
    "DebtNotConfiguredError",
    "RecordStoreError",
    "RecordNotFoundError",
    "ReportError",
    "ReportExportError",
    "ChartExportError",
]
