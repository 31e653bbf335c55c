# src/core/errors.py
from __future__ import annotations


class HeatAuditError(ValueError):
    """Base class for calculation failures surfaced to the caller."""


class InvalidEfficiencyError(HeatAuditError):
    """Raised when an efficiency (AFUE) or COP argument is out of range."""


class InsufficientDataError(HeatAuditError):
    """Raised when fewer than the minimum number of heating months are usable."""


class AllExcludedAsOutliersError(HeatAuditError):
    """Raised when outlier rejection removes every remaining heating month."""


class InvalidProfileLengthError(HeatAuditError):
    """Raised when a monthly series does not have exactly 12 entries."""


class MalformedMonthlySeriesError(InvalidProfileLengthError):
    """Raised when a monthly input series is the wrong length or out of order."""
