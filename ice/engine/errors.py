"""Exception taxonomy for calibration runs."""

from __future__ import annotations

from typing import Any, Optional


class CalibrationError(Exception):
    """Base class for every error raised by the calibration engine."""


class InvalidInput(CalibrationError, ValueError):
    """Caller-fixable input problem (negative amounts, unknown tier, bad shape)."""

    def __init__(self, message: str, details: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.details = details or []

    @classmethod
    def from_validation_error(cls, exc: Any, label: str) -> InvalidInput:
        """Build from a pydantic ValidationError, keeping field-level detail."""
        details = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        return cls(f"Invalid {label}", details=details)


class MissingBenchmarkData(CalibrationError, LookupError):
    """A required percentile breakpoint (or a whole benchmark) is unavailable."""

    def __init__(
        self,
        message: str,
        metric: Optional[str] = None,
        industry_id: Optional[str] = None,
        revenue_tier: Optional[str] = None,
    ):
        super().__init__(message)
        self.metric = metric
        self.industry_id = industry_id
        self.revenue_tier = revenue_tier
