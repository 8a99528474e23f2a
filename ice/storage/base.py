from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ice.engine.result import CalibrationResult


@dataclass(frozen=True)
class StoredCalibration:
    """The latest calibration persisted for one business profile."""

    profile_id: str
    industry_id: str
    result: CalibrationResult
    calibrated_at: datetime


class CalibrationStore(ABC):
    """Abstract base for calibration persistence (one row per profile)."""

    @abstractmethod
    def get(self, profile_id: str) -> Optional[StoredCalibration]:
        """Return the stored calibration for a profile, or None."""
        ...

    @abstractmethod
    def upsert(
        self,
        profile_id: str,
        industry_id: str,
        result: CalibrationResult,
    ) -> StoredCalibration:
        """Insert or replace the profile's calibration, refreshing calibrated_at."""
        ...

    def previous_health_score(self, profile_id: str) -> Optional[float]:
        stored = self.get(profile_id)
        return stored.result.health.score if stored is not None else None
