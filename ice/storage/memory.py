from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from ice.engine.result import CalibrationResult
from ice.storage.base import CalibrationStore, StoredCalibration

logger = logging.getLogger(__name__)


class InMemoryCalibrationStore(CalibrationStore):
    """Process-local store; contents are lost on restart."""

    def __init__(self):
        self._rows: dict[str, StoredCalibration] = {}

    def get(self, profile_id: str) -> Optional[StoredCalibration]:
        return self._rows.get(profile_id)

    def upsert(
        self,
        profile_id: str,
        industry_id: str,
        result: CalibrationResult,
    ) -> StoredCalibration:
        calibrated_at = datetime.now(tz=timezone.utc)
        existing = self._rows.get(profile_id)
        # Keep calibrated_at strictly increasing even within one clock tick.
        if existing is not None and calibrated_at <= existing.calibrated_at:
            calibrated_at = existing.calibrated_at + timedelta(microseconds=1)

        stored = StoredCalibration(
            profile_id=profile_id,
            industry_id=industry_id,
            result=result,
            calibrated_at=calibrated_at,
        )
        self._rows[profile_id] = stored
        logger.debug("Stored calibration for profile %s", profile_id)
        return stored

    def clear(self) -> None:
        self._rows.clear()
