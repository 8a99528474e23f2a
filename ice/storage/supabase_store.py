"""Supabase-backed calibration store.

One row per business profile in the configured table:

    business_profile_id  text primary key
    industry_id          text
    revenue_tier         text
    health_score         float8
    calibration          jsonb   (full-precision result document)
    calibrated_at        timestamptz
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from supabase import Client, create_client

from ice.engine.result import CalibrationResult
from ice.storage.base import CalibrationStore, StoredCalibration
from ice.storage.mapping import result_from_document, result_to_document

logger = logging.getLogger(__name__)


class SupabaseCalibrationStore(CalibrationStore):
    def __init__(self, client: Client, table: str = "business_calibrations"):
        self._client = client
        self._table = table

    @classmethod
    def from_credentials(
        cls, url: str, key: str, table: str = "business_calibrations"
    ) -> SupabaseCalibrationStore:
        if not url or not key:
            raise ValueError("Supabase URL and key are required for the supabase backend")
        return cls(create_client(url, key), table=table)

    def get(self, profile_id: str) -> Optional[StoredCalibration]:
        response = (
            self._client.table(self._table)
            .select("*")
            .eq("business_profile_id", profile_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self._row_to_stored(response.data[0])

    def upsert(
        self,
        profile_id: str,
        industry_id: str,
        result: CalibrationResult,
    ) -> StoredCalibration:
        calibrated_at = datetime.now(tz=timezone.utc)
        row = {
            "business_profile_id": profile_id,
            "industry_id": industry_id,
            "revenue_tier": result.revenue_tier.value,
            "health_score": result.health.score,
            "calibration": result_to_document(result),
            "calibrated_at": calibrated_at.isoformat(),
        }
        self._client.table(self._table).upsert(row, on_conflict="business_profile_id").execute()
        logger.info("Upserted calibration for profile %s into %s", profile_id, self._table)
        return StoredCalibration(
            profile_id=profile_id,
            industry_id=industry_id,
            result=result,
            calibrated_at=calibrated_at,
        )

    @staticmethod
    def _row_to_stored(row: dict[str, Any]) -> StoredCalibration:
        return StoredCalibration(
            profile_id=row["business_profile_id"],
            industry_id=row["industry_id"],
            result=result_from_document(row["calibration"]),
            calibrated_at=datetime.fromisoformat(row["calibrated_at"]),
        )
