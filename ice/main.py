"""FastAPI application for the industry calibration engine."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ice.benchmarks import BenchmarkSource, StaticBenchmarkSource, resolve_benchmarks
from ice.config.settings import Settings
from ice.engine.calibrator import CalibrationEngine, coerce_metrics
from ice.engine.errors import InvalidInput, MissingBenchmarkData
from ice.engine.tiers import classify_revenue, parse_tier, resolve_tier, tier_label
from ice.models.enums import StorageBackend
from ice.storage import (
    CalibrationStore,
    InMemoryCalibrationStore,
    StoredCalibration,
    SupabaseCalibrationStore,
    result_to_document,
)

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Industry Calibration API", version="0.1.0")

# CORS: allow the Next.js dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def build_store(settings: Settings) -> CalibrationStore:
    if settings.storage_backend is StorageBackend.SUPABASE:
        return SupabaseCalibrationStore.from_credentials(
            settings.supabase_url, settings.supabase_key, table=settings.supabase_table
        )
    return InMemoryCalibrationStore()


# Singletons, swapped out in tests through app.dependency_overrides
_engine = CalibrationEngine(settings)
_benchmark_source = StaticBenchmarkSource.from_file(settings.benchmark_file)
_store = build_store(settings)


def get_engine() -> CalibrationEngine:
    return _engine


def get_benchmark_source() -> BenchmarkSource:
    return _benchmark_source


def get_store() -> CalibrationStore:
    return _store


class CalibrateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    industry_id: str
    revenue_tier: Optional[str] = None
    metrics: dict[str, Any]


def _stored_payload(stored: StoredCalibration) -> dict[str, Any]:
    return {
        "profileId": stored.profile_id,
        "calibratedAt": stored.calibrated_at.isoformat(),
        **result_to_document(stored.result, rounded=True),
    }


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid input", "message": str(exc), "details": exc.details},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid input", "details": details},
    )


@app.exception_handler(MissingBenchmarkData)
async def missing_benchmark_handler(request: Request, exc: MissingBenchmarkData):
    return JSONResponse(
        status_code=404,
        content={"success": False, "error": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/calibration/industries")
async def list_industries(source: BenchmarkSource = Depends(get_benchmark_source)):
    """Every known industry, flagged with whether any benchmark exists for it."""
    industries = [
        {**industry.model_dump(), "has_benchmark": source.has_benchmark(industry.id)}
        for industry in source.industries()
    ]
    return {"success": True, "data": industries}


@app.get("/calibration/benchmarks/{industry_id}")
async def get_benchmarks(
    industry_id: str,
    revenue: Optional[float] = None,
    tier: Optional[str] = None,
    source: BenchmarkSource = Depends(get_benchmark_source),
):
    """Resolve the benchmark record a calibration would use."""
    if tier is not None:
        resolved_tier = parse_tier(tier)
    elif revenue is not None:
        resolved_tier = classify_revenue(revenue)
    else:
        raise InvalidInput(
            "Either revenue or tier is required",
            details=[{"loc": "query", "msg": "provide revenue or tier"}],
        )

    if source.industry(industry_id) is None:
        raise MissingBenchmarkData(f"Unknown industry {industry_id}", industry_id=industry_id)

    benchmarks = resolve_benchmarks(source, industry_id, resolved_tier)
    return {
        "success": True,
        "data": {
            "requestedTier": resolved_tier.value,
            "requestedTierLabel": tier_label(resolved_tier),
            "isFallback": (
                benchmarks.industry_id != industry_id
                or benchmarks.revenue_tier is not resolved_tier
            ),
            "benchmarks": benchmarks.model_dump(mode="json"),
        },
    }


@app.post("/calibration/{profile_id}")
async def calibrate(
    profile_id: str,
    body: CalibrateRequest,
    engine: CalibrationEngine = Depends(get_engine),
    source: BenchmarkSource = Depends(get_benchmark_source),
    store: CalibrationStore = Depends(get_store),
):
    """Calibrate a business profile against its industry peers and store the result."""
    metrics = coerce_metrics(body.metrics)
    tier = resolve_tier(metrics.revenue, body.revenue_tier)
    benchmarks = resolve_benchmarks(source, body.industry_id, tier)
    previous = store.previous_health_score(profile_id)

    result = engine.calibrate(
        metrics,
        benchmarks,
        revenue_tier=tier,
        previous_health_score=previous,
    )
    stored = store.upsert(profile_id, body.industry_id, result)
    return {"success": True, "data": _stored_payload(stored)}


@app.get("/calibration/{profile_id}")
async def get_calibration(
    profile_id: str,
    store: CalibrationStore = Depends(get_store),
):
    stored = store.get(profile_id)
    if stored is None:
        return JSONResponse(
            status_code=404,
            content={"success": False, "error": f"No calibration found for profile {profile_id}"},
        )
    return {"success": True, "data": _stored_payload(stored)}
