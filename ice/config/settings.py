from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from ice.models.enums import StorageBackend

_DEFAULT_BENCHMARK_FILE = (
    Path(__file__).resolve().parent.parent / "benchmarks" / "data" / "industry_benchmarks.json"
)


class Settings(BaseSettings):
    # Projection policy
    growth_rate: float = Field(default=0.03, ge=-0.5, le=1.0)
    ramp_years: int = Field(default=3, ge=1, le=5)

    # Health score policy
    trend_threshold: float = Field(default=2.0, ge=0)

    # Opportunity / quick-fix policy
    assumed_tax_rate: float = Field(default=0.32, ge=0, le=1.0)
    max_pension_contribution: float = Field(default=69_000, ge=0)
    affordable_pension_share: float = Field(default=0.5, ge=0, le=1.0)
    cost_of_capital: float = Field(default=0.08, ge=0, le=1.0)
    refinancing_spread: float = Field(default=0.10, ge=0, le=1.0)

    # Collaborators
    benchmark_file: Path = _DEFAULT_BENCHMARK_FILE
    storage_backend: StorageBackend = StorageBackend.MEMORY
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_table: str = "business_calibrations"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "ICE_"
