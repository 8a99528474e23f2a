from .base import BenchmarkSource
from .resolver import resolve_benchmarks
from .static_source import StaticBenchmarkSource, load_dataset

__all__ = ["BenchmarkSource", "StaticBenchmarkSource", "load_dataset", "resolve_benchmarks"]
