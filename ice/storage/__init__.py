from .base import CalibrationStore, StoredCalibration
from .mapping import result_from_document, result_to_document
from .memory import InMemoryCalibrationStore
from .supabase_store import SupabaseCalibrationStore

__all__ = [
    "CalibrationStore",
    "InMemoryCalibrationStore",
    "StoredCalibration",
    "SupabaseCalibrationStore",
    "result_from_document",
    "result_to_document",
]
