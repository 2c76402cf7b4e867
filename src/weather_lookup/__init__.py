"""City weather lookup backed by the Open-Meteo geocoding and forecast APIs."""

from .catalog import NOT_AVAILABLE, ConditionCatalog, resolve_condition
from .models import Candidate, CandidateId, ConditionEntry, DisplayUpdate, WeatherReading
from .orchestrator import WeatherLookupOrchestrator
from .session import LocationSearchSession

__all__ = [
    "NOT_AVAILABLE",
    "Candidate",
    "CandidateId",
    "ConditionCatalog",
    "ConditionEntry",
    "DisplayUpdate",
    "LocationSearchSession",
    "WeatherLookupOrchestrator",
    "WeatherReading",
    "resolve_condition",
]

__version__ = "0.1.0"
