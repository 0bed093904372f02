# School Fee Tracker client: API wrapper and data façade
from .api import FeesAPI, ApiError
from .state import AppState, Ok, Degraded, PaymentDraft
from .facade import DataFacade

__all__ = [
    "FeesAPI",
    "ApiError",
    "AppState",
    "Ok",
    "Degraded",
    "PaymentDraft",
    "DataFacade",
]
