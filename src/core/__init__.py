"""
Módulo core: modelos de dados, exceções, tipos e constantes.
"""

from src.core.models import (
    ScrapeTask,
    NavigationOutcome,
    LocatorOutcome,
    ScrapeResult,
    BatchSummary,
    SearchRequest,
    SearchResponse,
    StoreInfo,
)
from src.core.exceptions import (
    StockCheckerError,
    ValidationError,
    InvalidQueryError,
    ScraperError,
    LaunchError,
    NavigationFailure,
    LocationExhausted,
    SiteTaskError,
)
from src.core.types import (
    ScrapeStatus,
    WaitPolicy,
    StoreCode,
    SearchQuery,
)

__all__ = [
    # Models
    "ScrapeTask",
    "NavigationOutcome",
    "LocatorOutcome",
    "ScrapeResult",
    "BatchSummary",
    "SearchRequest",
    "SearchResponse",
    "StoreInfo",
    # Exceptions
    "StockCheckerError",
    "ValidationError",
    "InvalidQueryError",
    "ScraperError",
    "LaunchError",
    "NavigationFailure",
    "LocationExhausted",
    "SiteTaskError",
    # Types
    "ScrapeStatus",
    "WaitPolicy",
    "StoreCode",
    "SearchQuery",
]
