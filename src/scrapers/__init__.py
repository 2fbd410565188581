"""
Módulo de scrapers: sessão do navegador, navegação, localização de
produtos e orquestração do lote.
"""

from src.scrapers.session import BrowserSession
from src.scrapers.navigator import PageNavigator
from src.scrapers.locator import (
    LocatorStrategy,
    SelectorStrategy,
    HeuristicScanStrategy,
    NoResultsDetector,
    ProductLocator,
)
from src.scrapers.store_scraper import StoreScraper
from src.scrapers.manager import ScraperManager

__all__ = [
    "BrowserSession",
    "PageNavigator",
    "LocatorStrategy",
    "SelectorStrategy",
    "HeuristicScanStrategy",
    "NoResultsDetector",
    "ProductLocator",
    "StoreScraper",
    "ScraperManager",
]
