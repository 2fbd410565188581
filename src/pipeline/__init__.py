"""
Módulo de pipeline: limpeza de texto e correspondência com a query.
"""

from src.pipeline.normalizer import TextNormalizer, clean_product_name, normalize
from src.pipeline.matcher import MatchEngine, matches

__all__ = [
    "TextNormalizer",
    "MatchEngine",
    "clean_product_name",
    "normalize",
    "matches",
]
