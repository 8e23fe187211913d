"""
Configuration for boundary extraction.
"""

from .extraction_config import ExtractionConfig, EdgeSettings, MorphologySettings

__all__ = [
    "ExtractionConfig",
    "EdgeSettings",
    "MorphologySettings",
]
