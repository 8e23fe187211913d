"""
Marker Boundary Tracer

Extracts the closed outline of an object bordered by two colored markers
and overlays outlines from several images on a shared canvas.
"""

from .config.extraction_config import ExtractionConfig
from .extraction.models import BoundaryPolygon, ExtractionResult, ExtractionStatus
from .extraction.extractor import BoundaryExtractor
from .processing.aggregator import MultiImageAggregator, BatchResult

__all__ = [
    "ExtractionConfig",
    "BoundaryPolygon",
    "ExtractionResult",
    "ExtractionStatus",
    "BoundaryExtractor",
    "MultiImageAggregator",
    "BatchResult",
]
