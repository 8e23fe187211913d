"""
Boundary Extraction Module

Isolates the two marker hue bands, turns them into edges and reduces the
result to one closed, de-duplicated polygon.
"""

from .models import (
    BoundaryPolygon,
    ExtractionResult,
    ExtractionStatus,
    StageOutputs,
)
from .color_config import BandRanges, ColorRange

__all__ = [
    "BoundaryPolygon",
    "ExtractionResult",
    "ExtractionStatus",
    "StageOutputs",
    "BandRanges",
    "ColorRange",
]
