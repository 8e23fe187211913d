"""
Data structures for boundary extraction results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Dict, Any, Optional
import numpy as np


class ExtractionStatus(Enum):
    """Outcome of running the pipeline on one image."""
    SUCCESS = "success"
    NO_BOUNDARY = "no_boundary"
    LOAD_FAILURE = "load_failure"


@dataclass
class BoundaryPolygon:
    """
    The extracted boundary of one image.

    Attributes:
        points: Ordered (x, y) vertices after reduction and closure repair
        source_closed: Whether the raw contour passed the closure test
        raw_point_count: Number of points in the selected contour before reduction
        perimeter: Closed arc length of the selected contour
    """
    points: List[Tuple[int, int]]
    source_closed: bool
    raw_point_count: int
    perimeter: float = 0.0

    @property
    def vertex_count(self) -> int:
        return len(self.points)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "polygon": [{"x": int(x), "y": int(y)} for x, y in self.points],
            "vertex_count": len(self.points),
            "source_closed": bool(self.source_closed),
            "raw_point_count": int(self.raw_point_count),
            "perimeter": round(float(self.perimeter), 3),
        }


@dataclass
class StageOutputs:
    """Intermediate binary images, kept when the config asks for them."""
    band_a_mask: np.ndarray
    band_b_mask: np.ndarray
    edge_map: np.ndarray
    closed_edges: np.ndarray


@dataclass
class ExtractionResult:
    """
    Result of extracting (and optionally rendering) one boundary.

    Attributes:
        status: Outcome of the run
        polygon: Extracted boundary (SUCCESS only)
        image: Rendered copy of the source after process() or per-image
            mode, the unmodified source on NO_BOUNDARY, otherwise None
        image_shape: (height, width) of the source
        contour_count: Candidate contours found in the edge map
        source: Label of the input (usually its path)
        error: Human-readable reason for a non-success status
        intermediates: Masks and edge maps, when kept
    """
    status: ExtractionStatus
    polygon: Optional[BoundaryPolygon] = None
    image: Optional[np.ndarray] = None
    image_shape: Tuple[int, int] = field(default=(0, 0))
    contour_count: int = 0
    source: Optional[str] = None
    error: Optional[str] = None
    intermediates: Optional[StageOutputs] = None

    @property
    def success(self) -> bool:
        return self.status == ExtractionStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "source": self.source,
            "status": self.status.value,
            "boundary": self.polygon.to_dict() if self.polygon is not None else None,
            "contour_count": int(self.contour_count),
            "image_shape": {
                "height": int(self.image_shape[0]),
                "width": int(self.image_shape[1]),
            },
            "error": self.error,
        }

    @classmethod
    def no_boundary(
        cls,
        image: np.ndarray,
        source: Optional[str] = None,
        intermediates: Optional[StageOutputs] = None,
    ) -> "ExtractionResult":
        """Create a result for an image whose edge map held no contours."""
        return cls(
            status=ExtractionStatus.NO_BOUNDARY,
            image=image,
            image_shape=tuple(image.shape[:2]),
            source=source,
            error="No boundary found",
            intermediates=intermediates,
        )

    @classmethod
    def load_failure(cls, source: Optional[str] = None) -> "ExtractionResult":
        """Create a result for an input that could not be decoded."""
        return cls(
            status=ExtractionStatus.LOAD_FAILURE,
            source=source,
            error="Could not load image",
        )
