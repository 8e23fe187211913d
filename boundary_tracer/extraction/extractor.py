"""
BoundaryExtractor: runs the full extraction pipeline on one image.
"""

import logging
import numpy as np
from typing import Optional

from ..config.extraction_config import ExtractionConfig
from .models import BoundaryPolygon, ExtractionResult, ExtractionStatus, StageOutputs
from .mask_detection import build_band_masks
from .edge_synthesis import synthesize_edges
from .gap_closing import close_gaps
from .contour_extraction import (
    find_external_contours,
    select_longest_contour,
    contour_perimeter,
    contour_points,
)
from .point_reduction import reduce_points, reduce_points_indexed
from .closure import repair_closure
from .rendering import draw_boundary, SOURCE_STROKE_COLOR

logger = logging.getLogger(__name__)


class BoundaryExtractor:
    """
    Extracts the closed outline delimited by the two marker colors.

    Pipeline:
    1. Blur, convert to HSV and mask Band A / Band B (with hue wrap)
    2. Canny per mask, OR the edge maps
    3. Close gaps (elliptical close + rectangular dilate)
    4. Keep the external contour with the longest perimeter
    5. Drop near-duplicate vertices
    6. Re-close the polygon if the raw contour was closed

    Example:
        >>> extractor = BoundaryExtractor()
        >>> result = extractor.process(image)
        >>> if result.success:
        ...     print(result.polygon.points)
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize the extractor.

        Args:
            config: Extraction configuration. If None, uses defaults.
        """
        self.config = config or ExtractionConfig.default()

    def extract(self, image: np.ndarray, source: Optional[str] = None) -> ExtractionResult:
        """
        Run the pipeline up to closure repair, without rendering.

        Args:
            image: BGR image (from cv2.imread)
            source: Optional label for logs and results

        Returns:
            ExtractionResult with status SUCCESS (polygon set, image None)
            or NO_BOUNDARY (image is the unmodified input)

        Raises:
            ValueError: If image is not a 3-channel image
        """
        self._check_image(image)
        config = self.config
        label = source or "<array>"

        band_a_mask, band_b_mask = build_band_masks(
            image,
            config.color_ranges,
            config.blur_kernel_size,
        )

        edge_map = synthesize_edges(
            band_a_mask,
            band_b_mask,
            config.edge_settings.low_threshold,
            config.edge_settings.high_threshold,
        )

        closed_edges = close_gaps(edge_map, config.morphology_settings)

        intermediates = None
        if config.keep_intermediates:
            intermediates = StageOutputs(
                band_a_mask=band_a_mask,
                band_b_mask=band_b_mask,
                edge_map=edge_map,
                closed_edges=closed_edges,
            )

        contours = find_external_contours(closed_edges)
        logger.debug(f"{label}: {len(contours)} candidate contours")

        if not contours:
            logger.info(f"No boundary found: {label}")
            return ExtractionResult.no_boundary(image, source=source, intermediates=intermediates)

        longest = select_longest_contour(contours)
        raw_points = contour_points(longest)

        if config.use_spatial_index:
            reduced = reduce_points_indexed(raw_points, config.merge_tolerance)
        else:
            reduced = reduce_points(raw_points, config.merge_tolerance)

        points, source_closed = repair_closure(reduced, raw_points, config.closure_tolerance)
        logger.debug(
            f"{label}: {len(raw_points)} raw points -> {len(reduced)} reduced, "
            f"source closed: {source_closed}"
        )

        polygon = BoundaryPolygon(
            points=points,
            source_closed=source_closed,
            raw_point_count=len(raw_points),
            perimeter=contour_perimeter(longest),
        )

        return ExtractionResult(
            status=ExtractionStatus.SUCCESS,
            polygon=polygon,
            image_shape=tuple(image.shape[:2]),
            contour_count=len(contours),
            source=source,
            intermediates=intermediates,
        )

    def render(
        self,
        canvas: np.ndarray,
        polygon: BoundaryPolygon,
        color=SOURCE_STROKE_COLOR,
    ) -> np.ndarray:
        """Draw a polygon onto canvas in place with the configured stroke width."""
        return draw_boundary(canvas, polygon.points, color, self.config.stroke_width)

    def process(self, image: np.ndarray, source: Optional[str] = None) -> ExtractionResult:
        """
        Run the full pipeline and draw the boundary onto a copy of the image.

        The input array is never modified. On NO_BOUNDARY the result image is
        the input itself.

        Args:
            image: BGR image
            source: Optional label for logs and results

        Returns:
            ExtractionResult with the rendered image set
        """
        result = self.extract(image, source=source)

        if result.success:
            result.image = self.render(image.copy(), result.polygon)
            logger.info(
                f"Boundary drawn for {source or '<array>'}: "
                f"{result.polygon.vertex_count} vertices"
            )

        return result

    @staticmethod
    def _check_image(image: np.ndarray):
        if not isinstance(image, np.ndarray) or image.ndim != 3 or image.shape[2] != 3:
            shape = getattr(image, "shape", None)
            raise ValueError(f"Expected an HxWx3 BGR image, got shape {shape}")
        if image.size == 0:
            raise ValueError("Expected a non-empty image")
