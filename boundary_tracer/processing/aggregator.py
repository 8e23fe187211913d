"""
Multi-image boundary extraction.

Two modes:
- per-image: each boundary is drawn onto its own copy of its source
- combined: every boundary is drawn onto one shared white canvas

A missing boundary or an unreadable file is recorded on that image's
result and the batch moves on.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import numpy as np

from ..config.extraction_config import ExtractionConfig
from ..extraction.extractor import BoundaryExtractor
from ..extraction.models import ExtractionResult, ExtractionStatus
from ..extraction.rendering import create_overlay_canvas, OVERLAY_STROKE_COLOR, WHITE
from .image_io import load_image, save_image

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = "final_boundary.png"
DEFAULT_COMBINED_OUTPUT_PATH = "final_boundary_white_combined.png"

ImageSource = Union[str, Path, np.ndarray]


@dataclass
class BatchResult:
    """
    Result of processing several images.

    Attributes:
        results: One ExtractionResult per input, in input order
        canvas: Shared overlay canvas (combined mode only)
        drawn_count: Number of boundaries drawn onto the canvas
        total_time_ms: Wall-clock time for the batch
    """
    results: List[ExtractionResult] = field(default_factory=list)
    canvas: Optional[np.ndarray] = None
    drawn_count: int = 0
    total_time_ms: float = 0.0

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.status == ExtractionStatus.SUCCESS)

    @property
    def no_boundary(self) -> int:
        return sum(1 for r in self.results if r.status == ExtractionStatus.NO_BOUNDARY)

    @property
    def load_failures(self) -> int:
        return sum(1 for r in self.results if r.status == ExtractionStatus.LOAD_FAILURE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "total_files": self.total,
            "successful": self.successful,
            "no_boundary": self.no_boundary,
            "load_failures": self.load_failures,
            "total_time_ms": round(self.total_time_ms, 2),
            "results": [r.to_dict() for r in self.results],
        }
        if self.canvas is not None:
            result["drawn_count"] = self.drawn_count
            result["canvas_shape"] = {
                "height": int(self.canvas.shape[0]),
                "width": int(self.canvas.shape[1]),
            }
        return result


class MultiImageAggregator:
    """
    Runs the boundary extractor over a list of images.

    Sources may be file paths or decoded BGR arrays.

    Example:
        >>> aggregator = MultiImageAggregator()
        >>> batch = aggregator.run_combined(["a.png", "b.png"])
        >>> print(f"Drew {batch.drawn_count}/{batch.total} boundaries")
    """

    def __init__(
        self,
        extractor: Optional[BoundaryExtractor] = None,
        config: Optional[ExtractionConfig] = None,
        parallel_workers: int = 1,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ):
        """
        Initialize aggregator.

        Args:
            extractor: Pre-configured extractor (built from config if None)
            config: Extraction configuration, used when extractor is None
            parallel_workers: Threads used for extraction (rendering stays serial)
            progress_callback: Callback for progress updates (current, total, label)
        """
        if parallel_workers < 1:
            raise ValueError(f"parallel_workers must be >= 1, got {parallel_workers}")

        self.extractor = extractor or BoundaryExtractor(config)
        self.parallel_workers = parallel_workers
        self.progress_callback = progress_callback

    def run_per_image(self, sources: Sequence[ImageSource]) -> BatchResult:
        """
        Extract and render each boundary onto its own copy of its source.

        Returns:
            BatchResult whose results carry the rendered images
        """
        start_time = time.time()
        results = self._extract_all(sources)

        for result in results:
            if result.success:
                result.image = self.extractor.render(result.image.copy(), result.polygon)

        return BatchResult(
            results=results,
            drawn_count=sum(1 for r in results if r.success),
            total_time_ms=(time.time() - start_time) * 1000,
        )

    def run_combined(self, sources: Sequence[ImageSource]) -> BatchResult:
        """
        Extract every boundary and overlay them on one white canvas.

        The canvas takes the size of the first image that loads. Boundaries
        are drawn in input order, so later strokes cover earlier ones.

        Returns:
            BatchResult with the shared canvas
        """
        start_time = time.time()
        results = self._extract_all(sources)

        canvas = None
        drawn = 0
        for result in results:
            if result.status == ExtractionStatus.LOAD_FAILURE:
                continue

            if canvas is None:
                canvas = create_overlay_canvas(result.image_shape, WHITE)

            if result.success:
                self.extractor.render(canvas, result.polygon, OVERLAY_STROKE_COLOR)
                result.image = None
                drawn += 1

        logger.info(f"Combined overlay: drew {drawn} of {len(results)} boundaries")

        return BatchResult(
            results=results,
            canvas=canvas,
            drawn_count=drawn,
            total_time_ms=(time.time() - start_time) * 1000,
        )

    def save_per_image(
        self,
        batch: BatchResult,
        output_dir: Union[str, Path] = ".",
        suffix: str = "_boundary.png",
    ) -> Dict[str, bool]:
        """
        Write each rendered image as <stem><suffix> into output_dir.

        Only SUCCESS results are written.

        Returns:
            Mapping of output path to whether it was written
        """
        written = {}
        for index, result in enumerate(batch.results):
            if not result.success:
                continue
            stem = Path(result.source).stem if result.source else f"image_{index}"
            output_path = str(Path(output_dir) / f"{stem}{suffix}")
            written[output_path] = save_image(output_path, result.image)
        return written

    def save_combined(
        self,
        batch: BatchResult,
        output_path: Union[str, Path] = DEFAULT_COMBINED_OUTPUT_PATH,
    ) -> bool:
        """Write the combined canvas. Returns False if there is none or the write fails."""
        if batch.canvas is None:
            logger.error("No canvas to save: no input image could be loaded")
            return False
        return save_image(output_path, batch.canvas)

    def _extract_all(self, sources: Sequence[ImageSource]) -> List[ExtractionResult]:
        """Extract boundaries for every source, preserving input order."""
        total = len(sources)

        if self.parallel_workers > 1 and total > 1:
            results: List[Optional[ExtractionResult]] = [None] * total
            completed = 0

            with ThreadPoolExecutor(max_workers=self.parallel_workers) as executor:
                # Submit all jobs
                futures = {}
                for i, source in enumerate(sources):
                    futures[executor.submit(self._extract_one, source)] = i

                # Collect results as they finish, slotted back into input order
                for future in as_completed(futures):
                    i = futures[future]
                    result = future.result()
                    results[i] = result
                    completed += 1

                    if self.progress_callback:
                        self.progress_callback(completed, total, result.source or f"image_{i}")

            return results

        results = []
        for i, source in enumerate(sources):
            result = self._extract_one(source)
            if self.progress_callback:
                self.progress_callback(i + 1, total, result.source or f"image_{i}")
            results.append(result)
        return results

    def _extract_one(self, source: ImageSource) -> ExtractionResult:
        """Load (if needed) and extract one image."""
        if isinstance(source, np.ndarray):
            image, label = source, None
        else:
            label = str(source)
            image = load_image(label)
            if image is None:
                return ExtractionResult.load_failure(source=label)

        try:
            result = self.extractor.extract(image, source=label)
        except ValueError as e:
            logger.error(f"Error processing {label or '<array>'}: {e}")
            result = ExtractionResult.load_failure(source=label)
            result.error = str(e)
            return result

        if result.success:
            # Keep the source around so per-image mode can render onto a copy
            result.image = image
        return result
