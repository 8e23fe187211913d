"""
Configuration for boundary extraction.

Defaults: 15x15 blur, Canny 50/150, 5x5 elliptical close (2 iterations)
and 3x3 rectangular dilate (1 iteration). Vertices closer than 0.5 px are
merged, contours whose ends are within 5.0 px count as closed, and strokes
are 2 px wide.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

from ..extraction.color_config import BandRanges


@dataclass
class EdgeSettings:
    """Hysteresis thresholds for Canny edge detection."""
    low_threshold: int = 50
    high_threshold: int = 150

    def __post_init__(self):
        """Validate edge thresholds."""
        if self.low_threshold < 0:
            raise ValueError(f"low_threshold must be >= 0, got {self.low_threshold}")
        if self.high_threshold < self.low_threshold:
            raise ValueError(
                f"high_threshold must be >= low_threshold, "
                f"got {self.high_threshold} < {self.low_threshold}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "low_threshold": self.low_threshold,
            "high_threshold": self.high_threshold,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EdgeSettings":
        """Create from dictionary."""
        return cls(
            low_threshold=data.get("low_threshold", 50),
            high_threshold=data.get("high_threshold", 150),
        )


@dataclass
class MorphologySettings:
    """Settings for the gap-closing morphology on the edge map."""
    close_kernel_size: int = 5
    close_iterations: int = 2
    dilate_kernel_size: int = 3
    dilate_iterations: int = 1

    def __post_init__(self):
        """Validate morphology settings."""
        if self.close_kernel_size < 1:
            raise ValueError(f"close_kernel_size must be >= 1, got {self.close_kernel_size}")
        if self.close_iterations < 0:
            raise ValueError(f"close_iterations must be >= 0, got {self.close_iterations}")
        if self.dilate_kernel_size < 1:
            raise ValueError(f"dilate_kernel_size must be >= 1, got {self.dilate_kernel_size}")
        if self.dilate_iterations < 0:
            raise ValueError(f"dilate_iterations must be >= 0, got {self.dilate_iterations}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "close_kernel_size": self.close_kernel_size,
            "close_iterations": self.close_iterations,
            "dilate_kernel_size": self.dilate_kernel_size,
            "dilate_iterations": self.dilate_iterations,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MorphologySettings":
        """Create from dictionary."""
        return cls(
            close_kernel_size=data.get("close_kernel_size", 5),
            close_iterations=data.get("close_iterations", 2),
            dilate_kernel_size=data.get("dilate_kernel_size", 3),
            dilate_iterations=data.get("dilate_iterations", 1),
        )


@dataclass
class ExtractionConfig:
    """
    Configuration for the boundary extraction pipeline.

    Attributes:
        blur_kernel_size: Gaussian blur kernel size (odd)
        color_ranges: HSV ranges for the two marker bands
        edge_settings: Canny thresholds
        morphology_settings: Gap-closing kernels and iterations
        merge_tolerance: Per-axis distance under which two vertices are duplicates
        closure_tolerance: Max first/last distance for a contour to count as closed
        stroke_width: Polyline thickness when rendering
        use_spatial_index: Use the bucketed point reducer instead of the all-pairs one
        keep_intermediates: Keep masks and edge maps on the result for inspection
    """
    blur_kernel_size: int = 15
    color_ranges: BandRanges = field(default_factory=BandRanges)
    edge_settings: EdgeSettings = field(default_factory=EdgeSettings)
    morphology_settings: MorphologySettings = field(default_factory=MorphologySettings)
    merge_tolerance: float = 0.5
    closure_tolerance: float = 5.0
    stroke_width: int = 2
    use_spatial_index: bool = False
    keep_intermediates: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        self._validate()

    def _validate(self):
        """Validate all configuration values."""
        if self.blur_kernel_size < 1 or self.blur_kernel_size % 2 == 0:
            raise ValueError(
                f"blur_kernel_size must be a positive odd number, got {self.blur_kernel_size}"
            )

        if self.merge_tolerance < 0:
            raise ValueError(f"merge_tolerance must be >= 0, got {self.merge_tolerance}")

        if self.closure_tolerance <= 0:
            raise ValueError(f"closure_tolerance must be > 0, got {self.closure_tolerance}")

        if self.stroke_width < 1:
            raise ValueError(f"stroke_width must be >= 1, got {self.stroke_width}")

        # Convert nested settings from dict if needed
        if isinstance(self.color_ranges, dict):
            self.color_ranges = BandRanges.from_dict(self.color_ranges)
        if isinstance(self.edge_settings, dict):
            self.edge_settings = EdgeSettings.from_dict(self.edge_settings)
        if isinstance(self.morphology_settings, dict):
            self.morphology_settings = MorphologySettings.from_dict(self.morphology_settings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "blur_kernel_size": self.blur_kernel_size,
            "color_ranges": self.color_ranges.to_dict(),
            "edge_settings": self.edge_settings.to_dict(),
            "morphology_settings": self.morphology_settings.to_dict(),
            "merge_tolerance": self.merge_tolerance,
            "closure_tolerance": self.closure_tolerance,
            "stroke_width": self.stroke_width,
            "use_spatial_index": self.use_spatial_index,
            "keep_intermediates": self.keep_intermediates,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionConfig":
        """Create from dictionary (e.g., from YAML config)."""
        ranges_data = data.get("color_ranges")
        edge_data = data.get("edge_settings")
        morph_data = data.get("morphology_settings")

        return cls(
            blur_kernel_size=data.get("blur_kernel_size", 15),
            color_ranges=BandRanges.from_dict(ranges_data) if ranges_data else BandRanges(),
            edge_settings=EdgeSettings.from_dict(edge_data) if edge_data else EdgeSettings(),
            morphology_settings=(
                MorphologySettings.from_dict(morph_data) if morph_data else MorphologySettings()
            ),
            merge_tolerance=data.get("merge_tolerance", 0.5),
            closure_tolerance=data.get("closure_tolerance", 5.0),
            stroke_width=data.get("stroke_width", 2),
            use_spatial_index=data.get("use_spatial_index", False),
            keep_intermediates=data.get("keep_intermediates", False),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "ExtractionConfig":
        """Load configuration from YAML file."""
        import yaml

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data.get("boundary_extraction", data))

    @classmethod
    def default(cls) -> "ExtractionConfig":
        """Create default configuration."""
        return cls()
