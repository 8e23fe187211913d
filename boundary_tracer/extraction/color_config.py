"""
HSV color range configuration for the two boundary marker bands.

Band A picks up the purple marker, Band B the orange marker. Orange runs
into red near the top of the hue circle, so Band B carries a second
wrap range that is OR-ed into its mask.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Any, Tuple
import numpy as np


@dataclass
class ColorRange:
    """
    Defines HSV color range bounds for detection.

    HSV ranges for OpenCV:
    - Hue: 0-180 (not 0-360)
    - Saturation: 0-255
    - Value: 0-255
    """
    lower: Tuple[int, int, int]  # (H, S, V) lower bound
    upper: Tuple[int, int, int]  # (H, S, V) upper bound

    def __post_init__(self):
        """Validate HSV ranges."""
        self.lower = tuple(int(v) for v in self.lower)
        self.upper = tuple(int(v) for v in self.upper)
        self._validate()

    def _validate(self):
        """Validate that HSV values are within valid ranges."""
        if len(self.lower) != 3 or len(self.upper) != 3:
            raise ValueError("HSV bounds must have exactly 3 components")

        for label, bound in (("Lower", self.lower), ("Upper", self.upper)):
            if not (0 <= bound[0] <= 180):
                raise ValueError(f"{label} hue must be 0-180, got {bound[0]}")
            if not (0 <= bound[1] <= 255):
                raise ValueError(f"{label} saturation must be 0-255, got {bound[1]}")
            if not (0 <= bound[2] <= 255):
                raise ValueError(f"{label} value must be 0-255, got {bound[2]}")

    def to_numpy(self) -> Tuple[np.ndarray, np.ndarray]:
        """Convert to numpy arrays for cv2.inRange."""
        return (
            np.array(self.lower, dtype=np.uint8),
            np.array(self.upper, dtype=np.uint8),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "lower": {"h": self.lower[0], "s": self.lower[1], "v": self.lower[2]},
            "upper": {"h": self.upper[0], "s": self.upper[1], "v": self.upper[2]},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorRange":
        """Create from dictionary."""
        lower = (data["lower"]["h"], data["lower"]["s"], data["lower"]["v"])
        upper = (data["upper"]["h"], data["upper"]["s"], data["upper"]["v"])
        return cls(lower=lower, upper=upper)


# Band A: purple marker
BAND_A_RANGE = ColorRange(lower=(120, 40, 40), upper=(170, 255, 255))
# Band B: orange marker
BAND_B_RANGE = ColorRange(lower=(0, 40, 40), upper=(30, 255, 255))
# Band B hue wrap: reds just below 180
BAND_B_WRAP_RANGE = ColorRange(lower=(170, 40, 40), upper=(180, 255, 255))


@dataclass
class BandRanges:
    """
    The three HSV ranges used by the mask builder.

    Attributes:
        band_a: Range for the first marker color
        band_b: Range for the second marker color
        band_b_wrap: Extra range OR-ed into Band B for hues past the wrap point
    """
    band_a: ColorRange = field(default_factory=lambda: replace(BAND_A_RANGE))
    band_b: ColorRange = field(default_factory=lambda: replace(BAND_B_RANGE))
    band_b_wrap: ColorRange = field(default_factory=lambda: replace(BAND_B_WRAP_RANGE))

    def __post_init__(self):
        """Accept plain dictionaries for each band."""
        for name in ("band_a", "band_b", "band_b_wrap"):
            value = getattr(self, name)
            if isinstance(value, dict):
                setattr(self, name, ColorRange.from_dict(value))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "band_a": self.band_a.to_dict(),
            "band_b": self.band_b.to_dict(),
            "band_b_wrap": self.band_b_wrap.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BandRanges":
        """Create from dictionary, falling back to defaults for missing bands."""
        defaults = cls()
        return cls(
            band_a=ColorRange.from_dict(data["band_a"]) if "band_a" in data else defaults.band_a,
            band_b=ColorRange.from_dict(data["band_b"]) if "band_b" in data else defaults.band_b,
            band_b_wrap=(
                ColorRange.from_dict(data["band_b_wrap"])
                if "band_b_wrap" in data else defaults.band_b_wrap
            ),
        )

    @classmethod
    def default(cls) -> "BandRanges":
        """Create the default purple/orange ranges."""
        return cls()
