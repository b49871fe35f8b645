"""HSV color range of the tracked marker."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ColorRange:
    """
    Inclusive HSV bounds defining the marker color.

    OpenCV hue runs 0-179; saturation and value run 0-255. Upper bounds of
    256 are accepted so a channel can be left fully open.
    """
    hue_min: int
    hue_max: int
    saturation_min: int
    saturation_max: int
    value_min: int
    value_max: int

    def __post_init__(self):
        for name, low, high in (
            ("hue", self.hue_min, self.hue_max),
            ("saturation", self.saturation_min, self.saturation_max),
            ("value", self.value_min, self.value_max),
        ):
            if low > high:
                raise ValueError(f"Invalid {name} range: {low} > {high}")

    @property
    def lower(self) -> Tuple[int, int, int]:
        return (self.hue_min, self.saturation_min, self.value_min)

    @property
    def upper(self) -> Tuple[int, int, int]:
        return (self.hue_max, self.saturation_max, self.value_max)

    @classmethod
    def from_tuple(cls, bounds: Tuple[int, int, int, int, int, int]) -> "ColorRange":
        """Build from (h_min, h_max, s_min, s_max, v_min, v_max)."""
        return cls(*bounds)
