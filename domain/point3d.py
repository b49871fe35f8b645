"""Camera-space 3D point."""
import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point3D:
    """
    A position in the sensor's camera space.

    Attributes:
        x: Horizontal coordinate (device units, meters for RealSense)
        y: Vertical coordinate
        z: Distance from the sensor along the optical axis
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> "Point3D":
        """Return the placeholder written for absent positions."""
        return cls(0.0, 0.0, 0.0)

    @property
    def is_valid(self) -> bool:
        """Check that the point carries a usable depth measurement."""
        return all(math.isfinite(v) for v in (self.x, self.y, self.z)) and self.z > 0

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"
