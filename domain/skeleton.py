"""Skeleton and per-tick sensor frame data structures."""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
import numpy as np
from domain.joint_type import JointType
from domain.point3d import Point3D


@dataclass
class Skeleton:
    """
    Body tracking result for at most one person.

    Attributes:
        tracked: Whether a body is tracked on this tick
        joints: Camera-space position per joint
        pixels: Full-resolution color image coordinates per joint (preview only)
    """
    tracked: bool = False
    joints: Dict[JointType, Point3D] = field(default_factory=dict)
    pixels: Dict[JointType, Tuple[int, int]] = field(default_factory=dict)

    @classmethod
    def untracked(cls) -> "Skeleton":
        return cls(tracked=False)


@dataclass
class SensorFrame:
    """
    Everything the sensor delivers for one tick.

    Attributes:
        color_image: BGR color image (H x W x 3, uint8)
        color_to_camera: Color->3D mapping table (H x W x 3, float32); invalid
            pixels hold zero or non-finite values
        skeleton: Body tracking result
        captured_at: Sensor timestamp in milliseconds, if provided
    """
    color_image: np.ndarray
    color_to_camera: np.ndarray
    skeleton: Skeleton = field(default_factory=Skeleton.untracked)
    captured_at: Optional[float] = None
