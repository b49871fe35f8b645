"""Recorded data for one processed frame."""
from dataclasses import dataclass
from typing import Tuple
from domain.point3d import Point3D


@dataclass(frozen=True)
class JointSample:
    """Joint positions read on one tick, in the configured joint order."""
    body_present: bool
    positions: Tuple[Point3D, ...]

    @classmethod
    def absent(cls, joint_count: int) -> "JointSample":
        return cls(False, tuple(Point3D.zero() for _ in range(joint_count)))


@dataclass(frozen=True)
class FrameRecord:
    """
    One line of the trajectory file.

    The record always has a fixed shape: when the marker or the body is
    missing, the flag is False and the positions are zero.

    Attributes:
        timestamp_ms: Encoded timestamp in milliseconds
        marker_present: Whether the marker was found and back-projected
        marker_position: Marker position in camera space
        body_present: Whether a skeleton was tracked
        joints: Joint positions in the configured joint order
    """
    timestamp_ms: int
    marker_present: bool
    marker_position: Point3D
    body_present: bool
    joints: Tuple[Point3D, ...]

    @property
    def timestamp_seconds(self) -> float:
        return self.timestamp_ms / 1000.0
