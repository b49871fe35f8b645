from typing import List, Optional

import cv2
import numpy as np
import pytest

from domain.joint_type import JointType
from domain.point3d import Point3D
from domain.skeleton import SensorFrame, Skeleton
from utils.sensor_source import SensorSource

# HSV value inside the default MARKER_HSV_RANGE (76-102, 112-256, 171-256)
MARKER_HSV = (90, 200, 220)

ARM_JOINTS = (
    JointType.SHOULDER_LEFT,
    JointType.ELBOW_LEFT,
    JointType.WRIST_LEFT,
    JointType.SPINE_SHOULDER,
)


def marker_bgr():
    hsv = np.uint8([[MARKER_HSV]])
    return tuple(int(v) for v in cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)[0, 0])


def blank_image(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width, 3), dtype=np.uint8)


def paint_square(image: np.ndarray, center, half: int, color=None) -> np.ndarray:
    """Fill a (2*half+1)-pixel square centred on (x, y)."""
    x, y = center
    image[y - half:y + half + 1, x - half:x + half + 1] = color if color is not None else marker_bgr()
    return image


def arm_skeleton() -> Skeleton:
    joints = {
        JointType.SHOULDER_LEFT: Point3D(0.1, 0.3, 1.5),
        JointType.ELBOW_LEFT: Point3D(0.2, 0.1, 1.4),
        JointType.WRIST_LEFT: Point3D(0.3, -0.1, 1.3),
        JointType.SPINE_SHOULDER: Point3D(0.0, 0.35, 1.55),
    }
    pixels = {joint: (600 + 10 * i, 300 + 10 * i) for i, joint in enumerate(joints)}
    return Skeleton(tracked=True, joints=joints, pixels=pixels)


class FakeSensor(SensorSource):
    """Replays a list of frames; None entries simulate ticks without a fresh frame."""

    def __init__(self, frames: List[Optional[SensorFrame]], repeat_last: bool = True):
        self.frames = list(frames)
        self.repeat_last = repeat_last
        self.released = False
        self._last: Optional[SensorFrame] = None

    def initialize(self) -> bool:
        return True

    def acquire(self) -> Optional[SensorFrame]:
        if self.frames:
            frame = self.frames.pop(0)
            if frame is not None:
                self._last = frame
            return frame
        return self._last if self.repeat_last else None

    def release(self):
        self.released = True


class ListWriter:
    """In-memory stand-in for TrajectoryWriter."""

    def __init__(self, output_path="memory.txt"):
        self.output_path = output_path
        self.batches = []
        self.opened = 0
        self.closed = 0

    def open(self):
        self.opened += 1

    def write_records(self, records) -> int:
        batch = list(records)
        self.batches.append(batch)
        return len(batch)

    def close(self):
        self.closed += 1


@pytest.fixture
def marker_frame() -> SensorFrame:
    """
    1280x720 frame whose marker lands at (100, 100) in the downscaled image,
    mapped to (0.1, 0.2, 1.0), with a tracked arm.
    """
    image = blank_image(1280, 720)
    paint_square(image, (200, 200), 40)
    table = np.zeros((720, 1280, 3), dtype=np.float64)
    table[150:251, 150:251] = (0.1, 0.2, 1.0)
    return SensorFrame(color_image=image, color_to_camera=table, skeleton=arm_skeleton())


@pytest.fixture
def empty_frame() -> SensorFrame:
    return SensorFrame(
        color_image=blank_image(1280, 720),
        color_to_camera=np.zeros((720, 1280, 3), dtype=np.float32),
        skeleton=Skeleton.untracked(),
    )
