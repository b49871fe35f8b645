"""Overlays drawn on the preview image before recording starts."""
from typing import Optional, Tuple
import numpy as np
import cv2

from domain.joint_type import JointType
from domain.skeleton import Skeleton
from config import SMALL_RATIO

# BGR colors
JOINT_COLORS = {
    JointType.SHOULDER_LEFT: (0, 0, 255),
    JointType.ELBOW_LEFT: (255, 0, 255),
    JointType.WRIST_LEFT: (255, 255, 0),
    JointType.SPINE_SHOULDER: (0, 255, 0),
}
BONES = (
    (JointType.SPINE_SHOULDER, JointType.SHOULDER_LEFT),
    (JointType.SHOULDER_LEFT, JointType.ELBOW_LEFT),
    (JointType.ELBOW_LEFT, JointType.WRIST_LEFT),
)
BONE_COLOR = (255, 255, 255)
MARKER_COLOR = (0, 255, 0)


def _scale(pixel: Tuple[int, int], ratio: float) -> Tuple[int, int]:
    return (int(pixel[0] * ratio), int(pixel[1] * ratio))


def draw_arm(image: np.ndarray, skeleton: Skeleton, small_ratio: float = SMALL_RATIO) -> np.ndarray:
    """
    Draw the tracked arm on the downscaled frame, in place.

    Joint pixels are full-resolution color coordinates and are scaled by
    small_ratio. Nothing is drawn for an untracked skeleton.
    """
    if not skeleton.tracked:
        return image

    points = {
        joint: _scale(pixel, small_ratio)
        for joint, pixel in skeleton.pixels.items()
        if joint in JOINT_COLORS
    }
    for joint, point in points.items():
        cv2.circle(image, point, 10, JOINT_COLORS[joint], 5)
    for start, end in BONES:
        if start in points and end in points:
            cv2.line(image, points[start], points[end], BONE_COLOR, 5)
    return image


def draw_marker(image: np.ndarray, pixel: Optional[Tuple[int, int]]) -> np.ndarray:
    if pixel is not None:
        cv2.circle(image, pixel, 20, MARKER_COLOR, 2)
    return image


def render_preview(small_image: np.ndarray, skeleton: Skeleton,
                   marker_pixel: Optional[Tuple[int, int]],
                   small_ratio: float = SMALL_RATIO) -> np.ndarray:
    """Copy of the downscaled frame with arm and marker overlays."""
    preview = small_image.copy()
    draw_arm(preview, skeleton, small_ratio)
    draw_marker(preview, marker_pixel)
    return preview
