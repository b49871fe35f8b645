"""Single-person body tracking with MediaPipe Pose."""
from typing import Dict, Iterable, Optional, Sequence, Set, Tuple
import numpy as np
import cv2
import logging

from domain.joint_type import JointType
from domain.point3d import Point3D
from domain.skeleton import Skeleton
from utils.joint_sampler import parse_joint_list
from config import (
    POSE_MIN_DETECTION_CONFIDENCE, POSE_MIN_TRACKING_CONFIDENCE, POSE_MIN_VISIBILITY,
    RECORDED_JOINTS,
)

logger = logging.getLogger(__name__)

# MediaPipe Pose landmark indices
LANDMARK_INDEX = {
    JointType.SHOULDER_LEFT: 11,
    JointType.SHOULDER_RIGHT: 12,
    JointType.ELBOW_LEFT: 13,
    JointType.ELBOW_RIGHT: 14,
    JointType.WRIST_LEFT: 15,
    JointType.WRIST_RIGHT: 16,
}
SPINE_SHOULDER_SOURCES = (JointType.SHOULDER_LEFT, JointType.SHOULDER_RIGHT)


def required_landmarks(joints: Iterable[JointType]) -> Set[JointType]:
    """Landmarks that must be visible to produce the given joints."""
    needed: Set[JointType] = set()
    for joint in joints:
        if joint is JointType.SPINE_SHOULDER:
            needed.update(SPINE_SHOULDER_SOURCES)
        else:
            needed.add(joint)
    return needed


def landmark_pixels(landmarks, width: int, height: int,
                    required: Set[JointType],
                    min_visibility: float = POSE_MIN_VISIBILITY) -> Optional[Dict[JointType, Tuple[int, int]]]:
    """
    Convert normalized landmarks to color pixels.

    Low-visibility landmarks are left out; None if one of them is required.
    SPINE_SHOULDER is added when both shoulders are visible.
    """
    pixels: Dict[JointType, Tuple[int, int]] = {}
    for joint, index in LANDMARK_INDEX.items():
        lm = landmarks[index]
        if lm.visibility < min_visibility:
            if joint in required:
                return None
            continue
        pixels[joint] = (int(lm.x * width), int(lm.y * height))

    if all(joint in pixels for joint in SPINE_SHOULDER_SOURCES):
        (lx, ly) = pixels[JointType.SHOULDER_LEFT]
        (rx, ry) = pixels[JointType.SHOULDER_RIGHT]
        pixels[JointType.SPINE_SHOULDER] = ((lx + rx) // 2, (ly + ry) // 2)
    return pixels


def lookup_point(table: np.ndarray, pixel: Tuple[int, int]) -> Optional[Point3D]:
    """Mapping table value at (x, y), None if outside the image or without depth."""
    x, y = pixel
    rows, cols = table.shape[:2]
    if not (0 <= x < cols and 0 <= y < rows):
        return None
    px, py, pz = table[y, x]
    point = Point3D(float(px), float(py), float(pz))
    return point if point.is_valid else None


def skeleton_from_pixels(pixels: Dict[JointType, Tuple[int, int]],
                         table: np.ndarray,
                         required: Optional[Iterable[JointType]] = None) -> Skeleton:
    """
    Back-project joint pixels through the color->3D table.

    The skeleton is reported untracked when a required joint (every joint in
    pixels by default) is missing or has no valid depth. Other joints without
    depth are only left out.
    """
    required = set(pixels) if required is None else set(required)
    missing = required.difference(pixels)
    if missing:
        logger.debug(f"No pixel for {', '.join(str(j) for j in missing)}")
        return Skeleton(tracked=False, pixels=pixels)

    joints: Dict[JointType, Point3D] = {}
    for joint, pixel in pixels.items():
        point = lookup_point(table, pixel)
        if point is None:
            if joint in required:
                logger.debug(f"{joint} at {pixel} has no valid depth")
                return Skeleton(tracked=False, pixels=pixels)
            continue
        joints[joint] = point
    return Skeleton(tracked=True, joints=joints, pixels=pixels)


class PoseEstimator:
    """
    Detect one person and return the arm joints plus SPINE_SHOULDER.

    SPINE_SHOULDER has no MediaPipe landmark; it is taken at the midpoint of
    both shoulders. Visibility and depth only gate the recorded joints.
    """

    def __init__(self,
                 joints: Optional[Sequence[JointType]] = None,
                 min_detection_confidence: float = POSE_MIN_DETECTION_CONFIDENCE,
                 min_tracking_confidence: float = POSE_MIN_TRACKING_CONFIDENCE,
                 min_visibility: float = POSE_MIN_VISIBILITY):
        import mediapipe as mp

        self.joints = tuple(joints) if joints is not None else parse_joint_list(RECORDED_JOINTS)
        self.required = required_landmarks(self.joints)
        self.min_visibility = min_visibility
        self.pose = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=1,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

    def estimate(self, color_image: np.ndarray, table: np.ndarray) -> Skeleton:
        if self.pose is None:
            return Skeleton.untracked()

        rgb_frame = cv2.cvtColor(color_image, cv2.COLOR_BGR2RGB)
        results = self.pose.process(rgb_frame)
        if not results.pose_landmarks:
            return Skeleton.untracked()

        height, width = color_image.shape[:2]
        pixels = landmark_pixels(results.pose_landmarks.landmark, width, height,
                                 self.required, self.min_visibility)
        if pixels is None:
            return Skeleton.untracked()
        return skeleton_from_pixels(pixels, table, self.joints)

    def close(self):
        if self.pose is not None:
            self.pose.close()
            self.pose = None
