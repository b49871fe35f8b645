"""Skeleton joint enumeration."""
from enum import Enum


class JointType(Enum):
    """
    Named skeleton joints the recorder knows how to sample.

    Names follow the sensor body model; SPINE_SHOULDER is the point between
    both shoulders at the base of the neck.
    """
    SPINE_SHOULDER = "spine_shoulder"
    SHOULDER_LEFT = "shoulder_left"
    ELBOW_LEFT = "elbow_left"
    WRIST_LEFT = "wrist_left"
    SHOULDER_RIGHT = "shoulder_right"
    ELBOW_RIGHT = "elbow_right"
    WRIST_RIGHT = "wrist_right"

    def __str__(self) -> str:
        """Return human-readable joint name."""
        return self.value.replace('_', ' ').title()
