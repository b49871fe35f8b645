"""Domain models for marker and skeleton trajectory recording."""
from domain.point3d import Point3D
from domain.color_range import ColorRange
from domain.joint_type import JointType
from domain.skeleton import Skeleton, SensorFrame
from domain.frame_record import FrameRecord, JointSample
from domain.recording_state import RecordingState, RecordingStateError, SensorUnavailableError
from domain.recording_session import RecordingSession

__all__ = [
    "Point3D",
    "ColorRange",
    "JointType",
    "Skeleton",
    "SensorFrame",
    "FrameRecord",
    "JointSample",
    "RecordingState",
    "RecordingStateError",
    "SensorUnavailableError",
    "RecordingSession",
]
