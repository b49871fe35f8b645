"""Reads the recorded subset of skeleton joints on each tick."""
from typing import Iterable, Optional, Sequence, Tuple
import logging

from domain.frame_record import JointSample
from domain.joint_type import JointType
from domain.skeleton import Skeleton
from config import RECORDED_JOINTS

logger = logging.getLogger(__name__)


def parse_joint_list(names: Iterable[str]) -> Tuple[JointType, ...]:
    """Convert configured joint names to JointType values, keeping order."""
    joints = tuple(JointType(name) for name in names)
    if not joints:
        raise ValueError("At least one joint must be recorded")
    if len(set(joints)) != len(joints):
        raise ValueError(f"Duplicate joints in {list(names)}")
    return joints


class JointSampler:
    """
    Sample a fixed, ordered list of joints from the current skeleton.

    Presence is a single flag per tick: either every configured joint is read
    from a tracked skeleton, or the whole sample is absent.
    """

    def __init__(self, joints: Optional[Sequence[JointType]] = None):
        self.joints: Tuple[JointType, ...] = (
            tuple(joints) if joints is not None else parse_joint_list(RECORDED_JOINTS)
        )

    @property
    def joint_count(self) -> int:
        return len(self.joints)

    def sample(self, skeleton: Optional[Skeleton]) -> JointSample:
        if skeleton is None or not skeleton.tracked:
            return JointSample.absent(self.joint_count)

        missing = [joint for joint in self.joints if joint not in skeleton.joints]
        if missing:
            logger.debug(f"Tracked skeleton lacks {', '.join(str(j) for j in missing)}")
            return JointSample.absent(self.joint_count)

        return JointSample(True, tuple(skeleton.joints[joint] for joint in self.joints))
