"""Bounded in-memory buffer of frame records."""
from typing import Iterator
import numpy as np

from domain.frame_record import FrameRecord
from domain.point3d import Point3D
from config import MAX_FRAMES, RECORDED_JOINTS


def record_dtype(joint_count: int) -> np.dtype:
    """Structured dtype holding one FrameRecord."""
    return np.dtype([
        ("timestamp_ms", np.int64),
        ("marker_present", np.bool_),
        ("marker", np.float64, (3,)),
        ("body_present", np.bool_),
        ("joints", np.float64, (joint_count, 3)),
    ])


class RecordingBuffer:
    """
    Preallocated record storage with a logical length.

    The backing array is reserved once for the maximum number of frames and
    reused across sessions; clear() only resets the length.

    Usage:
        buffer = RecordingBuffer(capacity=10000, joint_count=4)
        buffer.append(record)
        if buffer.is_full:
            ...
    """

    def __init__(self, capacity: int = MAX_FRAMES, joint_count: int = len(RECORDED_JOINTS)):
        if capacity <= 0:
            raise ValueError(f"Buffer capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.joint_count = joint_count
        self._data = np.zeros(0, dtype=record_dtype(joint_count))
        self._length = 0

    def reserve(self, capacity: int):
        """Make sure storage for `capacity` records is allocated."""
        if capacity > self.capacity:
            raise ValueError(f"Cannot reserve {capacity} records, capacity is {self.capacity}")
        if len(self._data) < capacity:
            data = np.zeros(capacity, dtype=self._data.dtype)
            data[:self._length] = self._data[:self._length]
            self._data = data

    def clear(self):
        self._length = 0

    @property
    def is_full(self) -> bool:
        return self._length >= self.capacity

    def append(self, record: FrameRecord):
        if self.is_full:
            raise OverflowError(f"Recording buffer full ({self.capacity} frames)")
        if len(record.joints) != self.joint_count:
            raise ValueError(f"Expected {self.joint_count} joints, got {len(record.joints)}")
        if self._length >= len(self._data):
            self.reserve(min(self.capacity, max(1, 2 * len(self._data))))

        i = self._length
        self._data["timestamp_ms"][i] = record.timestamp_ms
        self._data["marker_present"][i] = record.marker_present
        self._data["marker"][i] = record.marker_position.as_tuple()
        self._data["body_present"][i] = record.body_present
        self._data["joints"][i] = [p.as_tuple() for p in record.joints]
        self._length += 1

    def as_array(self) -> np.ndarray:
        """Structured array view of the stored records."""
        return self._data[:self._length]

    def _to_record(self, row) -> FrameRecord:
        return FrameRecord(
            timestamp_ms=int(row["timestamp_ms"]),
            marker_present=bool(row["marker_present"]),
            marker_position=Point3D(*(float(v) for v in row["marker"])),
            body_present=bool(row["body_present"]),
            joints=tuple(Point3D(*(float(v) for v in joint)) for joint in row["joints"]),
        )

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> FrameRecord:
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError(f"Record index {index} out of range")
        return self._to_record(self._data[index])

    def __iter__(self) -> Iterator[FrameRecord]:
        for row in self.as_array():
            yield self._to_record(row)
