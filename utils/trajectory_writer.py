"""
Trajectory File Writer

Serializes recorded frames to the tab-separated text format consumed by the
analysis scripts, and parses such files back.

Line layout (every field is followed by a tab):
    <seconds.milliseconds> <marker flag> <mx> <my> <mz> <body flag> <j1 x y z> ... <jN x y z>

Flags are 1 (present) or -1 (absent). Absent groups keep their columns,
filled with 0.000000, so every line has the same number of fields.
"""

from pathlib import Path
from typing import IO, Iterable, List, Optional
import numpy as np
import logging

from domain.frame_record import FrameRecord
from domain.point3d import Point3D
from config import BASE_DIR, OUTPUT_FILENAME

logger = logging.getLogger(__name__)

PRESENT_FLAG = 1
ABSENT_FLAG = -1
FIELD_SEPARATOR = "\t"


def format_timestamp(timestamp_ms: int) -> str:
    """Format milliseconds as `<seconds>.<milliseconds:03d>`."""
    seconds, millis = divmod(timestamp_ms, 1000)
    return f"{seconds}.{millis:03d}"


def _point_fields(point: Point3D) -> List[str]:
    return ["%f" % point.x, "%f" % point.y, "%f" % point.z]


def format_record(record: FrameRecord) -> str:
    """Render one record as a text line (newline included)."""
    zero = Point3D.zero()
    fields = [format_timestamp(record.timestamp_ms)]

    if record.marker_present:
        fields.append(str(PRESENT_FLAG))
        fields.extend(_point_fields(record.marker_position))
    else:
        fields.append(str(ABSENT_FLAG))
        fields.extend(_point_fields(zero))

    fields.append(str(PRESENT_FLAG if record.body_present else ABSENT_FLAG))
    for joint in record.joints:
        fields.extend(_point_fields(joint if record.body_present else zero))

    return "".join(f + FIELD_SEPARATOR for f in fields) + "\n"


def column_count(joint_count: int) -> int:
    """Number of fields per line for a given number of recorded joints."""
    return 1 + 4 + 1 + 3 * joint_count


def parse_line(line: str, joint_count: int) -> FrameRecord:
    """
    Parse one text line back into a FrameRecord by column position.

    Raises:
        ValueError: if the line does not have the expected number of fields
    """
    fields = [f for f in line.rstrip("\n").split(FIELD_SEPARATOR) if f != ""]
    expected = column_count(joint_count)
    if len(fields) != expected:
        raise ValueError(f"Expected {expected} fields, got {len(fields)}")

    seconds, _, millis = fields[0].partition(".")
    timestamp_ms = int(seconds) * 1000 + int(millis or 0)

    marker_present = int(fields[1]) == PRESENT_FLAG
    marker = Point3D(*(float(v) for v in fields[2:5]))
    body_present = int(fields[5]) == PRESENT_FLAG
    joints = tuple(
        Point3D(*(float(v) for v in fields[6 + 3 * i:9 + 3 * i]))
        for i in range(joint_count)
    )
    return FrameRecord(timestamp_ms, marker_present, marker, body_present, joints)


def read_trajectory(path: Path, joint_count: int) -> List[FrameRecord]:
    """Read every record of a trajectory file."""
    with open(path, "r") as f:
        return [parse_line(line, joint_count) for line in f if line.strip()]


def load_trajectory_array(path: Path) -> np.ndarray:
    """
    Load a trajectory file as a float array, one row per frame.

    Columns follow the file layout: time, marker flag, marker xyz, body flag,
    joint xyz triples.
    """
    with open(path, "r") as f:
        rows = [
            [float(v) for v in line.rstrip("\n").split(FIELD_SEPARATOR) if v != ""]
            for line in f if line.strip()
        ]
    if not rows:
        return np.zeros((0, 0), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


class TrajectoryWriter:
    """
    Write recorded frames to the trajectory text file.

    The file is truncated when opened; records are appended sequentially and
    the file is closed after the flush.

    Usage:
        writer = TrajectoryWriter(Path("./data/kindata.txt"))
        writer.open()
        writer.write_records(buffer)
        writer.close()
    """

    def __init__(self, output_path: Path = BASE_DIR / OUTPUT_FILENAME):
        self.output_path = Path(output_path)
        self._stream: Optional[IO[str]] = None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self):
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._stream = open(self.output_path, "w", newline="\n")
        logger.info(f"Opened trajectory file: {self.output_path}")

    def write_records(self, records: Iterable[FrameRecord]) -> int:
        """
        Append records to the open file.

        Returns:
            Number of lines written
        """
        if self._stream is None:
            raise RuntimeError("Trajectory file is not open")
        count = 0
        for record in records:
            self._stream.write(format_record(record))
            count += 1
        return count

    def close(self):
        if self._stream is not None:
            self._stream.close()
            self._stream = None
