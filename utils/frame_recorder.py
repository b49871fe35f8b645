"""
Frame Recorder State Machine

Accumulates one FrameRecord per processed tick while recording, and flushes
the buffer to the trajectory file when recording stops.

States:
    IDLE -> RECORDING      start()
    RECORDING -> FLUSHING  stop(), or buffer full after on_tick()
    FLUSHING -> IDLE       buffer written, output closed, buffer cleared

Missing data is never an error: an unfound marker, a pixel without depth or
an untracked body only clear the corresponding presence flag.
"""

from datetime import datetime
from typing import Optional
import logging

from domain.frame_record import FrameRecord, JointSample
from domain.point3d import Point3D
from domain.recording_session import RecordingSession
from domain.recording_state import RecordingState, RecordingStateError
from utils.recording_buffer import RecordingBuffer
from utils.timestamp_clock import TimestampClock
from utils.trajectory_writer import TrajectoryWriter
from config import MAX_FRAMES, RECORDED_JOINTS

logger = logging.getLogger(__name__)


class FrameRecorder:
    """
    Recording lifecycle and buffering.

    Usage:
        recorder = FrameRecorder(writer=TrajectoryWriter(path))
        recorder.start()
        recorder.on_tick(marker_position, joint_sample, clock.now_ms())
        recorder.stop()  # flushes to the file
    """

    def __init__(self,
                 writer: Optional[TrajectoryWriter] = None,
                 max_frames: int = MAX_FRAMES,
                 joint_count: int = len(RECORDED_JOINTS),
                 clock: Optional[TimestampClock] = None):
        """
        Initialize frame recorder.

        Args:
            writer: Destination of flushed records
            max_frames: Buffer capacity; reaching it stops recording
            joint_count: Number of joints per record
            clock: Clock restarted at every recording start
        """
        self.writer = writer or TrajectoryWriter()
        self.buffer = RecordingBuffer(capacity=max_frames, joint_count=joint_count)
        self.joint_count = joint_count
        self.clock = clock
        self.state = RecordingState.IDLE
        self.session: Optional[RecordingSession] = None
        self.last_session: Optional[RecordingSession] = None

    @property
    def is_recording(self) -> bool:
        return self.state.accepts_ticks

    @property
    def max_frames(self) -> int:
        return self.buffer.capacity

    def start(self):
        if self.state is not RecordingState.IDLE:
            raise RecordingStateError(f"Cannot start recording while {self.state}")

        self.buffer.reserve(self.buffer.capacity)
        self.buffer.clear()
        if self.clock is not None:
            self.clock.reset()

        self.session = RecordingSession(
            session_id=RecordingSession.create_session_id(),
            output_path=self.writer.output_path,
            max_frames=self.buffer.capacity,
            start_time=datetime.now(),
        )
        self.writer.open()
        self.state = RecordingState.RECORDING
        logger.info("Start recording...")

    def stop(self) -> int:
        """
        Stop recording and flush.

        Returns:
            Number of records written
        """
        if self.state is not RecordingState.RECORDING:
            raise RecordingStateError(f"Cannot stop recording while {self.state}")
        logger.info("Stopped!")
        self.state = RecordingState.FLUSHING
        return self._flush()

    def toggle(self) -> int:
        """Start when idle, stop when recording. Returns records written (0 on start)."""
        if self.state is RecordingState.IDLE:
            self.start()
            return 0
        return self.stop()

    def on_tick(self,
                marker_position: Optional[Point3D],
                joint_sample: JointSample,
                timestamp_ms: int) -> Optional[int]:
        """
        Append the record of one processed tick.

        Args:
            marker_position: Back-projected marker position, None if not found
            joint_sample: Joint positions of this tick
            timestamp_ms: Encoded timestamp

        Returns:
            Number of records written if the buffer filled up and was flushed,
            otherwise None
        """
        if not self.state.accepts_ticks:
            raise RecordingStateError(f"Cannot record a frame while {self.state}")
        if len(joint_sample.positions) != self.joint_count:
            raise ValueError(
                f"Expected {self.joint_count} joints, got {len(joint_sample.positions)}"
            )

        marker_present = marker_position is not None and marker_position.is_valid
        record = FrameRecord(
            timestamp_ms=timestamp_ms,
            marker_present=marker_present,
            marker_position=marker_position if marker_present else Point3D.zero(),
            body_present=joint_sample.body_present,
            joints=(joint_sample.positions if joint_sample.body_present
                    else tuple(Point3D.zero() for _ in range(self.joint_count))),
        )
        self.buffer.append(record)

        if self.buffer.is_full:
            logger.warning(f"Reached max_frames ({self.buffer.capacity}), stopping")
            self.session.stopped_by_capacity = True
            self.state = RecordingState.FLUSHING
            return self._flush()
        return None

    def _flush(self) -> int:
        try:
            written = self.writer.write_records(self.buffer)
        finally:
            self.writer.close()
            self.buffer.clear()
            self.state = RecordingState.IDLE

        self.session.end_time = datetime.now()
        self.session.frames_written = written
        self.last_session = self.session
        self.session = None
        logger.info(f"Saved {written} recorded frames to {self.writer.output_path} "
                    f"({self.last_session.duration_secs:.1f}s)")
        return written
