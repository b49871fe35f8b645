"""
Tracking Session

Owns every piece of per-process state (sensor, tracking state, recorder,
pending user requests) and runs one tick of the tracking loop:

    timestamp -> acquire -> locate marker -> sample joints
              -> apply toggles -> record (may flush)
"""

from dataclasses import dataclass
from typing import Optional
import numpy as np
import cv2
import logging

from domain.frame_record import JointSample
from domain.point3d import Point3D
from domain.recording_state import RecordingState
from domain.skeleton import SensorFrame
from utils.control_events import ControlEvents
from utils.frame_recorder import FrameRecorder
from utils.joint_sampler import JointSampler
from utils.marker_locator import MarkerLocator, MarkerResult
from utils.sensor_source import SensorSource
from utils.timestamp_clock import TimestampClock
from config import SMALL_RATIO

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """What happened during one tick"""
    timestamp_ms: int
    frame: SensorFrame
    small_image: np.ndarray
    marker: MarkerResult
    marker_position: Optional[Point3D]
    joints: JointSample
    state: RecordingState
    recorded: bool = False
    frames_flushed: Optional[int] = None  # Set when the buffer was written this tick


class TrackingSession:
    """
    Explicit context object for the tracking loop.

    Usage:
        session = TrackingSession(sensor)
        controls = session.controls          # hand to the UI
        while running:
            result = session.tick()
    """

    def __init__(self,
                 sensor: SensorSource,
                 locator: Optional[MarkerLocator] = None,
                 sampler: Optional[JointSampler] = None,
                 recorder: Optional[FrameRecorder] = None,
                 clock: Optional[TimestampClock] = None,
                 controls: Optional[ControlEvents] = None,
                 small_ratio: float = SMALL_RATIO):
        self.sensor = sensor
        self.locator = locator or MarkerLocator(small_ratio=small_ratio)
        self.sampler = sampler or JointSampler()
        self.clock = clock or TimestampClock()
        self.recorder = recorder or FrameRecorder(
            joint_count=self.sampler.joint_count, clock=self.clock
        )
        if self.recorder.clock is None:
            self.recorder.clock = self.clock
        self.controls = controls or ControlEvents()
        self.small_ratio = small_ratio

        self.last_result: Optional[TickResult] = None
        self.tick_count = 0
        self.skipped_ticks = 0

    @property
    def state(self) -> RecordingState:
        return self.recorder.state

    def downscale(self, color_image: np.ndarray) -> np.ndarray:
        size = (self.locator.width, self.locator.height)
        small = cv2.resize(color_image, size, 0, 0, interpolation=cv2.INTER_NEAREST)
        if small.ndim == 3 and small.shape[2] == 4:
            small = cv2.cvtColor(small, cv2.COLOR_BGRA2BGR)
        return small

    def apply_controls(self) -> Optional[int]:
        """Apply queued toggles in order. Returns records written by a stop, if any."""
        flushed = None
        for _ in self.controls.drain():
            written = self.recorder.toggle()
            if self.recorder.state is RecordingState.IDLE:
                flushed = written
        self.controls.sync(self.recorder.is_recording)
        return flushed

    def tick(self) -> Optional[TickResult]:
        """
        Process one frame.

        Returns:
            TickResult, or None when the sensor had no fresh frame (nothing is
            recorded for that tick)
        """
        timestamp_ms = self.clock.now_ms()
        frame = self.sensor.acquire()
        if frame is None:
            self.skipped_ticks += 1
            flushed = self.apply_controls()
            if flushed is not None and self.last_result is not None:
                self.last_result.frames_flushed = flushed
                self.last_result.state = self.recorder.state
            return None

        self.tick_count += 1
        small_image = self.downscale(frame.color_image)
        marker = self.locator.locate(small_image)
        joints = self.sampler.sample(frame.skeleton)

        was_recording = self.recorder.is_recording
        flushed = self.apply_controls()
        if self.recorder.is_recording and not was_recording:
            # start() restarted the clock; the first record belongs to the new origin
            timestamp_ms = self.clock.now_ms()

        marker_position = None
        recorded = False
        if self.recorder.is_recording:
            if marker.found:
                marker_position = self.locator.back_project(marker.pixel, frame.color_to_camera)
                if marker_position is None:
                    logger.debug(f"Marker pixel {marker.pixel} has no valid depth")
            auto_flushed = self.recorder.on_tick(marker_position, joints, timestamp_ms)
            recorded = True
            if auto_flushed is not None:
                flushed = auto_flushed
                self.controls.sync(False)

        result = TickResult(
            timestamp_ms=timestamp_ms,
            frame=frame,
            small_image=small_image,
            marker=marker,
            marker_position=marker_position,
            joints=joints,
            state=self.recorder.state,
            recorded=recorded,
            frames_flushed=flushed,
        )
        self.last_result = result
        return result

    def close(self):
        """Flush a running recording and release the sensor."""
        if self.recorder.is_recording:
            self.recorder.stop()
        self.sensor.release()
