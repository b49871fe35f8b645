import numpy as np
import pytest

from conftest import FakeSensor, ListWriter
from domain.recording_state import RecordingState
from domain.skeleton import SensorFrame
from utils.frame_recorder import FrameRecorder
from utils.timestamp_clock import TimestampClock
from utils.tracking_session import TrackingSession
from utils.trajectory_writer import TrajectoryWriter


class FakeTime:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t


@pytest.fixture
def fake_time():
    return FakeTime()


def make_session(frames, fake_time, writer=None, max_frames=10, **sensor_kw):
    clock = TimestampClock(mode="monotonic", monotonic=fake_time)
    recorder = FrameRecorder(writer=writer or ListWriter(), max_frames=max_frames)
    return TrackingSession(FakeSensor(frames, **sensor_kw), recorder=recorder, clock=clock)


def test_tick_without_recording(marker_frame, fake_time):
    session = make_session([marker_frame], fake_time)
    result = session.tick()
    assert result.small_image.shape == (360, 640, 3)
    assert result.marker.found
    assert abs(result.marker.pixel[0] - 100) <= 2
    assert abs(result.marker.pixel[1] - 100) <= 2
    assert result.joints.body_present
    assert not result.recorded
    assert result.marker_position is None
    assert session.state is RecordingState.IDLE


def test_record_two_frames_then_stop(tmp_path, marker_frame, fake_time):
    path = tmp_path / "kindata.txt"
    session = make_session([marker_frame], fake_time, writer=TrajectoryWriter(path))

    session.controls.request_toggle()
    first = session.tick()
    assert first.recorded and first.state is RecordingState.RECORDING
    assert first.marker_position.as_tuple() == pytest.approx((0.1, 0.2, 1.0))

    fake_time.t = 0.5
    second = session.tick()
    assert second.marker.searched_locally
    assert second.recorded

    fake_time.t = 1.0
    session.controls.request_toggle()
    third = session.tick()
    assert not third.recorded
    assert third.frames_flushed == 2
    assert third.state is RecordingState.IDLE

    lines = path.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("0.000\t1\t0.100000\t0.200000\t1.000000\t1\t")
    assert lines[1].startswith("0.500\t1\t0.100000\t0.200000\t1.000000\t1\t")
    assert lines[0].endswith("\t")


def test_empty_frames_record_absent_data(empty_frame, fake_time):
    writer = ListWriter()
    session = make_session([empty_frame], fake_time, writer=writer)
    session.controls.request_toggle()
    session.tick()
    session.tick()
    session.controls.request_toggle()
    session.tick()

    batch = writer.batches[0]
    assert len(batch) == 2
    assert not any(r.marker_present or r.body_present for r in batch)


def test_missing_frame_skips_tick_but_applies_controls(fake_time):
    writer = ListWriter()
    session = make_session([None], fake_time, writer=writer, repeat_last=False)
    session.controls.request_toggle()
    assert session.tick() is None
    assert session.skipped_ticks == 1
    assert session.state is RecordingState.RECORDING
    assert len(session.recorder.buffer) == 0


def test_capacity_stop_resyncs_controls(marker_frame, fake_time):
    writer = ListWriter()
    session = make_session([marker_frame], fake_time, writer=writer, max_frames=2)
    session.controls.request_toggle()
    session.tick()
    result = session.tick()
    assert result.frames_flushed == 2
    assert session.state is RecordingState.IDLE
    assert not session.controls.is_recording_requested

    session.controls.request_toggle()
    session.tick()
    assert session.state is RecordingState.RECORDING


def test_bgra_frames_are_converted(marker_frame, fake_time):
    bgra = np.dstack([marker_frame.color_image,
                      np.full(marker_frame.color_image.shape[:2], 255, np.uint8)])
    frame = SensorFrame(color_image=bgra, color_to_camera=marker_frame.color_to_camera,
                        skeleton=marker_frame.skeleton)
    session = make_session([frame], fake_time)
    result = session.tick()
    assert result.small_image.shape == (360, 640, 3)
    assert result.marker.found


def test_close_flushes_and_releases(marker_frame, fake_time):
    writer = ListWriter()
    session = make_session([marker_frame], fake_time, writer=writer)
    session.controls.request_toggle()
    session.tick()
    session.close()
    assert session.sensor.released
    assert session.state is RecordingState.IDLE
    assert len(writer.batches[0]) == 1


def test_first_record_of_monotonic_recording_starts_at_zero(marker_frame, fake_time):
    writer = ListWriter()
    fake_time.t = 10.0
    session = make_session([marker_frame], fake_time, writer=writer)

    fake_time.t = 60.0
    session.tick()
    fake_time.t = 61.0
    session.controls.request_toggle()
    session.tick()
    fake_time.t = 61.25
    session.tick()
    session.controls.request_toggle()
    session.tick()

    assert [r.timestamp_ms for r in writer.batches[0]] == [0, 250]
