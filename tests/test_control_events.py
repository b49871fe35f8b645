from utils.control_events import ControlEvent, ControlEvents


def test_drain_returns_events_in_order():
    controls = ControlEvents()
    controls.request_toggle()
    controls.request_toggle()
    assert controls.drain() == [ControlEvent.TOGGLE_RECORDING] * 2
    assert controls.drain() == []


def test_requested_level_follows_toggles():
    controls = ControlEvents()
    assert not controls.is_recording_requested
    controls.request_toggle()
    assert not controls.is_recording_requested  # not applied until drained
    controls.drain()
    assert controls.is_recording_requested
    controls.request_toggle()
    controls.drain()
    assert not controls.is_recording_requested


def test_sync_after_automatic_stop():
    controls = ControlEvents()
    controls.request_toggle()
    controls.drain()
    controls.sync(False)
    assert not controls.is_recording_requested
