import logging
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt5.QtWidgets")

from domain.recording_state import RecordingState
from screens.tracker_screen import RECORD_TEXT, STOP_TEXT, TrackerScreen
from utils.control_events import ControlEvents


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def test_state_change_goes_to_logger_not_stdout(qapp, caplog, capsys):
    screen = TrackerScreen(ControlEvents())
    with caplog.at_level(logging.DEBUG, logger="screens.tracker_screen"):
        screen.set_state(RecordingState.RECORDING)

    assert screen.record_button.text() == STOP_TEXT
    assert "Recording state: Recording" in caplog.text
    assert capsys.readouterr().out == ""

    screen.set_state(RecordingState.IDLE)
    assert screen.record_button.text() == RECORD_TEXT


def test_button_click_queues_toggle(qapp):
    controls = ControlEvents()
    screen = TrackerScreen(controls)
    screen.record_button.click()
    assert len(controls.drain()) == 1
