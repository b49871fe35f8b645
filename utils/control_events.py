"""Start/stop requests coming from the user interface."""
import queue
from enum import Enum
from typing import List
import logging

logger = logging.getLogger(__name__)


class ControlEvent(Enum):
    TOGGLE_RECORDING = "toggle_recording"


class ControlEvents:
    """
    Single-producer event queue between the UI and the tick loop.

    The button callback only enqueues; the tick loop drains the queue once per
    tick, before deciding whether to record, so all state changes happen on
    the loop's thread.
    """

    def __init__(self):
        self._queue: "queue.SimpleQueue[ControlEvent]" = queue.SimpleQueue()
        self._requested = False

    def request_toggle(self):
        self._queue.put(ControlEvent.TOGGLE_RECORDING)
        logger.debug("Recording toggle requested")

    def drain(self) -> List[ControlEvent]:
        """Return pending events in arrival order and update the requested level."""
        events = []
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            if event is ControlEvent.TOGGLE_RECORDING:
                self._requested = not self._requested
            events.append(event)
        return events

    def sync(self, recording: bool):
        """Align the requested level with the recorder after an automatic stop."""
        self._requested = recording

    @property
    def is_recording_requested(self) -> bool:
        return self._requested
