"""Recording session lifecycle states."""
from enum import Enum


class RecordingState(Enum):
    """
    Lifecycle of a recording session.

    IDLE -> RECORDING on start, RECORDING -> FLUSHING on stop or full buffer,
    FLUSHING -> IDLE once the buffer has been written out.
    """
    IDLE = "idle"
    RECORDING = "recording"
    FLUSHING = "flushing"

    def __str__(self) -> str:
        return self.value.title()

    @property
    def accepts_ticks(self) -> bool:
        return self is RecordingState.RECORDING


class RecordingStateError(RuntimeError):
    """Raised when a recorder operation is called in the wrong state."""


class SensorUnavailableError(RuntimeError):
    """Raised when the depth sensor cannot be opened at startup."""
