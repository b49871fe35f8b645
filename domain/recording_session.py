"""Recording session data model."""
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional
from config import BASE_DIR, OUTPUT_FILENAME, MAX_FRAMES


@dataclass
class RecordingSession:
    """
    Bookkeeping for one start/stop cycle of the recorder.

    Attributes:
        session_id: Unique identifier (timestamp-based)
        output_path: Trajectory file written when the session is flushed
        max_frames: Buffer capacity for this session
        start_time: Time recording started
        end_time: Time the buffer was flushed
        frames_written: Number of records written on flush
        stopped_by_capacity: True if the session ended because the buffer filled up
    """
    session_id: str
    output_path: Path = BASE_DIR / OUTPUT_FILENAME
    max_frames: int = MAX_FRAMES
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    frames_written: int = 0
    stopped_by_capacity: bool = False

    @property
    def duration_secs(self) -> Optional[float]:
        """Wall-clock duration of the session, once finished."""
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @staticmethod
    def create_session_id() -> str:
        """Create a unique session ID based on timestamp."""
        return datetime.now().strftime("%Y%m%d_%H%M%S")
