"""Interface of the sensor feeding the tracking loop."""
from abc import ABC, abstractmethod
from typing import Optional

from domain.skeleton import SensorFrame


class SensorSource(ABC):
    """
    Provider of synchronized color, color->3D mapping and skeleton data.

    acquire() returns None when no fresh frame is available yet; the tick is
    then skipped.
    """

    @abstractmethod
    def initialize(self) -> bool:
        """Open the device. Returns False if it is unavailable."""

    @abstractmethod
    def acquire(self) -> Optional[SensorFrame]:
        """Return the latest frame set, or None."""

    def release(self):
        """Close the device."""
