"""Station models for the robot scheduler."""

from dataclasses import dataclass
from typing import Optional

from .errors import SchedulingInvariantViolation


@dataclass(frozen=True)
class StationType:
    """
    A category of dedicated processing station.

    Attributes:
        key: Type identifier used in tasks (e.g., "diskPack")
        name: Display name (e.g., "Disk-pack"), defaults to the key
        count: Number of physical instances of this type
        wait_time: Processing duration in seconds
        load_time: Robot time to load one station, in seconds
        unload_time: Robot time to unload one station, in seconds
    """
    key: str
    count: int
    wait_time: int
    load_time: int
    unload_time: int
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.key

    @property
    def cycle_time(self) -> int:
        """Load + process + unload for a single cycle."""
        return self.load_time + self.wait_time + self.unload_time

    def __repr__(self) -> str:
        return (f"StationType(key={self.key}, count={self.count}, wait={self.wait_time}s, "
                f"load={self.load_time}s, unload={self.unload_time}s)")


@dataclass
class StationInstance:
    """
    One physical station, identified by (station_type, index) with index in [1, count].

    Attributes:
        station_type: The dedicated type of this station
        index: 1-based position within its type
        available_at: Time the station became free after its last unload (None if never unloaded)
        processing_end_at: Time the current load finishes processing (None if empty)
    """
    station_type: StationType
    index: int
    available_at: Optional[int] = None
    processing_end_at: Optional[int] = None

    @property
    def key(self) -> tuple:
        return (self.station_type.key, self.index)

    def is_processing(self) -> bool:
        return self.processing_end_at is not None

    def start_processing(self, start_time: int) -> int:
        """Mark the station as holding material that processes from start_time."""
        if self.is_processing():
            raise SchedulingInvariantViolation(
                f"{self.label()} loaded while still holding material "
                f"(processing ends at {self.processing_end_at})"
            )
        self.processing_end_at = start_time + self.station_type.wait_time
        return self.processing_end_at

    def release(self, unload_end: int) -> None:
        """Mark the station idle once its unload completes."""
        if not self.is_processing():
            raise SchedulingInvariantViolation(f"{self.label()} unloaded while empty")
        self.processing_end_at = None
        self.available_at = unload_end

    def label(self) -> str:
        return f"{self.station_type.display_name} Station {self.index}"

    def __repr__(self) -> str:
        return (f"StationInstance(type={self.station_type.key}, index={self.index}, "
                f"available_at={self.available_at}, processing_end_at={self.processing_end_at})")
