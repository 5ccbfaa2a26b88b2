"""Task record for the robot scheduler."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

# Cycle tags carried by unload tasks instead of a cycle number
RELOAD_TAG = "dedicated-reload"
FINAL_TAG = "final"


class TaskAction(str, Enum):
    LOAD = "load"
    UNLOAD = "unload"
    PROCESS = "process"


ROBOT_ACTIONS = frozenset({TaskAction.LOAD, TaskAction.UNLOAD})


@dataclass(frozen=True)
class Task:
    """
    One event on the timeline: a robot operation or a station processing interval.

    Attributes:
        id: Unique identifier (e.g., "cycle-12-unload")
        start_time: Start in seconds from simulation start
        duration: Length in seconds
        station_type: Key of the station type
        station_index: 1-based station index within its type
        action: load / unload occupy the robot, process occupies only the station
        cycle: Per-type cycle number for load/process, a tag for unloads
    """
    id: str
    start_time: int
    duration: int
    station_type: str
    station_index: int
    action: TaskAction
    cycle: Union[int, str]

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration

    @property
    def occupies_robot(self) -> bool:
        return self.action in ROBOT_ACTIONS

    @property
    def station_key(self) -> tuple:
        return (self.station_type, self.station_index)

    def to_dict(self) -> Dict:
        """Convert to dictionary for CSV/JSON export."""
        return {
            "id": self.id,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "station_type": self.station_type,
            "station_index": self.station_index,
            "action": self.action.value,
            "cycle": self.cycle,
        }

    def __repr__(self) -> str:
        return (f"Task({self.action.value} {self.station_type}#{self.station_index}, "
                f"[{self.start_time}, {self.end_time}], cycle={self.cycle})")
