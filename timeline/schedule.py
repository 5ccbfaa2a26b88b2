"""Schedule model: the time-ordered task list produced by a solver."""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from models.station import StationType
from .task import Task, TaskAction

StationKey = Tuple[str, int]


@dataclass(frozen=True)
class Schedule:
    """
    Full ordered sequence of tasks for one run. Immutable once produced.

    Attributes:
        tasks: Tasks sorted by start time (emission order kept on ties)
        station_types: Station types of the run, in enumeration order
    """
    tasks: Tuple[Task, ...] = ()
    station_types: Tuple[StationType, ...] = field(default_factory=tuple)

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task],
                   station_types: Iterable[StationType] = ()) -> 'Schedule':
        """Sort tasks by start time (stable) and freeze them."""
        ordered = sorted(tasks, key=lambda t: t.start_time)
        return cls(tasks=tuple(ordered), station_types=tuple(station_types))

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def get_type(self, key: str) -> Optional[StationType]:
        for station_type in self.station_types:
            if station_type.key == key:
                return station_type
        return None

    def display_name(self, key: str) -> str:
        station_type = self.get_type(key)
        return station_type.display_name if station_type else key

    def robot_tasks(self) -> List[Task]:
        """Load and unload tasks, in start time order."""
        return [t for t in self.tasks if t.occupies_robot]

    def tasks_by_action(self, action: TaskAction) -> List[Task]:
        return [t for t in self.tasks if t.action == action]

    def tasks_for_station(self, station_type: str, station_index: int) -> List[Task]:
        return [t for t in self.tasks
                if t.station_type == station_type and t.station_index == station_index]

    def station_keys(self) -> List[StationKey]:
        """
        All stations of the run in enumeration order.

        Declared station types come first (type order, then index); stations that only
        appear in tasks follow in order of first appearance.
        """
        keys: List[StationKey] = [
            (st.key, index)
            for st in self.station_types
            for index in range(1, st.count + 1)
        ]
        known = set(keys)
        for task in self.tasks:
            if task.station_key not in known:
                known.add(task.station_key)
                keys.append(task.station_key)
        return keys

    def group_by_station(self) -> Dict[StationKey, List[Task]]:
        """Tasks grouped per (station_type, station_index); stations without tasks are omitted."""
        groups: Dict[StationKey, List[Task]] = OrderedDict()
        for key in self.station_keys():
            groups[key] = []
        for task in self.tasks:
            groups[task.station_key].append(task)
        return OrderedDict((k, v) for k, v in groups.items() if v)

    def get_makespan(self) -> int:
        """Time when the last task (robot or station) ends."""
        if not self.tasks:
            return 0
        return max(t.end_time for t in self.tasks)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per task, in schedule order."""
        columns = ["id", "start_time", "end_time", "duration", "station_type",
                   "station_index", "action", "cycle"]
        return pd.DataFrame([t.to_dict() for t in self.tasks], columns=columns)

    def __repr__(self) -> str:
        return f"Schedule(tasks={len(self.tasks)}, makespan={self.get_makespan()})"
