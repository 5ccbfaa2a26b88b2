"""Schedule analytics: robot utilization, station idle time and cycle counts."""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .base import Evaluator
from timeline.schedule import Schedule, StationKey
from timeline.task import Task, TaskAction


@dataclass(frozen=True)
class StationIdleStats:
    """
    Idle time of one station: how long finished material waited for the robot.

    Attributes:
        total: Sum of idle time over matched cycles, in seconds
        average: total / matched_cycles (0 when nothing matched)
        maximum: Longest single wait, in seconds
        matched_cycles: Process tasks that found a later unload
    """
    total: float = 0.0
    average: float = 0.0
    maximum: float = 0.0
    matched_cycles: int = 0

    def to_dict(self) -> Dict:
        return {
            "total": self.total,
            "average": self.average,
            "maximum": self.maximum,
            "matched_cycles": self.matched_cycles,
        }


@dataclass(frozen=True)
class ScheduleAnalytics:
    """Structured summary of a schedule. Times in seconds, utilization as a fraction."""
    robot_utilization: float
    robot_busy_time: float
    robot_makespan: float
    makespan: float
    robot_operations: int
    total_idle_time: float
    station_idle: Dict[StationKey, StationIdleStats] = field(default_factory=dict)
    cycle_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """JSON-ready representation; station keys become "type-index" strings."""
        return {
            "robot_utilization": self.robot_utilization,
            "robot_busy_time": self.robot_busy_time,
            "robot_makespan": self.robot_makespan,
            "makespan": self.makespan,
            "robot_operations": self.robot_operations,
            "total_idle_time": self.total_idle_time,
            "station_idle": {
                f"{station_type}-{index}": stats.to_dict()
                for (station_type, index), stats in self.station_idle.items()
            },
            "cycle_counts": dict(self.cycle_counts),
        }


def robot_busy_time(schedule: Schedule) -> float:
    """Sum of durations of all load and unload tasks."""
    return sum(t.duration for t in schedule.robot_tasks())


def robot_makespan(schedule: Schedule) -> float:
    """Latest end time among robot tasks (0 when there are none)."""
    robot_tasks = schedule.robot_tasks()
    if not robot_tasks:
        return 0
    return max(t.end_time for t in robot_tasks)


def robot_operation_count(schedule: Schedule) -> int:
    return len(schedule.robot_tasks())


def robot_utilization(schedule: Schedule) -> float:
    """Busy robot time divided by the last robot end time; 0.0 if undefined."""
    last_end = robot_makespan(schedule)
    if last_end <= 0:
        return 0.0
    return robot_busy_time(schedule) / last_end


def _idle_waits(process_tasks: List[Task], unload_tasks: List[Task]) -> List[float]:
    """For each process task, wait until the first unload starting at or after its end."""
    waits = []
    for process in process_tasks:
        for unload in unload_tasks:
            if unload.start_time >= process.end_time:
                waits.append(unload.start_time - process.end_time)
                break
    return waits


def station_idle_times(schedule: Schedule) -> Dict[StationKey, StationIdleStats]:
    """Idle statistics per station, in station enumeration order."""
    result: Dict[StationKey, StationIdleStats] = OrderedDict(
        (key, StationIdleStats()) for key in schedule.station_keys()
    )
    for key, tasks in schedule.group_by_station().items():
        process_tasks = [t for t in tasks if t.action == TaskAction.PROCESS]
        unload_tasks = [t for t in tasks if t.action == TaskAction.UNLOAD]
        waits = _idle_waits(process_tasks, unload_tasks)
        if not waits:
            continue
        total = sum(waits)
        result[key] = StationIdleStats(
            total=total,
            average=total / len(waits),
            maximum=max(waits),
            matched_cycles=len(waits),
        )
    return result


def total_idle_time(schedule: Schedule) -> float:
    """Idle time summed over every station."""
    return sum(stats.total for stats in station_idle_times(schedule).values())


def cycle_counts(schedule: Schedule) -> Dict[str, int]:
    """Number of load tasks per station type."""
    counts: Dict[str, int] = OrderedDict((st.key, 0) for st in schedule.station_types)
    for task in schedule.tasks_by_action(TaskAction.LOAD):
        counts[task.station_type] = counts.get(task.station_type, 0) + 1
    return counts


def analyze(schedule: Schedule) -> ScheduleAnalytics:
    """Compute every metric in one pass over the schedule helpers."""
    idle = station_idle_times(schedule)
    return ScheduleAnalytics(
        robot_utilization=robot_utilization(schedule),
        robot_busy_time=robot_busy_time(schedule),
        robot_makespan=robot_makespan(schedule),
        makespan=schedule.get_makespan(),
        robot_operations=robot_operation_count(schedule),
        total_idle_time=sum(stats.total for stats in idle.values()),
        station_idle=idle,
        cycle_counts=cycle_counts(schedule),
    )


class ScheduleAnalyzer(Evaluator):
    """
    Evaluator reporting robot utilization as its score.

    get_components() flattens the headline metrics into a dict of numbers.
    """

    def evaluate(self, schedule: Schedule) -> float:
        return robot_utilization(schedule)

    def get_components(self, schedule: Schedule) -> dict:
        analytics = analyze(schedule)
        components = {
            'robot_utilization': analytics.robot_utilization,
            'robot_busy_time': analytics.robot_busy_time,
            'robot_makespan': analytics.robot_makespan,
            'makespan': analytics.makespan,
            'robot_operations': analytics.robot_operations,
            'total_idle_time': analytics.total_idle_time,
        }
        for station_type, count in analytics.cycle_counts.items():
            components[f'cycles_{station_type}'] = count
        return components

    def analyze(self, schedule: Schedule) -> ScheduleAnalytics:
        return analyze(schedule)
