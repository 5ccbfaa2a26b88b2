"""Schedule validator: re-derives robot and station conflicts from task records."""

from typing import List

from timeline.schedule import Schedule
from timeline.task import TaskAction


def format_time(seconds: float) -> str:
    """Format seconds as m:ss."""
    seconds = int(seconds)
    return f"{seconds // 60}:{seconds % 60:02d}"


def _span(task) -> str:
    return f"{format_time(task.start_time)}-{format_time(task.end_time)}"


def find_robot_conflicts(schedule: Schedule) -> List[str]:
    """Adjacent robot operations that overlap in time."""
    conflicts = []
    robot_ops = sorted(schedule.robot_tasks(), key=lambda t: t.start_time)
    for current, following in zip(robot_ops, robot_ops[1:]):
        if current.end_time > following.start_time:
            conflicts.append(
                f"Robot: {current.action.value} ({_span(current)}) overlaps with "
                f"{following.action.value} ({_span(following)})"
            )
    return conflicts


def find_station_conflicts(schedule: Schedule) -> List[str]:
    """Stations occupied when their next task starts, and loads without an unload in between."""
    conflicts = []
    for (station_type, index), tasks in schedule.group_by_station().items():
        label = f"{schedule.display_name(station_type)} Station {index}"
        ordered = sorted(tasks, key=lambda t: t.start_time)
        for current, following in zip(ordered, ordered[1:]):
            if current.action != TaskAction.UNLOAD and current.end_time > following.start_time:
                conflicts.append(
                    f"{label}: {current.action.value} ({_span(current)}) overlaps with "
                    f"{following.action.value} ({_span(following)})"
                )
            if current.action == TaskAction.LOAD and following.action == TaskAction.LOAD:
                conflicts.append(
                    f"{label}: Load scheduled before previous unload at "
                    f"{format_time(following.start_time)}"
                )
    return conflicts


def find_conflicts(schedule: Schedule) -> List[str]:
    """All conflicts of a schedule; an empty list means the schedule is valid."""
    return find_robot_conflicts(schedule) + find_station_conflicts(schedule)


class ScheduleValidator:
    """Convenience wrapper around find_conflicts for a single schedule."""

    def __init__(self, schedule: Schedule):
        self.schedule = schedule

    def conflicts(self) -> List[str]:
        return find_conflicts(self.schedule)

    def is_valid(self) -> bool:
        return not self.conflicts()

    def __repr__(self) -> str:
        return f"ScheduleValidator(tasks={len(self.schedule)})"
