"""Console reports for robot schedules."""

import sys
from pathlib import Path
from typing import List, Optional

sys.path.insert(0, str(Path(__file__).parent))

from timeline import Schedule
from evaluation import analyze, find_conflicts, format_time
from evaluation.analytics import ScheduleAnalytics


class ScheduleReport:
    """Prints schedule statistics, station idle tables and a text timeline."""

    def __init__(self, schedule: Schedule, analytics: Optional[ScheduleAnalytics] = None,
                 conflicts: Optional[List[str]] = None):
        self.schedule = schedule
        self.analytics = analytics if analytics is not None else analyze(schedule)
        self.conflicts = conflicts if conflicts is not None else find_conflicts(schedule)

    def print_schedule_summary(self):
        """Print headline numbers of the schedule."""
        a = self.analytics
        print("\n" + "=" * 70)
        print("SCHEDULE SUMMARY")
        print("=" * 70)
        print(f"Total tasks: {len(self.schedule)}")
        print(f"Total robot operations: {a.robot_operations}")
        print(f"Robot busy time: {a.robot_busy_time}s")
        print(f"Robot utilization: {a.robot_utilization * 100:.1f}%")
        print(f"Makespan: {format_time(a.makespan)} ({a.makespan}s)")
        print(f"Total station wait time: {a.total_idle_time}s")
        print("=" * 70)

    def print_cycle_counts(self):
        """Print the number of cycles (loads) per station type."""
        print("\n" + "=" * 70)
        print("CYCLES PER STATION TYPE")
        print("=" * 70)
        for station_type, count in self.analytics.cycle_counts.items():
            print(f"{self.schedule.display_name(station_type):<25} {count}")
        print("-" * 70)
        print(f"{'Total:':<25} {sum(self.analytics.cycle_counts.values())}")

    def print_station_idle_table(self):
        """Print idle statistics for every station."""
        print("\n" + "=" * 70)
        print("STATION IDLE TIME ANALYSIS")
        print("=" * 70)
        print(f"{'Station':<30} {'Cycles':>8} {'Total':>10} {'Avg':>10} {'Max':>10}")
        print("-" * 70)

        for (station_type, index), stats in self.analytics.station_idle.items():
            label = f"{self.schedule.display_name(station_type)} Station {index}"
            print(f"{label:<30} {stats.matched_cycles:>8} {stats.total:>9}s "
                  f"{stats.average:>9.1f}s {stats.maximum:>9}s")

        print("-" * 70)
        print(f"{'Total:':<30} {'':>8} {self.analytics.total_idle_time:>9}s")

    def print_conflicts(self):
        """Print detected conflicts, or confirm the schedule is valid."""
        print("\n" + "=" * 70)
        if self.conflicts:
            print(f"SCHEDULING CONFLICTS DETECTED ({len(self.conflicts)})")
            print("=" * 70)
            for conflict in self.conflicts:
                print(f"  - {conflict}")
        else:
            print("NO CONFLICTS - SCHEDULE IS VALID")
            print("=" * 70)
            print("  - Robot performs one operation at a time")
            print("  - Each station processes one load at a time")
            print("  - Unload completes before next load on same station")

    def print_robot_timeline(self, max_rows: int = 20):
        """Print the first robot operations as a text timeline."""
        robot_tasks = self.schedule.robot_tasks()
        if not robot_tasks or max_rows <= 0:
            return

        print("\n" + "=" * 70)
        print("ROBOT TIMELINE")
        print("=" * 70)
        print(f"{'Start':>7} {'End':>7}  {'Action':<8} {'Station':<30} {'Cycle'}")
        print("-" * 70)

        for task in robot_tasks[:max_rows]:
            label = f"{self.schedule.display_name(task.station_type)} Station {task.station_index}"
            print(f"{format_time(task.start_time):>7} {format_time(task.end_time):>7}  "
                  f"{task.action.value:<8} {label:<30} {task.cycle}")

        if len(robot_tasks) > max_rows:
            print(f"\n... and {len(robot_tasks) - max_rows} more operations")

    def print_full_report(self, timeline_rows: int = 20):
        """Print every section."""
        self.print_schedule_summary()
        self.print_cycle_counts()
        self.print_station_idle_table()
        self.print_robot_timeline(max_rows=timeline_rows)
        self.print_conflicts()

