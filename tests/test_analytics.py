import pytest

from models import SchedulingProblem, StationType
from timeline import Schedule, Task, TaskAction, RELOAD_TAG, FINAL_TAG
from solvers import GreedyDispatchSolver
from evaluation import (
    ScheduleAnalyzer,
    analyze,
    cycle_counts,
    robot_utilization,
    station_idle_times,
    total_idle_time,
)


def test_single_station_utilization(single_station_problem):
    schedule = GreedyDispatchSolver().solve(single_station_problem)

    assert robot_utilization(schedule) == pytest.approx(60 / 360)
    assert total_idle_time(schedule) == 0
    assert cycle_counts(schedule) == {"diskPack": 3}


def test_idle_time_when_robot_is_busy_elsewhere():
    problem = SchedulingProblem(
        station_types=[StationType(key="A", count=2, wait_time=5, load_time=10, unload_time=10)],
        target_cycles=2,
    )
    schedule = GreedyDispatchSolver().solve(problem)

    idle = station_idle_times(schedule)
    assert list(idle) == [("A", 1), ("A", 2)]
    for stats in idle.values():
        assert stats.total == 5
        assert stats.average == 5
        assert stats.maximum == 5
        assert stats.matched_cycles == 1
    assert total_idle_time(schedule) == 10
    assert robot_utilization(schedule) == pytest.approx(1.0)


def test_empty_schedule_reports_zero():
    schedule = Schedule.from_tasks([])
    assert robot_utilization(schedule) == 0.0
    assert total_idle_time(schedule) == 0
    assert analyze(schedule).robot_operations == 0


def test_zero_count_type_reports_zero_cycles():
    problem = SchedulingProblem(
        station_types=[
            StationType(key="A", count=0, wait_time=50, load_time=5, unload_time=5),
            StationType(key="B", count=1, wait_time=50, load_time=5, unload_time=5),
        ],
        target_cycles=2,
    )
    schedule = GreedyDispatchSolver().solve(problem)
    assert cycle_counts(schedule) == {"A": 0, "B": 2}


def test_reference_cycle_counts_sum_to_target(reference_problem):
    schedule = GreedyDispatchSolver().solve(reference_problem)
    counts = cycle_counts(schedule)

    assert set(counts) == {"diskPack", "spacerTray"}
    assert sum(counts.values()) == 152
    # Shorter processing cycles more often
    assert counts["spacerTray"] > counts["diskPack"]


def test_analytics_summary_is_numeric(reference_problem):
    schedule = GreedyDispatchSolver().solve(reference_problem)
    summary = analyze(schedule).to_dict()

    assert 0.0 < summary["robot_utilization"] <= 1.0
    assert summary["robot_operations"] == 2 * 152
    assert summary["makespan"] == schedule.get_makespan()
    assert len(summary["station_idle"]) == 12
    assert "diskPack-1" in summary["station_idle"]
    for value in (summary["robot_busy_time"], summary["total_idle_time"]):
        assert isinstance(value, (int, float))


def test_analyzer_evaluate_and_components(single_station_problem):
    schedule = GreedyDispatchSolver().solve(single_station_problem)
    analyzer = ScheduleAnalyzer()

    assert analyzer.evaluate(schedule) == pytest.approx(1 / 6)
    components = analyzer.get_components(schedule)
    assert components["robot_busy_time"] == 60
    assert components["robot_makespan"] == 360
    assert components["cycles_diskPack"] == 3


def _task(task_id, start, duration, action, cycle=1):
    return Task(id=task_id, start_time=start, duration=duration, station_type="A",
                station_index=1, action=action, cycle=cycle)


def test_idle_stats_distinguish_total_average_and_maximum():
    station_type = StationType(key="A", count=1, wait_time=100, load_time=10, unload_time=10)
    schedule = Schedule.from_tasks(
        [
            _task("l1", 0, 10, TaskAction.LOAD),
            _task("p1", 10, 100, TaskAction.PROCESS),
            _task("u1", 110, 10, TaskAction.UNLOAD, cycle=RELOAD_TAG),
            _task("l2", 120, 10, TaskAction.LOAD, cycle=2),
            _task("p2", 130, 100, TaskAction.PROCESS, cycle=2),
            _task("u2", 250, 10, TaskAction.UNLOAD, cycle=FINAL_TAG),
        ],
        [station_type],
    )

    stats = station_idle_times(schedule)[("A", 1)]
    assert stats.total == 20
    assert stats.average == 10
    assert stats.maximum == 20
    assert stats.matched_cycles == 2
    assert total_idle_time(schedule) == 20


def test_process_without_later_unload_is_not_matched():
    schedule = Schedule.from_tasks([
        _task("l1", 0, 10, TaskAction.LOAD),
        _task("p1", 10, 100, TaskAction.PROCESS),
    ])

    stats = station_idle_times(schedule)[("A", 1)]
    assert stats.matched_cycles == 0
    assert stats.total == 0
