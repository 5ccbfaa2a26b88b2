from collections import Counter, defaultdict

import pytest

from models import SchedulingProblem, StationType, SchedulingInvariantViolation
from timeline import TaskAction, RELOAD_TAG, FINAL_TAG
from solvers import GreedyDispatchSolver, DispatchState


def _spans(schedule, action=None):
    return [(t.action.value, t.start_time, t.end_time)
            for t in schedule if action is None or t.action == action]


def test_single_station_three_cycles_matches_expected_timeline(single_station_problem):
    schedule = GreedyDispatchSolver().solve(single_station_problem)

    assert _spans(schedule) == [
        ("load", 0, 10),
        ("process", 10, 110),
        ("unload", 110, 120),
        ("load", 120, 130),
        ("process", 130, 230),
        ("unload", 230, 240),
        ("load", 240, 250),
        ("process", 250, 350),
        ("unload", 350, 360),
    ]
    assert [t.cycle for t in schedule.tasks_by_action(TaskAction.LOAD)] == [1, 2, 3]
    unload_tags = [t.cycle for t in schedule.tasks_by_action(TaskAction.UNLOAD)]
    assert unload_tags == [RELOAD_TAG, RELOAD_TAG, FINAL_TAG]


def test_initial_fill_follows_type_order_and_drain_picks_earliest():
    problem = SchedulingProblem(
        station_types=[
            StationType(key="A", count=1, wait_time=100, load_time=10, unload_time=10),
            StationType(key="B", count=1, wait_time=20, load_time=10, unload_time=10),
        ],
        target_cycles=2,
    )
    schedule = GreedyDispatchSolver().solve(problem)

    loads = schedule.tasks_by_action(TaskAction.LOAD)
    assert [(t.station_type, t.start_time) for t in loads] == [("A", 0), ("B", 10)]

    # B finishes at 40, A at 110: B is serviced first even though A was loaded first
    unloads = schedule.tasks_by_action(TaskAction.UNLOAD)
    assert [(t.station_type, t.start_time) for t in unloads] == [("B", 40), ("A", 110)]


def test_reload_selects_earliest_station_regardless_of_type():
    problem = SchedulingProblem(
        station_types=[
            StationType(key="A", count=1, wait_time=100, load_time=10, unload_time=10),
            StationType(key="B", count=1, wait_time=20, load_time=10, unload_time=10),
        ],
        target_cycles=3,
    )
    schedule = GreedyDispatchSolver().solve(problem)

    robot_ops = [(t.action.value, t.station_type, t.start_time) for t in schedule.robot_tasks()]
    assert robot_ops == [
        ("load", "A", 0),
        ("load", "B", 10),
        ("unload", "B", 40),
        ("load", "B", 50),
        ("unload", "B", 80),
        ("unload", "A", 110),
    ]


def test_ties_go_to_first_enumerated_type():
    problem = SchedulingProblem(
        station_types=[
            StationType(key="A", count=1, wait_time=110, load_time=10, unload_time=10),
            StationType(key="B", count=1, wait_time=100, load_time=10, unload_time=10),
        ],
        target_cycles=2,
    )
    schedule = GreedyDispatchSolver().solve(problem)

    unloads = schedule.tasks_by_action(TaskAction.UNLOAD)
    assert [(t.station_type, t.start_time) for t in unloads] == [("A", 120), ("B", 130)]


def test_zero_count_type_emits_no_tasks():
    problem = SchedulingProblem(
        station_types=[
            StationType(key="A", count=0, wait_time=50, load_time=5, unload_time=5),
            StationType(key="B", count=1, wait_time=50, load_time=5, unload_time=5),
        ],
        target_cycles=2,
    )
    schedule = GreedyDispatchSolver().solve(problem)

    assert all(t.station_type == "B" for t in schedule)
    assert len(schedule.tasks_by_action(TaskAction.LOAD)) == 2


def test_empty_station_population_terminates_without_error():
    problem = SchedulingProblem(
        station_types=[StationType(key="A", count=0, wait_time=50, load_time=5, unload_time=5)],
        target_cycles=5,
    )
    schedule = GreedyDispatchSolver().solve(problem)
    assert len(schedule) == 0


def test_target_equal_to_station_count_skips_reloads():
    problem = SchedulingProblem(
        station_types=[StationType(key="A", count=3, wait_time=30, load_time=5, unload_time=5)],
        target_cycles=3,
    )
    schedule = GreedyDispatchSolver().solve(problem)

    assert len(schedule.tasks_by_action(TaskAction.LOAD)) == 3
    assert all(t.cycle == FINAL_TAG for t in schedule.tasks_by_action(TaskAction.UNLOAD))


def test_reference_configuration_properties(reference_problem):
    schedule = GreedyDispatchSolver().solve(reference_problem)

    starts = [t.start_time for t in schedule]
    assert starts == sorted(starts)

    robot_ops = schedule.robot_tasks()
    for earlier, later in zip(robot_ops, robot_ops[1:]):
        assert earlier.end_time <= later.start_time

    for tasks in schedule.group_by_station().values():
        for current, following in zip(tasks, tasks[1:]):
            if current.action != TaskAction.UNLOAD:
                assert current.end_time <= following.start_time

    # Dedication: a station index never changes type
    types_per_station = defaultdict(set)
    for task in schedule:
        types_per_station[task.station_key].add(task.station_type)
    assert all(len(types) == 1 for types in types_per_station.values())

    # Conservation: every load has exactly one unload
    loads = Counter(t.station_type for t in schedule.tasks_by_action(TaskAction.LOAD))
    unloads = Counter(t.station_type for t in schedule.tasks_by_action(TaskAction.UNLOAD))
    assert loads == unloads
    assert sum(loads.values()) == reference_problem.target_cycles

    assert len({t.id for t in schedule}) == len(schedule)


def test_end_time_is_start_plus_duration(reference_problem):
    schedule = GreedyDispatchSolver().solve(reference_problem)
    assert all(t.end_time == t.start_time + t.duration for t in schedule)


def test_solver_is_deterministic(reference_problem):
    first = GreedyDispatchSolver().solve(reference_problem)
    second = GreedyDispatchSolver().solve(reference_problem)

    assert first.tasks == second.tasks
    assert first.to_dataframe().to_csv(index=False) == second.to_dataframe().to_csv(index=False)


def test_reload_with_no_processing_station_is_an_invariant_violation():
    station_type = StationType(key="A", count=1, wait_time=10, load_time=1, unload_time=1)
    state = DispatchState.create([station_type])

    with pytest.raises(SchedulingInvariantViolation):
        GreedyDispatchSolver()._reload_cycles(state, target_cycles=3)


def test_verbose_solver_prints_phases(single_station_problem, capsys):
    GreedyDispatchSolver(verbose=True).solve(single_station_problem)
    out = capsys.readouterr().out
    assert "PHASE 1" in out
    assert "PHASE 2" in out
    assert "PHASE 3" in out


def test_ties_within_a_type_go_to_lower_index():
    problem = SchedulingProblem(
        station_types=[StationType(key="A", count=3, wait_time=50, load_time=0, unload_time=10)],
        target_cycles=3,
    )
    schedule = GreedyDispatchSolver().solve(problem)

    unloads = schedule.tasks_by_action(TaskAction.UNLOAD)
    assert [(t.station_index, t.start_time) for t in unloads] == [(1, 50), (2, 60), (3, 70)]


def test_earliest_processing_prefers_earlier_end_then_lower_index():
    station_type = StationType(key="A", count=3, wait_time=10, load_time=1, unload_time=1)
    state = DispatchState.create([station_type])
    first, second, third = state.stations["A"]

    second.processing_end_at = 100
    first.processing_end_at = 100
    assert state.earliest_processing() is first

    third.processing_end_at = 90
    assert state.earliest_processing() is third
