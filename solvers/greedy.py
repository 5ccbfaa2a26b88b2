"""Greedy single-robot dispatch solver."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .base import Solver
from timeline.schedule import Schedule
from timeline.task import Task, TaskAction, RELOAD_TAG, FINAL_TAG
from models.problem import SchedulingProblem
from models.station import StationInstance, StationType
from models.errors import SchedulingInvariantViolation


@dataclass
class DispatchState:
    """
    Mutable state of one solver run. Created per solve() call and discarded after.

    Attributes:
        robot_time: Time at which the robot is next free
        stations: One list of StationInstance per type key, in enumeration order
        tasks: Tasks in emission order
        type_cycles: Loads issued so far per type
        total_cycles: Loads issued so far across all types
    """
    robot_time: int = 0
    stations: Dict[str, List[StationInstance]] = field(default_factory=dict)
    tasks: List[Task] = field(default_factory=list)
    type_cycles: Dict[str, int] = field(default_factory=dict)
    total_cycles: int = 0

    @classmethod
    def create(cls, station_types: List[StationType]) -> 'DispatchState':
        state = cls()
        for station_type in station_types:
            state.stations[station_type.key] = [
                StationInstance(station_type=station_type, index=i)
                for i in range(1, station_type.count + 1)
            ]
            state.type_cycles[station_type.key] = 0
        return state

    def all_stations(self) -> List[StationInstance]:
        """Every station in type-then-index order."""
        return [s for instances in self.stations.values() for s in instances]

    def earliest_processing(self) -> Optional[StationInstance]:
        """
        Station whose current load finishes first.

        Ties go to the first station in type-then-index order (strict comparison).
        """
        earliest: Optional[StationInstance] = None
        for station in self.all_stations():
            if not station.is_processing():
                continue
            if earliest is None or station.processing_end_at < earliest.processing_end_at:
                earliest = station
        return earliest


class GreedyDispatchSolver(Solver):
    """
    Greedy solver that always services the station finishing first.

    Algorithm:
    1. Initial fill: load every station once, type by type, index by index
    2. Reload cycles: unload the earliest-finishing station and reload it
       until the total cycle target is reached
    3. Drain: unload the remaining stations in completion order
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the greedy solver.

        Args:
            verbose: Print a header per phase and a closing summary
        """
        self.verbose = verbose

    def solve(self, problem: SchedulingProblem) -> Schedule:
        """
        Build the schedule for a problem.

        Args:
            problem: The problem instance (validated before any phase runs)

        Returns:
            A schedule sorted by start time
        """
        problem.validate()

        state = DispatchState.create(problem.station_types)

        self._log("PHASE 1: Initial loading of all dedicated stations")
        self._initial_fill(state)

        self._log("PHASE 2: Dedicated station reload cycles")
        self._reload_cycles(state, problem.target_cycles)

        self._log("PHASE 3: Final unloading of dedicated stations")
        self._drain(state)

        schedule = Schedule.from_tasks(state.tasks, problem.station_types)
        self._log(f"Schedule complete: {len(schedule)} tasks, {state.total_cycles} cycles, "
                  f"robot finished at {state.robot_time}s")
        return schedule

    def _initial_fill(self, state: DispatchState) -> None:
        for station in state.all_stations():
            key = station.station_type.key
            prefix = f"initial-{key}-{station.index}"
            self._load(state, station, prefix)

    def _reload_cycles(self, state: DispatchState, target_cycles: int) -> None:
        while state.total_cycles < target_cycles:
            station = state.earliest_processing()
            if station is None:
                if state.all_stations():
                    raise SchedulingInvariantViolation(
                        f"no station processing after {state.total_cycles} cycles"
                    )
                # No stations at all: nothing to cycle
                break

            prefix = f"cycle-{state.total_cycles}"
            self._unload(state, station, f"{prefix}-unload", RELOAD_TAG)
            # Dedicated stations: reload the same station with the same type
            self._load(state, station, prefix)

    def _drain(self, state: DispatchState) -> None:
        while True:
            station = state.earliest_processing()
            if station is None:
                break
            key = station.station_type.key
            self._unload(state, station, f"final-{key}-{station.index}-unload", FINAL_TAG)

    def _load(self, state: DispatchState, station: StationInstance, prefix: str) -> None:
        """Emit load + process for a station and advance the robot past the load."""
        station_type = station.station_type
        cycle = state.type_cycles[station_type.key] + 1

        load = Task(
            id=f"{prefix}-load",
            start_time=state.robot_time,
            duration=station_type.load_time,
            station_type=station_type.key,
            station_index=station.index,
            action=TaskAction.LOAD,
            cycle=cycle,
        )
        process = Task(
            id=f"{prefix}-process",
            start_time=load.end_time,
            duration=station_type.wait_time,
            station_type=station_type.key,
            station_index=station.index,
            action=TaskAction.PROCESS,
            cycle=cycle,
        )
        state.tasks.append(load)
        state.tasks.append(process)
        state.robot_time = load.end_time

        station.start_processing(process.start_time)
        state.type_cycles[station_type.key] = cycle
        state.total_cycles += 1

    def _unload(self, state: DispatchState, station: StationInstance,
                task_id: str, tag: str) -> None:
        """Wait for the station if needed, emit an unload and free the station."""
        station_type = station.station_type
        state.robot_time = max(state.robot_time, station.processing_end_at)

        unload = Task(
            id=task_id,
            start_time=state.robot_time,
            duration=station_type.unload_time,
            station_type=station_type.key,
            station_index=station.index,
            action=TaskAction.UNLOAD,
            cycle=tag,
        )
        state.tasks.append(unload)
        state.robot_time = unload.end_time
        station.release(state.robot_time)

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)

    def __repr__(self) -> str:
        return f"GreedyDispatchSolver(verbose={self.verbose})"
