import pytest

from models import SchedulingProblem, StationType


@pytest.fixture
def single_station_problem():
    station = StationType(key="diskPack", name="Disk-pack", count=1,
                          wait_time=100, load_time=10, unload_time=10)
    return SchedulingProblem(station_types=[station], target_cycles=3)


@pytest.fixture
def reference_problem():
    return SchedulingProblem(
        station_types=[
            StationType(key="diskPack", name="Disk-pack", count=6,
                        wait_time=250, load_time=12, unload_time=12),
            StationType(key="spacerTray", name="Spacer-tray", count=6,
                        wait_time=125, load_time=12, unload_time=12),
        ],
        target_cycles=152,
    )
