"""Evaluation package for the robot scheduler."""

from .base import Evaluator
from .analytics import (
    ScheduleAnalyzer,
    ScheduleAnalytics,
    StationIdleStats,
    analyze,
    cycle_counts,
    robot_utilization,
    station_idle_times,
    total_idle_time,
)
from .validator import ScheduleValidator, find_conflicts, format_time

__all__ = [
    'Evaluator', 'ScheduleAnalyzer', 'ScheduleAnalytics', 'StationIdleStats',
    'analyze', 'cycle_counts', 'robot_utilization', 'station_idle_times', 'total_idle_time',
    'ScheduleValidator', 'find_conflicts', 'format_time',
]
