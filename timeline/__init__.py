"""Timeline package for the robot scheduler."""

from .task import Task, TaskAction, RELOAD_TAG, FINAL_TAG
from .schedule import Schedule

__all__ = ['Task', 'TaskAction', 'RELOAD_TAG', 'FINAL_TAG', 'Schedule']
