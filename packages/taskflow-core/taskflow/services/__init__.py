"""
Business logic services for Taskflow.
"""

from taskflow.services.tasks import TaskService

__all__ = [
    "TaskService",
]
