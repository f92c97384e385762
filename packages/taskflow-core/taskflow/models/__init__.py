"""
Core data models for Taskflow.
"""

from taskflow.models.query import (
    FilterSpec,
    PageSpec,
    QueryResult,
    QueryValidation,
    SortSpec,
    TaskStats,
    TaskValidation,
)
from taskflow.models.task import Task

__all__ = [
    "Task",
    "FilterSpec",
    "SortSpec",
    "PageSpec",
    "QueryValidation",
    "TaskValidation",
    "TaskStats",
    "QueryResult",
]
