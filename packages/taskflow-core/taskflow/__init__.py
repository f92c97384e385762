"""
Taskflow Core Library

Task management with a shared validate/filter/sort/aggregate query pipeline
over an in-memory task store.
"""

__version__ = "0.1.0"

from taskflow.config import TaskflowConfig, load_config
from taskflow.services import TaskService
from taskflow.store import MemoryTaskStore, TaskStore, create_store

__all__ = [
    "load_config",
    "TaskflowConfig",
    "create_store",
    "TaskStore",
    "MemoryTaskStore",
    "TaskService",
]
