"""
Error types for Taskflow.

Validation failures carry every violated constraint, not just the first one,
so callers can report them all at once.
"""

from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class FieldError:
    """A single violated constraint on one input field."""

    field: str
    message: str
    value: Any = None

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "value": self.value}


class ValidationError(ValueError):
    """Base class for input that fails validation."""

    code = "VALIDATION_ERROR"
    summary = "Validation failed"

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        super().__init__(f"{self.summary}: " + "; ".join(self.messages))

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]


class QueryValidationError(ValidationError):
    """One or more filter, sort, or paging parameters are invalid."""

    code = "INVALID_QUERY_PARAMS"
    summary = "Invalid query parameters provided"


class CreationValidationError(ValidationError):
    """Task creation input is invalid."""

    summary = "Invalid task data"


class UpdateValidationError(ValidationError):
    """Task update input is invalid."""

    summary = "Invalid task update"


class TaskNotFoundError(LookupError):
    """Referenced task id does not exist in the store."""

    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")
