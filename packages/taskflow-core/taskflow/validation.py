"""
Task input validation.

Checks raw creation and update payloads field by field and collects every
violation instead of stopping at the first one.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from taskflow.errors import FieldError
from taskflow.models.query import TaskValidation
from taskflow.models.task import TASK_PRIORITIES

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_CATEGORY_LENGTH = 50

# A checker returns (parsed value, error message or None)
Checker = Callable[[Any], Tuple[Any, Optional[str]]]


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string (or datetime) into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _check_title(value):
    if not isinstance(value, str) or not value.strip():
        return None, "Title is required and must be a non-empty string"
    title = value.strip()
    if len(title) > MAX_TITLE_LENGTH:
        return None, f"Title must be {MAX_TITLE_LENGTH} characters or less"
    return title, None


def _check_description(value):
    if value is None or value == "":
        return None, None
    if not isinstance(value, str):
        return None, "Description must be a string"
    if len(value) > MAX_DESCRIPTION_LENGTH:
        return None, f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less"
    return value, None


def _check_priority(value):
    if value is None or value == "":
        return None, f"Priority is required. Must be one of: {', '.join(TASK_PRIORITIES)}"
    if not isinstance(value, str) or value.lower() not in TASK_PRIORITIES:
        return None, f"Invalid priority: {value}. Must be one of: {', '.join(TASK_PRIORITIES)}"
    return value.lower(), None


def _check_category(value):
    if value is None or value == "":
        return None, None
    if not isinstance(value, str):
        return None, "Category must be a string"
    if len(value) > MAX_CATEGORY_LENGTH:
        return None, f"Category must be {MAX_CATEGORY_LENGTH} characters or less"
    return value, None


def _check_completed(value):
    if not isinstance(value, bool):
        return None, "Completed must be a boolean"
    return value, None


def _check_due_date(value):
    if value is None or value == "":
        return None, None
    parsed = parse_datetime(value)
    if parsed is None:
        return None, "Due date must be an ISO-8601 date or datetime"
    return parsed, None


# wire name -> (attribute name, checker)
FIELD_CHECKERS: Dict[str, Tuple[str, Checker]] = {
    "title": ("title", _check_title),
    "description": ("description", _check_description),
    "priority": ("priority", _check_priority),
    "category": ("category", _check_category),
    "completed": ("completed", _check_completed),
    "dueDate": ("due_date", _check_due_date),
}

REQUIRED_ON_CREATE = ("title", "priority")


def _not_an_object(raw: Any) -> TaskValidation:
    return TaskValidation(errors=[
        FieldError("body", "Task data must be a JSON object", type(raw).__name__),
    ])


def _run_checks(raw: Mapping[str, Any], names) -> TaskValidation:
    result = TaskValidation()
    for name in names:
        attr, check = FIELD_CHECKERS[name]
        value = raw.get(name)
        parsed, message = check(value)
        if message:
            result.errors.append(FieldError(name, message, value))
        else:
            result.values[attr] = parsed
    return result


def validate_create(raw: Any) -> TaskValidation:
    """
    Validate a task creation payload.

    Title and priority are required; completed defaults to False. On success
    `values` holds constructor arguments for Task, keyed by attribute name.
    """
    if not isinstance(raw, Mapping):
        return _not_an_object(raw)

    names: List[str] = list(REQUIRED_ON_CREATE)
    names += [n for n in FIELD_CHECKERS if n not in REQUIRED_ON_CREATE and raw.get(n) is not None]
    result = _run_checks(raw, names)
    result.values.setdefault("completed", False)
    return result


def validate_update(raw: Any) -> TaskValidation:
    """
    Validate a partial task update.

    Only fields present in raw are checked. Unknown keys are ignored, and
    null clears the optional fields (description, category, dueDate).
    """
    if not isinstance(raw, Mapping):
        return _not_an_object(raw)

    return _run_checks(raw, [n for n in FIELD_CHECKERS if n in raw])
