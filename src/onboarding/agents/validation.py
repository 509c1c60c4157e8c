"""
Input validation for onboarding requests.

Validates employee input and task-status updates before they reach the
orchestrator or the store, so bad requests fail early with a clear list
of problems.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping

from ..models import Department, TaskStatus, parse_date


@dataclass
class ValidationResult:
    """Result of validation check."""
    valid: bool
    errors: List[str]
    warnings: List[str]


class InvalidEmployeeInput(ValueError):
    """Employee input failed validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _get(data: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake)


def validate_employee_input(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a loosely-typed employee input record.

    Checks:
    - firstName and lastName present and non-empty
    - startDate, when given, is an ISO date
    - department, when given, is recognised (otherwise a warning: the
      default profile is used)

    Args:
        data: Employee input mapping (camelCase or snake_case keys)

    Returns:
        ValidationResult with errors and warnings
    """
    errors = []
    warnings = []

    if not isinstance(data, Mapping):
        return ValidationResult(valid=False, errors=["Employee input must be a mapping"], warnings=[])

    for camel, snake in (("firstName", "first_name"), ("lastName", "last_name")):
        value = _get(data, camel, snake)
        if not value or not str(value).strip():
            errors.append(f"{camel} is required")

    start_date = _get(data, "startDate", "start_date")
    if start_date not in (None, "") and parse_date(start_date) is None:
        errors.append(f"startDate '{start_date}' is not a valid ISO date (YYYY-MM-DD)")

    department = data.get("department")
    if department and Department.parse(department) is Department.DEFAULT and \
            str(department).strip().lower() != Department.DEFAULT.value:
        warnings.append(
            f"department '{department}' has no dedicated profile; default profile will be used"
        )

    if not data.get("manager"):
        warnings.append("manager is not set")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings
    )


def parse_task_status(value: Any) -> TaskStatus:
    """
    Parse a task status string.

    Raises:
        ValueError: If value is not pending, in_progress or completed
    """
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(value)
    except ValueError:
        valid = ", ".join(s.value for s in TaskStatus)
        raise ValueError(f"Invalid status '{value}' (valid: {valid})") from None
