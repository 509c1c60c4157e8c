"""
In-memory employee store.

Holds employee records created by the engine and the onboarding plans
produced for them. Task status updates go through here so the plan summary
stays consistent with the task list.
"""

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from .agents.orchestrator import OnboardingPlan, count_task_statuses
from .agents.validation import parse_task_status
from .models import Department, Employee, Task, now_iso, update_task_status

DEFAULT_LOCATION = "Remote"


class EmployeeNotFound(KeyError):
    """No employee with the given id."""


class TaskNotFound(KeyError):
    """No task with the given id on the employee's plan."""


@dataclass
class StoredEmployee:
    """An employee record plus the latest plan produced for it."""
    employee: Employee
    plan: Optional[OnboardingPlan] = None


class EmployeeStore:
    """Dictionary-backed store keyed by employee id."""

    def __init__(self):
        self._records: Dict[str, StoredEmployee] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, employee_id: str) -> bool:
        return employee_id in self._records

    def create_employee(self, data: Mapping[str, Any], today: Optional[date] = None) -> Employee:
        """
        Create a record from input data, filling defaults.

        Defaults: generated id, department "default", location "Remote",
        start date today, empty collections.
        """
        parsed = Employee.from_input(data)
        employee = Employee(
            id=str(uuid.uuid4()),
            first_name=parsed.first_name,
            last_name=parsed.last_name,
            email=parsed.email,
            department=parsed.department or Department.DEFAULT.value,
            role=parsed.role,
            start_date=parsed.start_date or today or date.today(),
            manager=parsed.manager,
            location=parsed.location or DEFAULT_LOCATION,
            created_at=now_iso(),
        )

        self._records[employee.id] = StoredEmployee(employee=employee)
        return employee

    def save_plan(self, employee_id: str, plan: OnboardingPlan):
        """Persist a plan; the plan's merged employee replaces the stored record."""
        record = self._get(employee_id)
        plan.employee.id = employee_id
        plan.employee.created_at = record.employee.created_at
        record.employee = plan.employee
        record.plan = plan

    def get_employee(self, employee_id: str) -> StoredEmployee:
        return self._get(employee_id)

    def list_employees(self) -> List[Dict[str, Any]]:
        """Brief listing of all records, in insertion order."""
        listing = []
        for employee_id, record in self._records.items():
            employee = record.employee
            listing.append({
                "id": employee_id,
                "first_name": employee.first_name,
                "last_name": employee.last_name,
                "department": employee.department,
                "role": employee.role,
                "start_date": employee.start_date.isoformat() if employee.start_date else None,
                "total_tasks": len(employee.tasks),
                "completed_tasks": count_task_statuses(employee.tasks).completed,
                "created_at": employee.created_at,
            })
        return listing

    def update_task_status(self, employee_id: str, task_id: str, status: Any) -> Task:
        """
        Set a task's status and recompute the plan summary.

        Raises:
            ValueError: If status is not a valid task status
            EmployeeNotFound: If the employee does not exist
            TaskNotFound: If the task does not exist
        """
        new_status = parse_task_status(status)
        record = self._get(employee_id)

        updated = update_task_status(record.employee.tasks, task_id, new_status)
        if updated is None:
            raise TaskNotFound(task_id)

        if record.plan is not None:
            record.plan.refresh()
        return updated

    def _get(self, employee_id: str) -> StoredEmployee:
        try:
            return self._records[employee_id]
        except KeyError:
            raise EmployeeNotFound(employee_id) from None
