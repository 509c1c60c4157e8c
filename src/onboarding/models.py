"""
Shared record types passed between the onboarding agents.

- Employee: mutable record accumulated by the agents
- Task: immutable once created; only status changes, via update_task_status
- AgentContext: per-run container (employee snapshot + perception)
- LogEntry: append-only agent log record
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class TaskStatus(Enum):
    """Task lifecycle status."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(Enum):
    """Task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Department(Enum):
    """Departments with dedicated onboarding profiles."""
    ENGINEERING = "engineering"
    DESIGN = "design"
    PRODUCT = "product"
    SALES = "sales"
    DEFAULT = "default"

    @classmethod
    def parse(cls, text: Optional[str]) -> "Department":
        """Case-insensitive lookup; anything unrecognised maps to DEFAULT."""
        try:
            return cls((text or "").strip().lower())
        except ValueError:
            return cls.DEFAULT


def now_iso() -> str:
    return datetime.now().isoformat(timespec="milliseconds")


def parse_date(value: Any) -> Optional[date]:
    """Parse a date, datetime or ISO string; None when absent or unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class Task:
    """A single onboarding task produced by an agent's act phase."""
    id: str
    agent: str
    type: str
    title: str
    status: TaskStatus
    priority: Priority
    category: str
    due_in_days: Optional[int] = None  # None means "immediate"
    note: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def with_status(self, status: TaskStatus) -> "Task":
        return dataclasses.replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "agent": self.agent,
            "type": self.type,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "category": self.category,
            "due_in_days": self.due_in_days,
        }
        if self.note is not None:
            data["note"] = self.note
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        return data


@dataclass(frozen=True)
class BuddyAssignment:
    """Buddy matched to a new hire, with the score that selected them."""
    id: str
    name: str
    department: str
    seniority: str
    rating: float
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass
class LogEntry:
    """Structured agent log entry."""
    agent: str
    action: str
    detail: str
    timestamp: str = field(default_factory=now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "agent": self.agent,
            "action": self.action,
            "detail": self.detail,
        }


# Wire (camelCase) names accepted on input, mapped to attribute names.
_INPUT_ALIASES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "startDate": "start_date",
    "policiesAcknowledged": "policies_acknowledged",
    "completedTraining": "completed_training",
    "accessGrants": "access_grants",
    "emailProvisioned": "email_provisioned",
    "benefitsEnrollmentStarted": "benefits_enrollment_started",
    "checkInsScheduled": "check_ins_scheduled",
    "managerMeetingScheduled": "manager_meeting_scheduled",
    "teamIntroScheduled": "team_intro_scheduled",
    "onboardingStarted": "onboarding_started",
    "createdAt": "created_at",
}

_LIST_FIELDS = (
    "accounts",
    "hardware",
    "access_grants",
    "policies_acknowledged",
    "completed_training",
)

_FLAG_FIELDS = (
    "email_provisioned",
    "benefits_enrollment_started",
    "check_ins_scheduled",
    "manager_meeting_scheduled",
    "team_intro_scheduled",
)


@dataclass
class Employee:
    """Employee record shared by all agents."""
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    department: str = ""
    role: str = ""
    start_date: Optional[date] = None
    manager: str = ""
    location: str = ""
    id: Optional[str] = None

    documents: List[str] = field(default_factory=list)
    accounts: List[str] = field(default_factory=list)
    hardware: List[str] = field(default_factory=list)
    access_grants: List[str] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    policies_acknowledged: List[str] = field(default_factory=list)
    completed_training: List[str] = field(default_factory=list)
    buddy: Optional[BuddyAssignment] = None

    email_provisioned: bool = False
    benefits_enrollment_started: bool = False
    check_ins_scheduled: bool = False
    manager_meeting_scheduled: bool = False
    team_intro_scheduled: bool = False

    onboarding_started: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_input(cls, data: Mapping[str, Any]) -> "Employee":
        """
        Build an Employee from a loosely-typed mapping.

        Accepts camelCase or snake_case keys. Unknown keys are ignored and
        missing collections default to empty lists.
        """
        values: Dict[str, Any] = {}
        for key, value in data.items():
            values[_INPUT_ALIASES.get(key, key)] = value

        employee = cls(
            first_name=values.get("first_name") or "",
            last_name=values.get("last_name") or "",
            email=values.get("email") or None,
            department=values.get("department") or "",
            role=values.get("role") or "",
            start_date=parse_date(values.get("start_date")),
            manager=values.get("manager") or "",
            location=values.get("location") or "",
            id=values.get("id"),
            onboarding_started=values.get("onboarding_started"),
            created_at=values.get("created_at"),
        )

        employee.documents = [
            doc["id"] if isinstance(doc, Mapping) else str(doc)
            for doc in values.get("documents") or []
        ]
        for name in _LIST_FIELDS:
            setattr(employee, name, list(values.get(name) or []))
        for name in _FLAG_FIELDS:
            setattr(employee, name, bool(values.get(name, False)))

        buddy = values.get("buddy")
        if isinstance(buddy, BuddyAssignment):
            employee.buddy = buddy
        elif isinstance(buddy, Mapping):
            employee.buddy = BuddyAssignment(
                id=buddy.get("id", ""),
                name=buddy.get("name", ""),
                department=buddy.get("department", ""),
                seniority=buddy.get("seniority", ""),
                rating=float(buddy.get("rating", 0.0)),
                score=float(buddy.get("score", buddy.get("rating", 0.0))),
            )

        tasks = values.get("tasks") or []
        employee.tasks = [t for t in tasks if isinstance(t, Task)]
        return employee

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "department": self.department,
            "role": self.role,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "manager": self.manager,
            "location": self.location,
            "documents": list(self.documents),
            "accounts": list(self.accounts),
            "hardware": list(self.hardware),
            "access_grants": list(self.access_grants),
            "tasks": [t.to_dict() for t in self.tasks],
            "policies_acknowledged": list(self.policies_acknowledged),
            "completed_training": list(self.completed_training),
            "buddy": self.buddy.to_dict() if self.buddy else None,
            "email_provisioned": self.email_provisioned,
            "benefits_enrollment_started": self.benefits_enrollment_started,
            "check_ins_scheduled": self.check_ins_scheduled,
            "manager_meeting_scheduled": self.manager_meeting_scheduled,
            "team_intro_scheduled": self.team_intro_scheduled,
            "onboarding_started": self.onboarding_started,
            "created_at": self.created_at,
        }


@dataclass
class AgentContext:
    """
    Per-run container: one employee snapshot plus the perception data of
    the agent that owns the run. Never shared between concurrent runs.
    """
    employee: Employee
    perception: Optional[Any] = None

    def perceived(self, perception: Any) -> "AgentContext":
        """Return a new context carrying the given perception."""
        return dataclasses.replace(self, perception=perception)


def update_task_status(tasks: List[Task], task_id: str, status: TaskStatus) -> Optional[Task]:
    """
    Replace the task with the given id by a copy carrying the new status.

    Returns the updated task, or None if no task has that id.
    """
    for index, task in enumerate(tasks):
        if task.id == task_id:
            updated = task.with_status(status)
            tasks[index] = updated
            return updated
    return None


__all__ = [
    "TaskStatus",
    "Priority",
    "Department",
    "Task",
    "BuddyAssignment",
    "LogEntry",
    "Employee",
    "AgentContext",
    "update_task_status",
    "parse_date",
    "now_iso",
]
