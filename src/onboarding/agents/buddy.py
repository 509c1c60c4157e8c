"""
Buddy Agent - buddy matching and check-in schedule.

Scoring: candidate rating, +3 when the candidate works in the new hire's
department. There is no partial credit for adjacent departments. Ties keep
pool order.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from ..catalogs import DEFAULT_REFERENCE_DATA, BuddyCandidate, CheckIn, ReferenceData
from ..models import AgentContext, BuddyAssignment, Department, Priority, Task, TaskStatus
from .base_agent import BaseAgent, Reflection

SAME_DEPARTMENT_BONUS = 3
SHORTLIST_SIZE = 3


@dataclass(frozen=True)
class BuddyPerception:
    candidates: Tuple[BuddyAssignment, ...]
    already_assigned: bool
    check_ins_needed: bool


@dataclass(frozen=True)
class AssignBuddy:
    buddy: BuddyAssignment


@dataclass(frozen=True)
class ScheduleCheckIns:
    check_ins: Tuple[CheckIn, ...]


BuddyIntent = Union[AssignBuddy, ScheduleCheckIns]


def score_candidates(pool: Tuple[BuddyCandidate, ...], department: Department) -> List[BuddyAssignment]:
    """Score every candidate and sort best first (stable, so ties keep pool order)."""
    scored = [
        BuddyAssignment(
            id=c.id,
            name=c.name,
            department=c.department,
            seniority=c.seniority,
            rating=c.rating,
            score=c.rating + (SAME_DEPARTMENT_BONUS if c.department == department.value else 0),
        )
        for c in pool
    ]
    return sorted(scored, key=lambda b: b.score, reverse=True)


class BuddyAgent(BaseAgent):
    """Matches new hires with onboarding buddies and schedules check-ins."""

    key = "buddy"

    def __init__(self, reference: ReferenceData = DEFAULT_REFERENCE_DATA, **kwargs):
        super().__init__("Buddy Agent", "Matches new hires with mentors and onboarding buddies", **kwargs)
        self.reference = reference
        self.capabilities = [
            "buddy_matching",
            "check_in_scheduling",
        ]

    async def perceive(self, context: AgentContext) -> AgentContext:
        employee = context.employee
        department = Department.parse(employee.department)
        ranked = score_candidates(self.reference.buddy_pool, department)

        return context.perceived(BuddyPerception(
            candidates=tuple(ranked[:SHORTLIST_SIZE]),
            already_assigned=employee.buddy is not None,
            check_ins_needed=not employee.check_ins_scheduled,
        ))

    async def decide(self, context: AgentContext) -> List[BuddyIntent]:
        perception: BuddyPerception = context.perception
        intents: List[BuddyIntent] = []

        if not perception.already_assigned and perception.candidates:
            intents.append(AssignBuddy(perception.candidates[0]))
        if perception.check_ins_needed:
            intents.append(ScheduleCheckIns(self.reference.check_ins))

        return intents

    async def act(self, context: AgentContext, intents: List[BuddyIntent]) -> AgentContext:
        employee = context.employee

        for intent in intents:
            match intent:
                case AssignBuddy(buddy=buddy):
                    employee.buddy = buddy
                    employee.tasks.append(Task(
                        id="buddy-intro-meeting",
                        agent=self.name,
                        type="meeting",
                        title=f"Meet your buddy: {buddy.name}",
                        status=TaskStatus.PENDING,
                        priority=Priority.HIGH,
                        due_in_days=2,
                        category="Buddy Program",
                        note=(
                            f"{buddy.name} ({buddy.department}, {buddy.seniority}) will be "
                            f"your onboarding buddy for the first 90 days"
                        ),
                    ))
                    self.add_log("assign_buddy", f"Matched with buddy: {buddy.name}")

                case ScheduleCheckIns(check_ins=check_ins):
                    employee.check_ins_scheduled = True
                    for check_in in check_ins:
                        employee.tasks.append(Task(
                            id=f"buddy-checkin-day{check_in.day}",
                            agent=self.name,
                            type="check_in",
                            title=check_in.title,
                            status=TaskStatus.PENDING,
                            priority=Priority.MEDIUM if check_in.day <= 14 else Priority.LOW,
                            due_in_days=check_in.day,
                            category="Buddy Program",
                        ))
                    self.add_log(
                        "schedule_check_ins",
                        f"Scheduled {len(check_ins)} check-ins over {max((c.day for c in check_ins), default=0)} days",
                    )

                case _:
                    raise ValueError(f"Unknown buddy intent: {intent!r}")

        return context

    async def reflect(self, context: AgentContext) -> Reflection:
        buddy = context.employee.buddy
        if buddy:
            self.add_log("reflect", f"Buddy assigned: {buddy.name} (score: {buddy.score:.1f})")
        else:
            self.add_log("reflect", "No buddy assignment needed")
        return Reflection(complete=True, context=context)
