"""
Training Agent - learning path and introductory meetings.

Builds a two-week learning path (company-wide modules first, then the
department track) and schedules the manager 1:1 and team introduction.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from ..catalogs import DEFAULT_REFERENCE_DATA, ReferenceData, TrainingModule
from ..models import AgentContext, Department, Priority, Task, TaskStatus
from .base_agent import BaseAgent, Reflection

WEEK_ONE_SIZE = 4


@dataclass(frozen=True)
class TrainingPerception:
    department: Department
    pending_modules: Tuple[TrainingModule, ...]
    manager_meeting_needed: bool
    team_intro_needed: bool


@dataclass(frozen=True)
class AssignModules:
    modules: Tuple[TrainingModule, ...]


@dataclass(frozen=True)
class ScheduleManagerMeeting:
    pass


@dataclass(frozen=True)
class ScheduleTeamIntro:
    pass


TrainingIntent = Union[AssignModules, ScheduleManagerMeeting, ScheduleTeamIntro]


class TrainingAgent(BaseAgent):
    """Creates personalized learning paths and introductory meetings."""

    key = "training"

    def __init__(self, reference: ReferenceData = DEFAULT_REFERENCE_DATA, **kwargs):
        super().__init__("Training Agent", "Creates personalized learning paths and tracks progress", **kwargs)
        self.reference = reference
        self.capabilities = [
            "learning_path_generation",
            "module_assignment",
            "meeting_scheduling",
        ]

    async def perceive(self, context: AgentContext) -> AgentContext:
        employee = context.employee
        department = Department.parse(employee.department)
        completed = set(employee.completed_training)
        issued = {t.id for t in employee.tasks}
        path = (*self.reference.company_modules, *self.reference.training_path(department))

        return context.perceived(TrainingPerception(
            department=department,
            pending_modules=tuple(
                m for m in path
                if m.id not in completed and f"training-{m.id}" not in issued
            ),
            manager_meeting_needed=not employee.manager_meeting_scheduled,
            team_intro_needed=not employee.team_intro_scheduled,
        ))

    async def decide(self, context: AgentContext) -> List[TrainingIntent]:
        perception: TrainingPerception = context.perception
        intents: List[TrainingIntent] = []

        if perception.pending_modules:
            intents.append(AssignModules(perception.pending_modules))
        if perception.manager_meeting_needed:
            intents.append(ScheduleManagerMeeting())
        if perception.team_intro_needed:
            intents.append(ScheduleTeamIntro())

        return intents

    def _module_task(self, module: TrainingModule, week_one: bool) -> Task:
        return Task(
            id=f"training-{module.id}",
            agent=self.name,
            type="training_module",
            title=module.title,
            status=TaskStatus.PENDING,
            priority=Priority.HIGH if week_one else Priority.MEDIUM,
            due_in_days=7 if week_one else 14,
            category="Week 1 Training" if week_one else "Week 2 Training",
            metadata={"duration": module.duration, "format": module.format},
        )

    async def act(self, context: AgentContext, intents: List[TrainingIntent]) -> AgentContext:
        employee = context.employee

        for intent in intents:
            match intent:
                case AssignModules(modules=modules):
                    for index, module in enumerate(modules):
                        employee.tasks.append(self._module_task(module, week_one=index < WEEK_ONE_SIZE))
                    self.add_log("assign_modules", f"Assigned {len(modules)} training modules")

                case ScheduleManagerMeeting():
                    employee.manager_meeting_scheduled = True
                    employee.tasks.append(Task(
                        id="training-manager-1on1",
                        agent=self.name,
                        type="meeting",
                        title="1:1 Meeting with Manager",
                        status=TaskStatus.PENDING,
                        priority=Priority.HIGH,
                        due_in_days=2,
                        category="Meetings",
                        note="Introductory 1:1 – discuss role expectations, goals, and questions",
                    ))
                    self.add_log("schedule_meeting", "Scheduled manager 1:1")

                case ScheduleTeamIntro():
                    employee.team_intro_scheduled = True
                    employee.tasks.append(Task(
                        id="training-team-intro",
                        agent=self.name,
                        type="meeting",
                        title="Team Introduction Session",
                        status=TaskStatus.PENDING,
                        priority=Priority.MEDIUM,
                        due_in_days=3,
                        category="Meetings",
                        note="Meet the team – informal introduction and Q&A",
                    ))
                    self.add_log("schedule_meeting", "Scheduled team introduction")

                case _:
                    raise ValueError(f"Unknown training intent: {intent!r}")

        return context

    async def reflect(self, context: AgentContext) -> Reflection:
        tasks = self.own_tasks(context)
        modules = sum(1 for t in tasks if t.type == "training_module")
        meetings = sum(1 for t in tasks if t.type == "meeting")
        self.add_log("reflect", f"Training plan: {modules} modules + {meetings} meetings assigned")
        return Reflection(complete=True, context=context)
