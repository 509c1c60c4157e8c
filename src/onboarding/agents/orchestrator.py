"""
Orchestrator - coordinates the onboarding agents into one plan.

Responsibilities:
- Run HR, IT, Training and Buddy agents concurrently, each on its own copy
  of the employee record
- Wait for every run to settle, then merge in fixed agent order
- Isolate failures: a failed agent contributes one error log entry and
  nothing else
- Build the summary and the timeline
"""

import copy
import dataclasses
import functools
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..catalogs import DEFAULT_REFERENCE_DATA, ReferenceData
from ..models import AgentContext, Employee, LogEntry, Task, TaskStatus, now_iso
from ..parallel_executor import ParallelExecutor, SubTask
from .agent_factory import AgentRole, create_agent
from .base_agent import MAX_ITERATIONS, AgentRunResult, BaseAgent
from .error_context import create_agent_error_context
from .logging_config import get_logger
from .metrics import MetricsCollector, get_metrics_collector

logger = get_logger("orchestrator")

# Log actions that only mark run boundaries
MARKER_ACTIONS = frozenset({"start", "complete"})


@dataclass
class OrchestratorConfig:
    """Configuration for the onboarding orchestrator."""
    agent_timeout: Optional[float] = None  # None: wait for agents indefinitely
    email_domain: str = "company.com"
    max_iterations: int = MAX_ITERATIONS
    max_parallel_agents: int = 4


class TimelineBucket(Enum):
    """Timeline buckets, in display order."""
    IMMEDIATE = "Immediate"
    DAY_1_3 = "Day 1-3"
    WEEK_1 = "Week 1"
    WEEK_2 = "Week 2"
    MONTH_1 = "Month 1"
    MONTH_2_3 = "Month 2-3"


def timeline_bucket(due_in_days: Optional[int]) -> TimelineBucket:
    """Bucket for a due offset; upper bounds are inclusive."""
    if due_in_days is None:
        return TimelineBucket.IMMEDIATE
    if due_in_days <= 3:
        return TimelineBucket.DAY_1_3
    if due_in_days <= 7:
        return TimelineBucket.WEEK_1
    if due_in_days <= 14:
        return TimelineBucket.WEEK_2
    if due_in_days <= 30:
        return TimelineBucket.MONTH_1
    return TimelineBucket.MONTH_2_3


@dataclass
class StatusCounts:
    completed: int = 0
    in_progress: int = 0
    pending: int = 0


def count_task_statuses(tasks: List[Task]) -> StatusCounts:
    """Count tasks by status. Shared by the summary builder and the store."""
    counts = StatusCounts()
    for task in tasks:
        if task.status is TaskStatus.COMPLETED:
            counts.completed += 1
        elif task.status is TaskStatus.IN_PROGRESS:
            counts.in_progress += 1
        elif task.status is TaskStatus.PENDING:
            counts.pending += 1
    return counts


@dataclass
class AgentSummary:
    total_actions: int
    status: str  # "success" or "error"
    key_events: List[str]
    duration_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass
class Summary:
    employee_name: str
    department: str
    total_tasks: int
    completed: int
    in_progress: int
    pending: int
    orchestration_time_ms: int
    agent_summaries: Dict[str, AgentSummary] = field(default_factory=dict)

    def recount(self, tasks: List[Task]):
        """Recompute task totals after status changes."""
        counts = count_task_statuses(tasks)
        self.total_tasks = len(tasks)
        self.completed = counts.completed
        self.in_progress = counts.in_progress
        self.pending = counts.pending

    @property
    def degraded(self) -> bool:
        return any(s.status == "error" for s in self.agent_summaries.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employee_name": self.employee_name,
            "department": self.department,
            "total_tasks": self.total_tasks,
            "completed": self.completed,
            "in_progress": self.in_progress,
            "pending": self.pending,
            "orchestration_time_ms": self.orchestration_time_ms,
            "agent_summaries": {k: v.to_dict() for k, v in self.agent_summaries.items()},
        }


@dataclass
class TimelineEntry:
    id: str
    title: str
    category: str
    status: str
    agent: str

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


Timeline = Dict[str, List[TimelineEntry]]


def build_timeline(tasks: List[Task]) -> Timeline:
    """
    Group tasks into timeline buckets.

    Buckets appear in display order and empty buckets are omitted; within a
    bucket tasks keep their merge order.
    """
    grouped: Dict[TimelineBucket, List[TimelineEntry]] = {bucket: [] for bucket in TimelineBucket}
    for task in tasks:
        grouped[timeline_bucket(task.due_in_days)].append(TimelineEntry(
            id=task.id,
            title=task.title,
            category=task.category,
            status=task.status.value,
            agent=task.agent,
        ))
    return {bucket.value: entries for bucket, entries in grouped.items() if entries}


def summarize_agent_logs(logs: List[LogEntry], duration_ms: int = 0) -> AgentSummary:
    return AgentSummary(
        total_actions=len(logs),
        status="error" if any(entry.action == "error" for entry in logs) else "success",
        key_events=[entry.detail for entry in logs if entry.action not in MARKER_ACTIONS],
        duration_ms=duration_ms,
    )


@dataclass
class OnboardingPlan:
    """Merged result of one onboarding run."""
    employee: Employee
    summary: Summary
    agent_logs: Dict[str, List[LogEntry]]
    timeline: Timeline

    def refresh(self):
        """Recompute summary counts and timeline from the current task list."""
        self.summary.recount(self.employee.tasks)
        self.timeline = build_timeline(self.employee.tasks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employee": self.employee.to_dict(),
            "summary": self.summary.to_dict(),
            "agent_logs": {k: [e.to_dict() for e in v] for k, v in self.agent_logs.items()},
            "timeline": {k: [e.to_dict() for e in v] for k, v in self.timeline.items()},
        }


AgentFactory = Callable[..., BaseAgent]


class OnboardingOrchestrator:
    """
    Master coordinator for the onboarding workflow.

    Execution flow:
    1. Build the base employee record from input
    2. Run all agents concurrently on isolated copies
    3. Merge tasks and changed fields in fixed agent order
    4. Build summary and timeline
    """

    def __init__(
        self,
        config: Optional[OrchestratorConfig] = None,
        reference: ReferenceData = DEFAULT_REFERENCE_DATA,
        agent_factory: AgentFactory = create_agent,
        metrics: Optional[MetricsCollector] = None
    ):
        """
        Initialize orchestrator.

        Args:
            config: Orchestrator configuration
            reference: Reference catalogs passed to every agent
            agent_factory: Callable building an agent for an AgentRole
            metrics: Metrics collector (defaults to the global collector)
        """
        self.config = config or OrchestratorConfig()
        self.reference = reference
        self.agent_factory = agent_factory
        self.metrics = metrics or get_metrics_collector()
        self.executor = ParallelExecutor(
            max_concurrent=self.config.max_parallel_agents,
            timeout=self.config.agent_timeout,
        )

    def _create_agents(self) -> Dict[AgentRole, BaseAgent]:
        return {
            role: self.agent_factory(
                role,
                reference=self.reference,
                email_domain=self.config.email_domain,
                max_iterations=self.config.max_iterations,
            )
            for role in AgentRole
        }

    async def onboard(self, employee_input: Union[Employee, Mapping[str, Any]]) -> OnboardingPlan:
        """
        Run all agents and produce a complete onboarding plan.

        Never raises for agent failures; failed agents are reported with
        status "error" in the summary.

        Args:
            employee_input: Employee record or loosely-typed mapping

        Returns:
            OnboardingPlan with merged employee, summary, logs and timeline
        """
        start_time = time.time()

        if isinstance(employee_input, Employee):
            employee = copy.deepcopy(employee_input)
        else:
            employee = Employee.from_input(employee_input)
        employee.tasks = []
        employee.onboarding_started = now_iso()

        agents = self._create_agents()
        subtasks = [
            SubTask(
                id=role.value,
                description=agent.description,
                executor_func=functools.partial(agent.run, AgentContext(employee=copy.deepcopy(employee))),
            )
            for role, agent in agents.items()
        ]

        logger.info(f"Onboarding {employee.full_name}: launching {len(subtasks)} agents")
        settled = await self.executor.execute(subtasks)

        base = copy.deepcopy(employee)
        merged_tasks: List[Task] = []
        seen_ids = set()
        agent_logs: Dict[str, List[LogEntry]] = {}
        durations: Dict[str, int] = {}

        # Merge strictly in AgentRole order, whatever order runs settled in
        for (role, agent), subtask in zip(agents.items(), settled):
            key = role.value
            produced: List[Task] = []

            if subtask.succeeded:
                result: AgentRunResult = subtask.result
                produced = result.context.employee.tasks
                agent_logs[key] = result.log
                self._overlay(employee, base, result.context.employee)

                for task in produced:
                    if task.id in seen_ids:
                        logger.warning(f"Dropping duplicate task id {task.id} from {agent.name}")
                        continue
                    seen_ids.add(task.id)
                    merged_tasks.append(task)
            else:
                error = subtask.error
                agent_logs[key] = [LogEntry(agent=agent.name, action="error", detail=str(error))]
                error_context = create_agent_error_context(
                    agent_name=agent.name,
                    error=error,
                    agent_status=agent.status.value,
                    phase=agent.phase,
                    iteration=agent.iteration,
                    employee_name=employee.full_name,
                )
                logger.warning(f"Agent {key} failed; continuing without it\n{error_context.format()}")

            run = self.metrics.record_run(
                agent=key,
                start_time=subtask.start_time or start_time,
                end_time=subtask.end_time,
                success=subtask.succeeded,
                error_type=type(subtask.error).__name__ if subtask.error else None,
                tasks_created=len(produced),
            )
            durations[key] = run.duration_ms

        employee.tasks = merged_tasks

        summary = self.build_summary(employee, agent_logs, start_time, durations)
        logger.info(
            f"Onboarding {employee.full_name}: {summary.total_tasks} tasks "
            f"in {summary.orchestration_time_ms}ms"
            + (" (degraded)" if summary.degraded else "")
        )

        return OnboardingPlan(
            employee=employee,
            summary=summary,
            agent_logs=agent_logs,
            timeline=build_timeline(merged_tasks),
        )

    @staticmethod
    def _overlay(target: Employee, base: Employee, produced: Employee):
        """Copy fields an agent changed (relative to base) onto target; tasks excluded."""
        for f in dataclasses.fields(Employee):
            if f.name == "tasks":
                continue
            value = getattr(produced, f.name)
            if value != getattr(base, f.name):
                setattr(target, f.name, value)

    def build_summary(
        self,
        employee: Employee,
        agent_logs: Dict[str, List[LogEntry]],
        start_time: float,
        durations: Optional[Dict[str, int]] = None
    ) -> Summary:
        durations = durations or {}
        counts = count_task_statuses(employee.tasks)

        return Summary(
            employee_name=employee.full_name,
            department=employee.department,
            total_tasks=len(employee.tasks),
            completed=counts.completed,
            in_progress=counts.in_progress,
            pending=counts.pending,
            orchestration_time_ms=int(round((time.time() - start_time) * 1000)),
            agent_summaries={
                name: summarize_agent_logs(logs, durations.get(name, 0))
                for name, logs in agent_logs.items()
            },
        )


async def onboard(
    employee_input: Union[Employee, Mapping[str, Any]],
    config: Optional[OrchestratorConfig] = None,
    reference: ReferenceData = DEFAULT_REFERENCE_DATA
) -> OnboardingPlan:
    """Run one onboarding with a throwaway orchestrator."""
    return await OnboardingOrchestrator(config=config, reference=reference).onboard(employee_input)
