"""
Base Agent - common execution loop for all onboarding agents.

Each agent runs a bounded perceive → decide → act → reflect cycle:
- perceive: read-only enrichment, returns a new context with the agent's gaps
- decide: maps the perception to an ordered list of intents
- act: the only phase allowed to mutate the employee record
- reflect: logs the outcome and signals whether another cycle is needed
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from ..models import AgentContext, LogEntry, Task
from .error_context import create_agent_error_context
from .logging_config import get_logger


MAX_ITERATIONS = 5


class AgentStatus(Enum):
    """Agent run states."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class Reflection:
    """Outcome of the reflect phase."""
    complete: bool
    context: AgentContext


@dataclass
class AgentRunResult:
    """Context and log produced by one agent run."""
    context: AgentContext
    log: List[LogEntry]


class BaseAgent:
    """
    Foundation for all onboarding agents.

    Subclasses set `key` (short name used in summaries) and implement
    perceive, decide and act. The default reflect completes after one cycle.
    """

    key: str = "base"

    def __init__(self, name: str, description: str, max_iterations: int = MAX_ITERATIONS):
        self.name = name
        self.description = description
        self.max_iterations = max_iterations
        self.capabilities: List[str] = []
        self.status = AgentStatus.IDLE
        self.log: List[LogEntry] = []
        self.logger = get_logger(f"agents.{self.key}")

        self.phase: Optional[str] = None
        self.iteration: Optional[int] = None

    def add_log(self, action: str, detail: str) -> LogEntry:
        """Record a structured log entry for observability."""
        entry = LogEntry(agent=self.name, action=action, detail=detail)
        self.log.append(entry)
        return entry

    def own_tasks(self, context: AgentContext) -> List[Task]:
        """Tasks in the context that were created by this agent."""
        return [t for t in context.employee.tasks if t.agent == self.name]

    async def perceive(self, context: AgentContext) -> AgentContext:
        return context

    async def decide(self, context: AgentContext) -> List[Any]:
        raise NotImplementedError(f"{self.__class__.__name__} must implement decide")

    async def act(self, context: AgentContext, intents: List[Any]) -> AgentContext:
        raise NotImplementedError(f"{self.__class__.__name__} must implement act")

    async def reflect(self, context: AgentContext) -> Reflection:
        return Reflection(complete=True, context=context)

    async def run(self, context: AgentContext) -> AgentRunResult:
        """
        Run the agent loop against a context.

        The loop stops when decide returns no intents, when reflect signals
        completion, or after max_iterations cycles.

        Raises:
            Exception: Any failure inside a phase, after it has been logged
        """
        self.status = AgentStatus.RUNNING
        self.log = []
        self.phase = None
        self.iteration = None
        self.add_log("start", f"Agent {self.name} starting")
        self.logger.info(f"[{self.name}] Starting run for {context.employee.full_name}")

        try:
            for iteration in range(self.max_iterations):
                self.iteration = iteration

                self.phase = "perceive"
                perceived = await self.perceive(context)

                self.phase = "decide"
                intents = await self.decide(perceived)

                if not intents:
                    self.add_log("no-actions", "No further actions required")
                    break

                self.phase = "act"
                context = await self.act(perceived, intents)

                self.phase = "reflect"
                reflection = await self.reflect(context)
                context = reflection.context

                if reflection.complete:
                    break

            self.phase = None
            self.status = AgentStatus.COMPLETED
            self.add_log("complete", f"Agent {self.name} finished successfully")
            self.logger.info(
                f"[{self.name}] Completed with {len(self.own_tasks(context))} tasks"
            )

        except Exception as e:
            self.status = AgentStatus.ERROR
            self.add_log("error", str(e))
            error_context = create_agent_error_context(
                agent_name=self.name,
                error=e,
                agent_status=self.status.value,
                phase=self.phase,
                iteration=self.iteration,
                employee_name=context.employee.full_name,
            )
            self.logger.error(error_context.format())
            raise

        return AgentRunResult(context=context, log=list(self.log))
