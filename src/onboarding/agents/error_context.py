"""
Error context for agent failures.

Agent failures never abort an onboarding run, so the only place the
details surface is the log. ErrorContext collects what is needed to debug
one failed run:
- Agent name and state
- Loop phase and iteration the failure happened in
- Employee the run was for
- Troubleshooting hints
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class ErrorContext:
    """Structured error context for a failed agent run."""
    error_type: str
    error_message: str
    agent_name: Optional[str] = None
    agent_status: Optional[str] = None
    phase: Optional[str] = None
    iteration: Optional[int] = None
    employee_name: Optional[str] = None
    troubleshooting_hints: Optional[List[str]] = None

    def format(self) -> str:
        """Format error context as a multi-line, human-readable string."""
        parts = [f"{self.error_type}: {self.error_message}"]

        if self.agent_name:
            state = f" (status={self.agent_status})" if self.agent_status else ""
            parts.append(f"  Agent: {self.agent_name}{state}")
        if self.phase:
            iteration = f", iteration {self.iteration + 1}" if self.iteration is not None else ""
            parts.append(f"  Phase: {self.phase}{iteration}")
        if self.employee_name:
            parts.append(f"  Employee: {self.employee_name}")

        if self.troubleshooting_hints:
            parts.append("  Troubleshooting:")
            for hint in self.troubleshooting_hints:
                parts.append(f"    • {hint}")

        return "\n".join(parts)


def create_agent_error_context(
    agent_name: str,
    error: BaseException,
    agent_status: Optional[str] = None,
    phase: Optional[str] = None,
    iteration: Optional[int] = None,
    employee_name: Optional[str] = None
) -> ErrorContext:
    """Create error context for a failed agent run."""
    hints = []
    error_type = type(error).__name__
    error_msg = str(error)

    if phase == "perceive":
        hints.append("Perception failed: check the employee record and reference catalogs")
    elif phase == "decide":
        hints.append("Decision rules failed on the perceived gaps")
    elif phase == "act":
        hints.append("Task generation failed; the agent contributes no tasks for this run")
    elif phase == "reflect":
        hints.append("Reflection failed after tasks were generated; they are discarded")

    if isinstance(error, TimeoutError):
        hints.append("Agent run exceeded the configured agent_timeout")
    if isinstance(error, (KeyError, AttributeError)):
        hints.append("A field the agent expected is missing from the employee record")

    hints.append("Other agents are unaffected; the plan is reported as degraded")

    return ErrorContext(
        error_type=error_type,
        error_message=error_msg,
        agent_name=agent_name,
        agent_status=agent_status,
        phase=phase,
        iteration=iteration,
        employee_name=employee_name,
        troubleshooting_hints=hints,
    )
