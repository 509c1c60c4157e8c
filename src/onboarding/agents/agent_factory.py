"""
Agent Factory - creates onboarding agents by role.

Agents keep a per-run log, so the orchestrator asks the factory for fresh
instances on every onboarding run.
"""

from enum import Enum

from ..catalogs import DEFAULT_REFERENCE_DATA, ReferenceData
from .base_agent import MAX_ITERATIONS, BaseAgent
from .buddy import BuddyAgent
from .hr import HRAgent
from .it_setup import ITSetupAgent
from .training import TrainingAgent


class AgentRole(Enum):
    """Agent roles, declared in merge order."""
    HR = "hr"
    IT = "it"
    TRAINING = "training"
    BUDDY = "buddy"


def create_agent(
    role: AgentRole,
    reference: ReferenceData = DEFAULT_REFERENCE_DATA,
    email_domain: str = "company.com",
    max_iterations: int = MAX_ITERATIONS,
) -> BaseAgent:
    """
    Create an agent instance for a role.

    Args:
        role: Agent role
        reference: Reference catalogs shared read-only by all agents
        email_domain: Domain used by the IT agent for new mailboxes
        max_iterations: Upper bound on loop cycles per run

    Returns:
        Agent instance

    Raises:
        ValueError: If role is unknown
    """
    match role:
        case AgentRole.HR:
            return HRAgent(reference, max_iterations=max_iterations)
        case AgentRole.IT:
            return ITSetupAgent(reference, email_domain=email_domain, max_iterations=max_iterations)
        case AgentRole.TRAINING:
            return TrainingAgent(reference, max_iterations=max_iterations)
        case AgentRole.BUDDY:
            return BuddyAgent(reference, max_iterations=max_iterations)
        case _:
            raise ValueError(
                f"Unknown agent role: {role!r}. Must be one of: "
                + ", ".join(r.value for r in AgentRole)
            )

