"""
Onboarding agents.

Four specialised agents run the same perceive → decide → act → reflect loop:
1. HR - documents, policies and benefits enrollment
2. IT - email, software, hardware and system access
3. Training - learning path and first meetings
4. Buddy - buddy matching and check-in schedule

The orchestrator runs them concurrently and merges their output.
"""

from .agent_factory import AgentRole, create_agent
from .base_agent import MAX_ITERATIONS, AgentRunResult, AgentStatus, BaseAgent, Reflection
from .buddy import BuddyAgent
from .hr import HRAgent
from .it_setup import ITSetupAgent
from .orchestrator import (
    OnboardingOrchestrator,
    OnboardingPlan,
    OrchestratorConfig,
    Summary,
    TimelineBucket,
    onboard,
)
from .training import TrainingAgent

__all__ = [
    "AgentRole",
    "create_agent",
    "MAX_ITERATIONS",
    "AgentRunResult",
    "AgentStatus",
    "BaseAgent",
    "Reflection",
    "HRAgent",
    "ITSetupAgent",
    "TrainingAgent",
    "BuddyAgent",
    "OnboardingOrchestrator",
    "OnboardingPlan",
    "OrchestratorConfig",
    "Summary",
    "TimelineBucket",
    "onboard",
]
