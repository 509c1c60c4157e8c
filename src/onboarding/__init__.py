"""
Multi-Agent Employee Onboarding.

Runs four agents (HR, IT, Training, Buddy) concurrently on isolated copies
of a new hire's record and merges their work into one onboarding plan:
tasks, per-agent logs, a summary and a bucketed timeline.

Features:
- Bounded perceive → decide → act → reflect loop per agent
- All-settled fan-out with failure isolation per agent
- Deterministic merge order (HR, IT, Training, Buddy)
- Rule-based classifier for tier / risk previews
- In-memory store with task status updates

Usage:
    from onboarding import create_engine

    engine = create_engine()
    employee_id, plan = await engine.onboard({
        "firstName": "Ana",
        "lastName": "Lopez",
        "department": "engineering",
        "role": "Backend Engineer",
    })
"""

from .engine import (
    OnboardingEngine,
    EngineConfig,
    create_engine
)
from .agents import (
    AgentRole,
    OnboardingOrchestrator,
    OnboardingPlan,
    OrchestratorConfig,
    onboard
)
from .agents.validation import InvalidEmployeeInput
from .catalogs import DEFAULT_REFERENCE_DATA, ReferenceData
from .classifier import (
    ClassificationResult,
    EmployeeClassifier,
    RiskLevel,
    Tier,
    classify
)
from .models import (
    Department,
    Employee,
    LogEntry,
    Priority,
    Task,
    TaskStatus
)
from .parallel_executor import ParallelExecutor, SubTask
from .store import EmployeeNotFound, EmployeeStore, TaskNotFound

__version__ = "0.1.0"

__all__ = [
    # Engine
    "OnboardingEngine",
    "EngineConfig",
    "create_engine",
    # Orchestration
    "AgentRole",
    "OnboardingOrchestrator",
    "OnboardingPlan",
    "OrchestratorConfig",
    "onboard",
    "ParallelExecutor",
    "SubTask",
    # Classification
    "ClassificationResult",
    "EmployeeClassifier",
    "RiskLevel",
    "Tier",
    "classify",
    # Records
    "Department",
    "Employee",
    "LogEntry",
    "Priority",
    "Task",
    "TaskStatus",
    "ReferenceData",
    "DEFAULT_REFERENCE_DATA",
    # Store / errors
    "EmployeeStore",
    "EmployeeNotFound",
    "TaskNotFound",
    "InvalidEmployeeInput",
]
