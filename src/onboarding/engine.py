"""
Onboarding Engine - facade over the store, orchestrator and classifier.

Integrates all components:
- Input validation (firstName / lastName required)
- Employee store with defaults for missing fields
- Orchestrator running the HR, IT, Training and Buddy agents
- Rule-based classifier for previews
- Task status updates with summary recount
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .agents.logging_config import apply_logging_settings, get_logger
from .agents.orchestrator import OnboardingOrchestrator, OnboardingPlan, OrchestratorConfig
from .agents.validation import InvalidEmployeeInput, validate_employee_input
from .catalogs import DEFAULT_REFERENCE_DATA, ReferenceData
from .classifier import ClassificationResult, EmployeeClassifier
from .models import Task
from .store import EmployeeStore, StoredEmployee


@dataclass
class EngineConfig:
    """Configuration for the onboarding engine."""
    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Agent configs
    orchestrator_config: Optional[OrchestratorConfig] = None

    @classmethod
    def from_environment(cls) -> "EngineConfig":
        """
        Build a config from environment variables.

        Reads ONBOARDING_LOG_LEVEL, ONBOARDING_LOG_FILE,
        ONBOARDING_AGENT_TIMEOUT (seconds) and ONBOARDING_EMAIL_DOMAIN.
        """
        orchestrator_config = OrchestratorConfig()

        timeout = os.environ.get("ONBOARDING_AGENT_TIMEOUT")
        if timeout:
            try:
                orchestrator_config.agent_timeout = float(timeout)
            except ValueError:
                raise ValueError(f"ONBOARDING_AGENT_TIMEOUT must be a number (got {timeout!r})") from None

        email_domain = os.environ.get("ONBOARDING_EMAIL_DOMAIN")
        if email_domain:
            orchestrator_config.email_domain = email_domain

        return cls(
            log_level=os.environ.get("ONBOARDING_LOG_LEVEL", "INFO"),
            log_file=os.environ.get("ONBOARDING_LOG_FILE"),
            orchestrator_config=orchestrator_config,
        )


class OnboardingEngine:
    """
    Onboarding engine.

    Coordinates:
    - Employee records and their plans (EmployeeStore)
    - Multi-agent onboarding runs (OnboardingOrchestrator)
    - Classification previews (EmployeeClassifier)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        reference: ReferenceData = DEFAULT_REFERENCE_DATA,
        store: Optional[EmployeeStore] = None,
        orchestrator: Optional[OnboardingOrchestrator] = None
    ):
        """
        Initialize onboarding engine.

        Args:
            config: Engine configuration
            reference: Reference catalogs for the agents
            store: Employee store (a fresh in-memory store by default)
            orchestrator: Orchestrator (built from config by default)
        """
        self.config = config or EngineConfig()
        apply_logging_settings(self.config.log_level, self.config.log_file)
        self.logger = get_logger("engine")

        self.store = store or EmployeeStore()
        self.orchestrator = orchestrator or OnboardingOrchestrator(
            config=self.config.orchestrator_config or OrchestratorConfig(),
            reference=reference,
        )
        self.classifier = EmployeeClassifier()

    async def onboard(self, data: Mapping[str, Any]) -> Tuple[str, OnboardingPlan]:
        """
        Validate input, create the employee record and run the agents.

        Args:
            data: Employee input (camelCase or snake_case keys)

        Returns:
            (employee_id, plan)

        Raises:
            InvalidEmployeeInput: If required fields are missing or malformed
        """
        validation = validate_employee_input(data)
        if not validation.valid:
            self.logger.warning(f"Rejected onboarding request: {'; '.join(validation.errors)}")
            raise InvalidEmployeeInput(validation.errors)
        for warning in validation.warnings:
            self.logger.info(f"Onboarding input warning: {warning}")

        employee = self.store.create_employee(data)
        self.logger.info(f"Created employee {employee.id} ({employee.full_name})")

        plan = await self.orchestrator.onboard(employee)
        self.store.save_plan(employee.id, plan)

        return employee.id, plan

    def classify(self, data: Mapping[str, Any]) -> ClassificationResult:
        """Preview tier, risk and focus areas without onboarding."""
        return self.classifier.classify(data)

    def list_employees(self) -> List[Dict[str, Any]]:
        return self.store.list_employees()

    def get_employee(self, employee_id: str) -> StoredEmployee:
        """
        Raises:
            EmployeeNotFound: If no employee has that id
        """
        return self.store.get_employee(employee_id)

    def update_task_status(self, employee_id: str, task_id: str, status: Any) -> Task:
        """
        Update a task status and recompute the plan summary counts.

        Raises:
            ValueError: If status is invalid
            EmployeeNotFound: If no employee has that id
            TaskNotFound: If the employee has no task with that id
        """
        task = self.store.update_task_status(employee_id, task_id, status)
        self.logger.info(f"Task {task_id} of employee {employee_id} set to {task.status.value}")
        return task

    def get_status(self) -> Dict[str, Any]:
        """Get current engine status."""
        return {
            "employees": len(self.store),
            "classifier_version": self.classifier.version,
            "agents": {
                name: metrics.to_dict()
                for name, metrics in self.orchestrator.metrics.get_all_agent_metrics().items()
            },
            "executor": self.orchestrator.executor.get_statistics(),
        }


# Convenience function for quick start
def create_engine(config: Optional[EngineConfig] = None) -> OnboardingEngine:
    """
    Create an onboarding engine configured from the environment.

    Args:
        config: Explicit configuration (defaults to EngineConfig.from_environment())

    Returns:
        OnboardingEngine instance
    """
    return OnboardingEngine(config or EngineConfig.from_environment())
