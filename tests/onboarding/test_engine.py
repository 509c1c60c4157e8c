"""
Engine, store and CLI tests.

Tests:
- Input validation and defaults
- Employee listing and lookup
- Task status updates with recount
- Environment configuration and logging settings
- Command line entry point
"""

import json
import logging
from datetime import date

import pytest

from onboarding.__main__ import main
from onboarding.agents.logging_config import apply_logging_settings, get_logger
from onboarding.agents.orchestrator import OnboardingOrchestrator, count_task_statuses
from onboarding.agents.validation import (
    InvalidEmployeeInput,
    parse_task_status,
    validate_employee_input,
)
from onboarding.engine import EngineConfig, OnboardingEngine
from onboarding.models import TaskStatus
from onboarding.store import EmployeeNotFound, EmployeeStore, TaskNotFound


@pytest.fixture
def engine(metrics):
    return OnboardingEngine(orchestrator=OnboardingOrchestrator(metrics=metrics))


@pytest.fixture
def ana():
    return {
        "firstName": "Ana",
        "lastName": "Lopez",
        "department": "engineering",
        "role": "Backend Engineer",
        "startDate": "2025-03-17",
        "manager": "Sam Rivera",
    }


class TestValidation:
    """Input validation."""

    def test_valid(self, ana):
        result = validate_employee_input(ana)
        assert result.valid
        assert result.errors == []

    def test_names_required(self):
        result = validate_employee_input({"firstName": " ", "department": "sales"})

        assert not result.valid
        assert result.errors == ["firstName is required", "lastName is required"]

    def test_snake_case_keys(self):
        assert validate_employee_input({"first_name": "Ana", "last_name": "Lopez"}).valid

    def test_bad_start_date(self, ana):
        ana["startDate"] = "03/17/2025"
        result = validate_employee_input(ana)

        assert not result.valid
        assert "startDate" in result.errors[0]

    def test_warnings(self):
        result = validate_employee_input({"firstName": "Ana", "lastName": "Lopez", "department": "Legal"})

        assert result.valid
        assert len(result.warnings) == 2

    def test_not_a_mapping(self):
        assert not validate_employee_input(["Ana", "Lopez"]).valid

    def test_parse_task_status(self):
        assert parse_task_status("in_progress") is TaskStatus.IN_PROGRESS
        with pytest.raises(ValueError, match="Invalid status 'done'"):
            parse_task_status("done")


class TestEmployeeStore:
    """Store defaults and lookups."""

    def test_defaults(self):
        store = EmployeeStore()
        employee = store.create_employee({"firstName": "Lee", "lastName": "Park"}, today=date(2025, 1, 6))

        assert employee.id in store
        assert employee.department == "default"
        assert employee.location == "Remote"
        assert employee.start_date == date(2025, 1, 6)
        assert employee.tasks == []
        assert employee.created_at is not None

    def test_input_collections_ignored(self):
        store = EmployeeStore()
        employee = store.create_employee({"firstName": "Lee", "lastName": "Park", "accounts": ["Slack"]})
        assert employee.accounts == []

    def test_unknown_employee(self):
        with pytest.raises(EmployeeNotFound):
            EmployeeStore().get_employee("missing")

    def test_not_found_errors_are_key_errors(self):
        assert issubclass(EmployeeNotFound, KeyError)
        assert issubclass(TaskNotFound, KeyError)


class TestOnboardingEngine:
    """Facade operations."""

    @pytest.mark.asyncio
    async def test_onboard(self, engine, ana):
        employee_id, plan = await engine.onboard(ana)

        assert plan.employee.id == employee_id
        assert plan.summary.total_tasks == 41
        assert engine.get_employee(employee_id).plan is plan

    @pytest.mark.asyncio
    async def test_onboard_fills_defaults(self, engine):
        employee_id, plan = await engine.onboard({"firstName": "Lee", "lastName": "Park"})

        assert plan.employee.department == "default"
        assert plan.employee.location == "Remote"
        assert plan.employee.start_date == date.today()
        assert plan.summary.total_tasks == 11 + 8 + 6 + 6

    @pytest.mark.asyncio
    async def test_onboard_rejects_invalid_input(self, engine):
        with pytest.raises(InvalidEmployeeInput) as exc_info:
            await engine.onboard({"firstName": "Ana"})

        assert exc_info.value.errors == ["lastName is required"]
        assert engine.list_employees() == []

    @pytest.mark.asyncio
    async def test_list_employees(self, engine, ana):
        employee_id, _ = await engine.onboard(ana)
        listing = engine.list_employees()

        assert len(listing) == 1
        assert listing[0]["id"] == employee_id
        assert listing[0]["start_date"] == "2025-03-17"
        assert listing[0]["total_tasks"] == 41
        assert listing[0]["completed_tasks"] == 10

    @pytest.mark.asyncio
    async def test_update_task_status(self, engine, ana):
        employee_id, plan = await engine.onboard(ana)
        before = next(t for t in plan.employee.tasks if t.id == "hr-doc-nda")

        task = engine.update_task_status(employee_id, "hr-doc-nda", "completed")

        assert task.status is TaskStatus.COMPLETED
        assert task.title == before.title
        assert task.priority is before.priority
        assert plan.summary.completed == 11
        assert plan.summary.pending == 26

        counts = count_task_statuses(plan.employee.tasks)
        assert (counts.completed, counts.in_progress, counts.pending) == (
            plan.summary.completed, plan.summary.in_progress, plan.summary.pending
        )
        nda = next(e for e in plan.timeline["Day 1-3"] if e.id == "hr-doc-nda")
        assert nda.status == "completed"

    @pytest.mark.asyncio
    async def test_update_task_status_errors(self, engine, ana):
        employee_id, _ = await engine.onboard(ana)

        with pytest.raises(ValueError):
            engine.update_task_status(employee_id, "hr-doc-nda", "done")
        with pytest.raises(EmployeeNotFound):
            engine.update_task_status("missing", "hr-doc-nda", "completed")
        with pytest.raises(TaskNotFound):
            engine.update_task_status(employee_id, "no-such-task", "completed")

    def test_classify(self, engine, ana):
        assert engine.classify(ana).tier.value == "technical"

    @pytest.mark.asyncio
    async def test_status(self, engine, ana):
        await engine.onboard(ana)
        status = engine.get_status()

        assert status["employees"] == 1
        assert status["agents"]["hr"]["total_runs"] == 1
        assert status["executor"]["total_tasks"] == 4
        assert status["executor"]["completion_rate"] == 1.0


class TestEngineConfig:
    """Environment configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("ONBOARDING_LOG_LEVEL", "ONBOARDING_LOG_FILE",
                     "ONBOARDING_AGENT_TIMEOUT", "ONBOARDING_EMAIL_DOMAIN"):
            monkeypatch.delenv(name, raising=False)
        config = EngineConfig.from_environment()

        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.orchestrator_config.agent_timeout is None
        assert config.orchestrator_config.email_domain == "company.com"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("ONBOARDING_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ONBOARDING_AGENT_TIMEOUT", "2.5")
        monkeypatch.setenv("ONBOARDING_EMAIL_DOMAIN", "acme.dev")
        config = EngineConfig.from_environment()

        assert config.log_level == "DEBUG"
        assert config.orchestrator_config.agent_timeout == 2.5
        assert config.orchestrator_config.email_domain == "acme.dev"

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("ONBOARDING_AGENT_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="ONBOARDING_AGENT_TIMEOUT"):
            EngineConfig.from_environment()


class TestCLI:
    """python -m onboarding."""

    def test_classify_json(self, capsys):
        code = main(["classify", "--first-name", "Ana", "--last-name", "Lopez", "--role", "VP Sales", "--json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["tier"] == "executive"

    def test_onboard_json(self, capsys):
        code = main([
            "onboard",
            "--first-name", "Ana",
            "--last-name", "Lopez",
            "--department", "design",
            "--json",
        ])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["plan"]["employee"]["buddy"]["name"] == "Priya Patel"
        assert data["plan"]["employee"]["id"] == data["employee_id"]

    def test_onboard_invalid(self, capsys):
        assert main(["onboard", "--first-name", "Ana"]) == 2
        assert "lastName is required" in capsys.readouterr().out


class TestLoggingSettings:
    """Engine log level reaches every component logger."""

    def test_level_applied(self):
        try:
            OnboardingEngine(EngineConfig(log_level="WARNING"))

            assert logging.getLogger("onboarding.engine").level == logging.WARNING
            assert get_logger("agents.hr").level == logging.WARNING
        finally:
            apply_logging_settings("INFO")

        assert logging.getLogger("onboarding.engine").level == logging.INFO
