"""
Agent loop tests.

Tests each agent on its own:
- HR: documents, policies, benefits; idempotent re-run
- IT: email, software, hardware, access; idempotent re-run
- Training: week 1 / week 2 split and meetings; idempotent re-run
- Buddy: scoring, tie-breaking, check-in schedule
- Base loop: log shape, error re-raise, iteration bound
"""

import copy

import pytest

from onboarding.agents.agent_factory import AgentRole, create_agent
from onboarding.agents.base_agent import AgentStatus, BaseAgent, Reflection
from onboarding.agents.buddy import BuddyAgent, score_candidates
from onboarding.agents.hr import HRAgent, policy_label
from onboarding.agents.it_setup import ITSetupAgent, slugify
from onboarding.agents.training import TrainingAgent
from onboarding.catalogs import BuddyCandidate, ReferenceData
from onboarding.models import AgentContext, Department, Priority, TaskStatus


async def run_agent(agent, employee):
    return await agent.run(AgentContext(employee=copy.deepcopy(employee)))


def actions(log):
    return [entry.action for entry in log]


class TestHRAgent:
    """HR agent produces document, policy and benefits tasks."""

    @pytest.mark.asyncio
    async def test_fresh_employee(self, engineer):
        result = await run_agent(HRAgent(), engineer)
        tasks = result.context.employee.tasks

        assert len(tasks) == 11
        assert [t.id for t in tasks[:6]] == [
            "hr-doc-government_id",
            "hr-doc-tax_w4",
            "hr-doc-i9_form",
            "hr-doc-direct_deposit",
            "hr-doc-emergency_contact",
            "hr-doc-nda",
        ]
        assert all(t.priority is Priority.HIGH and t.due_in_days == 3 for t in tasks[:6])
        assert tasks[6].title == "Acknowledge: Code Of Conduct Policy"
        assert tasks[-1].id == "hr-benefits-enrollment"
        assert tasks[-1].due_in_days == 14
        assert result.context.employee.benefits_enrollment_started is True

    @pytest.mark.asyncio
    async def test_submitted_documents_skipped(self, engineer):
        engineer.documents = ["nda", "i9_form"]
        engineer.policies_acknowledged = ["data_privacy"]
        engineer.benefits_enrollment_started = True

        result = await run_agent(HRAgent(), engineer)
        ids = [t.id for t in result.context.employee.tasks]

        assert "hr-doc-nda" not in ids
        assert "hr-doc-i9_form" not in ids
        assert "hr-policy-data_privacy" not in ids
        assert "hr-benefits-enrollment" not in ids
        assert len(ids) == 4 + 3

    @pytest.mark.asyncio
    async def test_log_shape(self, engineer):
        result = await run_agent(HRAgent(), engineer)

        assert actions(result.log) == [
            "start",
            "request_documents",
            "assign_policies",
            "benefits_enrollment",
            "reflect",
            "complete",
        ]
        assert result.log[4].detail == "HR onboarding: 11 tasks created, 11 pending"
        assert all(entry.agent == "HR Agent" for entry in result.log)

    @pytest.mark.asyncio
    async def test_rerun_has_nothing_to_do(self, engineer):
        first = await run_agent(HRAgent(), engineer)
        employee = first.context.employee

        second = await run_agent(HRAgent(), employee)
        ids = [t.id for t in second.context.employee.tasks]

        assert actions(second.log) == ["start", "no-actions", "complete"]
        assert len(ids) == 11
        assert len(set(ids)) == len(ids)

    def test_policy_label(self):
        assert policy_label("anti_harassment") == "Anti Harassment"


class TestITSetupAgent:
    """IT agent provisions by department profile."""

    @pytest.mark.asyncio
    async def test_engineering_profile(self, engineer):
        result = await run_agent(ITSetupAgent(), engineer)
        employee = result.context.employee
        by_id = {t.id: t for t in employee.tasks}

        assert employee.email == "ana.lopez@company.com"
        assert employee.email_provisioned is True
        assert by_id["it-email-setup"].status is TaskStatus.COMPLETED
        assert by_id["it-email-setup"].due_in_days is None
        assert "it-sw-ide-license" in by_id
        assert "it-access-ci-cd-pipeline" in by_id
        assert len(employee.tasks) == 1 + 5 + 4 + 4
        assert employee.accounts == ["IDE License", "GitHub Enterprise", "Jira", "Slack", "AWS Console"]

        hardware = [t for t in employee.tasks if t.type == "hardware_request"]
        assert len(hardware) == 4
        assert all(t.status is TaskStatus.IN_PROGRESS and t.due_in_days == 5 for t in hardware)

    @pytest.mark.asyncio
    async def test_custom_email_domain(self, engineer):
        result = await run_agent(ITSetupAgent(email_domain="example.org"), engineer)
        assert result.context.employee.email == "ana.lopez@example.org"

    @pytest.mark.asyncio
    async def test_unknown_department_uses_default_profile(self, engineer):
        engineer.department = "Legal"
        result = await run_agent(ITSetupAgent(), engineer)
        employee = result.context.employee

        assert employee.accounts == ["Slack", "Google Workspace", "Zoom"]
        assert employee.hardware == ["Laptop", 'External Monitor 24"']
        assert employee.access_grants == ["VPN", "Company Intranet"]

    @pytest.mark.asyncio
    async def test_department_is_case_insensitive(self, engineer):
        engineer.department = "ENGINEERING"
        result = await run_agent(ITSetupAgent(), engineer)
        assert "AWS Console" in result.context.employee.accounts

    @pytest.mark.asyncio
    async def test_rerun_has_nothing_to_do(self, engineer):
        first = await run_agent(ITSetupAgent(), engineer)
        employee = first.context.employee
        employee.tasks = []

        second = await run_agent(ITSetupAgent(), employee)

        assert actions(second.log) == ["start", "no-actions", "complete"]
        assert second.context.employee.tasks == []

    def test_slugify(self):
        assert slugify("GitHub Enterprise") == "github-enterprise"
        assert slugify("CI/CD Pipeline", r"\s/") == "ci-cd-pipeline"


class TestTrainingAgent:
    """Training agent builds the learning path."""

    @pytest.mark.asyncio
    async def test_engineering_path(self, engineer):
        result = await run_agent(TrainingAgent(), engineer)
        modules = [t for t in result.context.employee.tasks if t.type == "training_module"]

        assert len(modules) == 8
        assert [t.id for t in modules[:4]] == [
            "training-company-overview",
            "training-security-awareness",
            "training-dei-training",
            "training-tools-intro",
        ]
        assert all(t.category == "Week 1 Training" and t.priority is Priority.HIGH for t in modules[:4])
        assert all(t.category == "Week 2 Training" and t.due_in_days == 14 for t in modules[4:])
        assert modules[4].metadata == {"duration": "120 min", "format": "hands-on"}

    @pytest.mark.asyncio
    async def test_meetings(self, engineer):
        result = await run_agent(TrainingAgent(), engineer)
        employee = result.context.employee
        by_id = {t.id: t for t in employee.tasks}

        assert by_id["training-manager-1on1"].due_in_days == 2
        assert by_id["training-team-intro"].due_in_days == 3
        assert employee.manager_meeting_scheduled is True
        assert employee.team_intro_scheduled is True
        assert result.log[-2].detail == "Training plan: 8 modules + 2 meetings assigned"

    @pytest.mark.asyncio
    async def test_completed_modules_shift_week_one(self, engineer):
        engineer.completed_training = ["company-overview", "security-awareness"]
        result = await run_agent(TrainingAgent(), engineer)
        modules = [t for t in result.context.employee.tasks if t.type == "training_module"]

        assert len(modules) == 6
        week_one = [t.id for t in modules if t.category == "Week 1 Training"]
        assert week_one == [
            "training-dei-training",
            "training-tools-intro",
            "training-eng-architecture",
            "training-eng-git-workflow",
        ]

    @pytest.mark.asyncio
    async def test_default_department_gets_company_modules_only(self, engineer):
        engineer.department = "default"
        result = await run_agent(TrainingAgent(), engineer)
        modules = [t for t in result.context.employee.tasks if t.type == "training_module"]

        assert len(modules) == 4
        assert all(t.category == "Week 1 Training" for t in modules)

    @pytest.mark.asyncio
    async def test_rerun_has_nothing_to_do(self, engineer):
        first = await run_agent(TrainingAgent(), engineer)
        employee = first.context.employee

        second = await run_agent(TrainingAgent(), employee)
        ids = [t.id for t in second.context.employee.tasks]

        assert actions(second.log) == ["start", "no-actions", "complete"]
        assert len(ids) == 10
        assert len(set(ids)) == len(ids)


class TestBuddyAgent:
    """Buddy matching and check-ins."""

    def test_department_bonus_outweighs_rating(self):
        pool = (
            BuddyCandidate("x1", "Top Rated", "sales", "lead", 5.0),
            BuddyCandidate("x2", "Same Team", "engineering", "senior", 4.9),
        )
        ranked = score_candidates(pool, Department.ENGINEERING)

        assert ranked[0].name == "Same Team"
        assert ranked[0].score == pytest.approx(7.9)

    def test_ties_keep_pool_order(self):
        ranked = score_candidates(ReferenceData().buddy_pool, Department.DESIGN)
        assert [b.name for b in ranked[:2]] == ["Priya Patel", "Lisa Nakamura"]

    @pytest.mark.asyncio
    async def test_injected_pool(self, engineer):
        reference = ReferenceData(buddy_pool=(
            BuddyCandidate("x1", "Top Rated", "sales", "lead", 5.0),
            BuddyCandidate("x2", "Same Team", "engineering", "senior", 4.9),
        ))
        result = await run_agent(BuddyAgent(reference), engineer)
        buddy = result.context.employee.buddy

        assert buddy.id == "x2"
        assert result.log[-2].detail == "Buddy assigned: Same Team (score: 7.9)"

    @pytest.mark.asyncio
    async def test_default_pool_engineering(self, engineer):
        result = await run_agent(BuddyAgent(), engineer)
        employee = result.context.employee

        assert employee.buddy.name == "Emily Thompson"
        assert employee.buddy.score == pytest.approx(8.0)
        assert [t.id for t in employee.tasks] == [
            "buddy-intro-meeting",
            "buddy-checkin-day7",
            "buddy-checkin-day14",
            "buddy-checkin-day30",
            "buddy-checkin-day60",
            "buddy-checkin-day90",
        ]
        priorities = [t.priority for t in employee.tasks[1:]]
        assert priorities == [Priority.MEDIUM, Priority.MEDIUM, Priority.LOW, Priority.LOW, Priority.LOW]

    @pytest.mark.asyncio
    async def test_empty_pool(self, engineer):
        result = await run_agent(BuddyAgent(ReferenceData(buddy_pool=())), engineer)
        employee = result.context.employee

        assert employee.buddy is None
        assert len(employee.tasks) == 5
        assert result.log[-2].detail == "No buddy assignment needed"

    @pytest.mark.asyncio
    async def test_existing_buddy_kept(self, engineer):
        first = await run_agent(BuddyAgent(), engineer)
        employee = first.context.employee
        employee.tasks = []

        second = await run_agent(BuddyAgent(), employee)
        assert actions(second.log) == ["start", "no-actions", "complete"]
        assert second.context.employee.buddy.name == "Emily Thompson"


class FailingAgent(BaseAgent):
    key = "failing"

    def __init__(self):
        super().__init__("Failing Agent", "raises during act")

    async def decide(self, context):
        return ["anything"]

    async def act(self, context, intents):
        raise RuntimeError("provisioning backend unreachable")


class NeverDoneAgent(BaseAgent):
    key = "never-done"

    def __init__(self, max_iterations):
        super().__init__("Never Done", "reflect never completes", max_iterations=max_iterations)
        self.cycles = 0

    async def decide(self, context):
        return ["again"]

    async def act(self, context, intents):
        self.cycles += 1
        return context

    async def reflect(self, context):
        return Reflection(complete=False, context=context)


class TestBaseAgentLoop:
    """Shared loop behaviour."""

    @pytest.mark.asyncio
    async def test_error_is_logged_and_reraised(self, engineer):
        agent = FailingAgent()

        with pytest.raises(RuntimeError, match="unreachable"):
            await run_agent(agent, engineer)

        assert agent.status is AgentStatus.ERROR
        assert agent.phase == "act"
        assert agent.iteration == 0
        assert actions(agent.log) == ["start", "error"]
        assert agent.log[-1].detail == "provisioning backend unreachable"

    @pytest.mark.asyncio
    async def test_iterations_are_bounded(self, engineer):
        agent = NeverDoneAgent(max_iterations=3)
        await run_agent(agent, engineer)

        assert agent.cycles == 3
        assert agent.status is AgentStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_input_employee_not_mutated(self, engineer):
        before = copy.deepcopy(engineer)
        await run_agent(HRAgent(), engineer)
        assert engineer == before


class TestAgentFactory:

    def test_creates_each_role(self):
        agents = {role: create_agent(role) for role in AgentRole}

        assert isinstance(agents[AgentRole.HR], HRAgent)
        assert isinstance(agents[AgentRole.IT], ITSetupAgent)
        assert isinstance(agents[AgentRole.TRAINING], TrainingAgent)
        assert isinstance(agents[AgentRole.BUDDY], BuddyAgent)
        assert [a.key for a in agents.values()] == ["hr", "it", "training", "buddy"]

    def test_unknown_role(self):
        with pytest.raises(ValueError, match="Unknown agent role"):
            create_agent("finance")

    def test_settings_forwarded(self):
        agent = create_agent(AgentRole.IT, email_domain="corp.io", max_iterations=2)
        assert agent.email_domain == "corp.io"
        assert agent.max_iterations == 2
