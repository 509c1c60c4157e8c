"""
HR Agent - documentation, policies and benefits.

Responsibilities:
- Request missing onboarding documents (ID, tax forms, contacts, NDA)
- Assign policy acknowledgments
- Start benefits enrollment
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from ..catalogs import DEFAULT_REFERENCE_DATA, DocumentSpec, ReferenceData
from ..models import AgentContext, Priority, Task, TaskStatus
from .base_agent import BaseAgent, Reflection


@dataclass(frozen=True)
class HRPerception:
    missing_documents: Tuple[DocumentSpec, ...]
    pending_policies: Tuple[str, ...]
    benefits_needed: bool


@dataclass(frozen=True)
class RequestDocuments:
    documents: Tuple[DocumentSpec, ...]


@dataclass(frozen=True)
class AssignPolicies:
    policies: Tuple[str, ...]


@dataclass(frozen=True)
class InitiateBenefits:
    pass


HRIntent = Union[RequestDocuments, AssignPolicies, InitiateBenefits]


def policy_label(policy: str) -> str:
    """code_of_conduct -> Code Of Conduct"""
    return policy.replace("_", " ").title()


class HRAgent(BaseAgent):
    """Manages HR documentation, policies and compliance."""

    key = "hr"

    def __init__(self, reference: ReferenceData = DEFAULT_REFERENCE_DATA, **kwargs):
        super().__init__("HR Agent", "Manages HR documentation, policies, and compliance", **kwargs)
        self.reference = reference
        self.capabilities = [
            "document_collection",
            "policy_acknowledgment",
            "benefits_enrollment",
        ]

    async def perceive(self, context: AgentContext) -> AgentContext:
        employee = context.employee
        submitted = set(employee.documents)
        acknowledged = set(employee.policies_acknowledged)
        issued = {t.id for t in employee.tasks}

        return context.perceived(HRPerception(
            missing_documents=tuple(
                d for d in self.reference.documents
                if d.id not in submitted and f"hr-doc-{d.id}" not in issued
            ),
            pending_policies=tuple(
                p for p in self.reference.policies
                if p not in acknowledged and f"hr-policy-{p}" not in issued
            ),
            benefits_needed=not employee.benefits_enrollment_started,
        ))

    async def decide(self, context: AgentContext) -> List[HRIntent]:
        perception: HRPerception = context.perception
        intents: List[HRIntent] = []

        if perception.missing_documents:
            intents.append(RequestDocuments(perception.missing_documents))
        if perception.pending_policies:
            intents.append(AssignPolicies(perception.pending_policies))
        if perception.benefits_needed:
            intents.append(InitiateBenefits())

        return intents

    async def act(self, context: AgentContext, intents: List[HRIntent]) -> AgentContext:
        employee = context.employee

        for intent in intents:
            match intent:
                case RequestDocuments(documents=documents):
                    for doc in documents:
                        employee.tasks.append(Task(
                            id=f"hr-doc-{doc.id}",
                            agent=self.name,
                            type="document_upload",
                            title=f"Upload: {doc.label}",
                            status=TaskStatus.PENDING,
                            priority=Priority.HIGH,
                            due_in_days=3,
                            category="HR Documents",
                        ))
                    self.add_log("request_documents", f"Requested {len(documents)} documents")

                case AssignPolicies(policies=policies):
                    for policy in policies:
                        employee.tasks.append(Task(
                            id=f"hr-policy-{policy}",
                            agent=self.name,
                            type="policy_acknowledgment",
                            title=f"Acknowledge: {policy_label(policy)} Policy",
                            status=TaskStatus.PENDING,
                            priority=Priority.MEDIUM,
                            due_in_days=5,
                            category="Policies",
                        ))
                    self.add_log("assign_policies", f"Assigned {len(policies)} policy acknowledgments")

                case InitiateBenefits():
                    employee.benefits_enrollment_started = True
                    employee.tasks.append(Task(
                        id="hr-benefits-enrollment",
                        agent=self.name,
                        type="benefits_enrollment",
                        title="Complete Benefits Enrollment",
                        status=TaskStatus.PENDING,
                        priority=Priority.MEDIUM,
                        due_in_days=14,
                        category="Benefits",
                    ))
                    self.add_log("benefits_enrollment", "Initiated benefits enrollment")

                case _:
                    raise ValueError(f"Unknown HR intent: {intent!r}")

        return context

    async def reflect(self, context: AgentContext) -> Reflection:
        tasks = self.own_tasks(context)
        pending = sum(1 for t in tasks if t.status is TaskStatus.PENDING)
        self.add_log("reflect", f"HR onboarding: {len(tasks)} tasks created, {pending} pending")
        return Reflection(complete=True, context=context)
