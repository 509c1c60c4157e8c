"""
IT Setup Agent - accounts, hardware and access.

Provisions, per the department profile:
- Email account
- Software licenses
- Hardware (procurement, fulfilled later)
- VPN and system access grants
"""

import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..catalogs import DEFAULT_REFERENCE_DATA, ITProfile, ReferenceData
from ..models import AgentContext, Department, Priority, Task, TaskStatus
from .base_agent import BaseAgent, Reflection


@dataclass(frozen=True)
class ITPerception:
    department: Department
    profile: ITProfile
    email_needed: bool
    missing_software: Tuple[str, ...]
    missing_hardware: Tuple[str, ...]
    missing_access: Tuple[str, ...]


@dataclass(frozen=True)
class ProvisionEmail:
    email: str


@dataclass(frozen=True)
class AssignSoftware:
    software: Tuple[str, ...]


@dataclass(frozen=True)
class RequestHardware:
    hardware: Tuple[str, ...]


@dataclass(frozen=True)
class ConfigureAccess:
    access: Tuple[str, ...]


ITIntent = Union[ProvisionEmail, AssignSoftware, RequestHardware, ConfigureAccess]


HARDWARE_SEPARATORS = r'\s"'
ACCESS_SEPARATORS = r"\s/"


def slugify(text: str, separators: str = r"\s") -> str:
    """Lowercase and collapse runs of the separator class into '-'."""
    return re.sub(rf"[{separators}]+", "-", text.lower())


class ITSetupAgent(BaseAgent):
    """Provisions technology accounts, hardware and access."""

    key = "it"

    def __init__(
        self,
        reference: ReferenceData = DEFAULT_REFERENCE_DATA,
        email_domain: str = "company.com",
        **kwargs
    ):
        super().__init__("IT Setup Agent", "Provisions technology accounts, hardware, and access", **kwargs)
        self.reference = reference
        self.email_domain = email_domain
        self.capabilities = [
            "email_provisioning",
            "software_licenses",
            "hardware_request",
            "security_access",
        ]

    def email_for(self, first_name: str, last_name: str) -> str:
        return f"{first_name.lower()}.{last_name.lower()}@{self.email_domain}"

    async def perceive(self, context: AgentContext) -> AgentContext:
        employee = context.employee
        department = Department.parse(employee.department)
        profile = self.reference.it_profile(department)

        return context.perceived(ITPerception(
            department=department,
            profile=profile,
            email_needed=not employee.email_provisioned,
            missing_software=tuple(s for s in profile.software if s not in employee.accounts),
            missing_hardware=tuple(h for h in profile.hardware if h not in employee.hardware),
            missing_access=tuple(a for a in profile.access if a not in employee.access_grants),
        ))

    async def decide(self, context: AgentContext) -> List[ITIntent]:
        perception: ITPerception = context.perception
        employee = context.employee
        intents: List[ITIntent] = []

        if perception.email_needed:
            intents.append(ProvisionEmail(self.email_for(employee.first_name, employee.last_name)))
        if perception.missing_software:
            intents.append(AssignSoftware(perception.missing_software))
        if perception.missing_hardware:
            intents.append(RequestHardware(perception.missing_hardware))
        if perception.missing_access:
            intents.append(ConfigureAccess(perception.missing_access))

        return intents

    async def act(self, context: AgentContext, intents: List[ITIntent]) -> AgentContext:
        employee = context.employee

        for intent in intents:
            match intent:
                case ProvisionEmail(email=email):
                    employee.email_provisioned = True
                    employee.email = email
                    employee.tasks.append(Task(
                        id="it-email-setup",
                        agent=self.name,
                        type="auto_provisioned",
                        title=f"Email provisioned: {email}",
                        status=TaskStatus.COMPLETED,
                        priority=Priority.HIGH,
                        category="IT Accounts",
                    ))
                    self.add_log("provision_email", f"Created email: {email}")

                case AssignSoftware(software=software):
                    for sw in software:
                        employee.tasks.append(Task(
                            id=f"it-sw-{slugify(sw)}",
                            agent=self.name,
                            type="auto_provisioned",
                            title=f"License assigned: {sw}",
                            status=TaskStatus.COMPLETED,
                            priority=Priority.MEDIUM,
                            category="Software Licenses",
                        ))
                    employee.accounts = [*employee.accounts, *software]
                    self.add_log("assign_software", f"Assigned {len(software)} licenses")

                case RequestHardware(hardware=hardware):
                    for hw in hardware:
                        employee.tasks.append(Task(
                            id=f"it-hw-{slugify(hw, HARDWARE_SEPARATORS)}",
                            agent=self.name,
                            type="hardware_request",
                            title=f"Hardware: {hw}",
                            status=TaskStatus.IN_PROGRESS,
                            priority=Priority.HIGH,
                            due_in_days=5,
                            category="Hardware",
                            note="Procurement order placed – shipping in progress",
                        ))
                    employee.hardware = [*employee.hardware, *hardware]
                    self.add_log("request_hardware", f"Requested {len(hardware)} hardware items")

                case ConfigureAccess(access=access):
                    for grant in access:
                        employee.tasks.append(Task(
                            id=f"it-access-{slugify(grant, ACCESS_SEPARATORS)}",
                            agent=self.name,
                            type="auto_provisioned",
                            title=f"Access granted: {grant}",
                            status=TaskStatus.COMPLETED,
                            priority=Priority.HIGH,
                            category="Security & Access",
                        ))
                    employee.access_grants = [*employee.access_grants, *access]
                    self.add_log("configure_access", f"Configured {len(access)} access grants")

                case _:
                    raise ValueError(f"Unknown IT intent: {intent!r}")

        return context

    async def reflect(self, context: AgentContext) -> Reflection:
        tasks = self.own_tasks(context)
        auto = sum(1 for t in tasks if t.type == "auto_provisioned")
        pending = sum(1 for t in tasks if t.status is not TaskStatus.COMPLETED)
        self.add_log("reflect", f"IT setup: {auto} auto-provisioned, {pending} awaiting fulfillment")
        return Reflection(complete=True, context=context)
