"""
Static reference catalogs the agents compute their gaps against.

Everything here is read-only. Agents receive a ReferenceData instance at
construction, so tests can swap in their own documents, profiles or buddy
pool without touching module state.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .models import Department


@dataclass(frozen=True)
class DocumentSpec:
    id: str
    label: str


@dataclass(frozen=True)
class ITProfile:
    """Software, hardware and access provisioned for a department."""
    software: Tuple[str, ...]
    hardware: Tuple[str, ...]
    access: Tuple[str, ...]


@dataclass(frozen=True)
class TrainingModule:
    id: str
    title: str
    duration: str
    format: str


@dataclass(frozen=True)
class BuddyCandidate:
    id: str
    name: str
    department: str
    seniority: str
    rating: float


@dataclass(frozen=True)
class CheckIn:
    day: int
    title: str


REQUIRED_DOCUMENTS: Tuple[DocumentSpec, ...] = (
    DocumentSpec("government_id", "Government-issued ID"),
    DocumentSpec("tax_w4", "W-4 Tax Withholding Form"),
    DocumentSpec("i9_form", "I-9 Employment Eligibility"),
    DocumentSpec("direct_deposit", "Direct Deposit Authorization"),
    DocumentSpec("emergency_contact", "Emergency Contact Form"),
    DocumentSpec("nda", "Non-Disclosure Agreement"),
)

REQUIRED_POLICIES: Tuple[str, ...] = (
    "code_of_conduct",
    "data_privacy",
    "remote_work",
    "anti_harassment",
)

IT_PROFILES: Dict[Department, ITProfile] = {
    Department.ENGINEERING: ITProfile(
        software=("IDE License", "GitHub Enterprise", "Jira", "Slack", "AWS Console"),
        hardware=('MacBook Pro 16"', 'External Monitor 27"', "Mechanical Keyboard", "USB-C Hub"),
        access=("VPN", "CI/CD Pipeline", "Staging Servers", "Code Repositories"),
    ),
    Department.DESIGN: ITProfile(
        software=("Figma Enterprise", "Adobe Creative Suite", "Slack", "Jira"),
        hardware=('MacBook Pro 16"', 'External Monitor 32" 4K', "Wacom Tablet"),
        access=("VPN", "Design Asset Library", "Brand Portal"),
    ),
    Department.PRODUCT: ITProfile(
        software=("Jira", "Confluence", "Slack", "Amplitude", "Mixpanel"),
        hardware=('MacBook Pro 14"', 'External Monitor 27"'),
        access=("VPN", "Analytics Dashboard", "Customer Feedback Portal"),
    ),
    Department.SALES: ITProfile(
        software=("Salesforce", "Slack", "Zoom Pro", "DocuSign"),
        hardware=("MacBook Air", 'External Monitor 24"'),
        access=("VPN", "CRM", "Sales Playbook"),
    ),
    Department.DEFAULT: ITProfile(
        software=("Slack", "Google Workspace", "Zoom"),
        hardware=("Laptop", 'External Monitor 24"'),
        access=("VPN", "Company Intranet"),
    ),
}

COMPANY_WIDE_MODULES: Tuple[TrainingModule, ...] = (
    TrainingModule("company-overview", "Company Overview & Mission", "45 min", "video"),
    TrainingModule("security-awareness", "Security Awareness Training", "30 min", "interactive"),
    TrainingModule("dei-training", "Diversity, Equity & Inclusion", "60 min", "workshop"),
    TrainingModule("tools-intro", "Internal Tools & Systems Overview", "90 min", "hands-on"),
)

ROLE_MODULES: Dict[Department, Tuple[TrainingModule, ...]] = {
    Department.ENGINEERING: (
        TrainingModule("eng-architecture", "System Architecture Deep Dive", "120 min", "hands-on"),
        TrainingModule("eng-git-workflow", "Git Workflow & Code Review Process", "60 min", "hands-on"),
        TrainingModule("eng-ci-cd", "CI/CD Pipeline Walkthrough", "45 min", "video"),
        TrainingModule("eng-oncall", "On-Call Procedures & Incident Response", "60 min", "interactive"),
    ),
    Department.DESIGN: (
        TrainingModule("des-system", "Design System & Brand Guidelines", "90 min", "workshop"),
        TrainingModule("des-research", "User Research Methods", "60 min", "video"),
        TrainingModule("des-accessibility", "Accessibility Standards (WCAG)", "45 min", "interactive"),
    ),
    Department.PRODUCT: (
        TrainingModule("pm-roadmap", "Product Roadmap & Strategy", "90 min", "workshop"),
        TrainingModule("pm-analytics", "Analytics & Data-Driven Decisions", "60 min", "hands-on"),
        TrainingModule("pm-customer", "Customer Journey Mapping", "45 min", "interactive"),
    ),
    Department.SALES: (
        TrainingModule("sales-product", "Product Knowledge Bootcamp", "120 min", "workshop"),
        TrainingModule("sales-crm", "CRM & Sales Tools Training", "60 min", "hands-on"),
        TrainingModule("sales-pitch", "Sales Pitch & Demo Skills", "90 min", "workshop"),
    ),
    Department.DEFAULT: (),
}

BUDDY_POOL: Tuple[BuddyCandidate, ...] = (
    BuddyCandidate("b1", "Sarah Chen", "engineering", "senior", 4.9),
    BuddyCandidate("b2", "Marcus Johnson", "engineering", "lead", 4.8),
    BuddyCandidate("b3", "Priya Patel", "design", "senior", 4.9),
    BuddyCandidate("b4", "Alex Rivera", "product", "senior", 4.7),
    BuddyCandidate("b5", "Jordan Kim", "sales", "lead", 4.8),
    BuddyCandidate("b6", "Emily Thompson", "engineering", "staff", 5.0),
    BuddyCandidate("b7", "David O'Brien", "product", "director", 4.6),
    BuddyCandidate("b8", "Lisa Nakamura", "design", "lead", 4.9),
)

CHECK_INS: Tuple[CheckIn, ...] = (
    CheckIn(7, "Week 1 Check-in with Buddy"),
    CheckIn(14, "Week 2 Check-in with Buddy"),
    CheckIn(30, "Day 30 Review with Buddy & Manager"),
    CheckIn(60, "Day 60 Mid-Point Review"),
    CheckIn(90, "Day 90 Final Onboarding Review"),
)


@dataclass(frozen=True)
class ReferenceData:
    """Bundle of catalogs injected into every agent."""
    documents: Tuple[DocumentSpec, ...] = REQUIRED_DOCUMENTS
    policies: Tuple[str, ...] = REQUIRED_POLICIES
    it_profiles: Dict[Department, ITProfile] = field(default_factory=lambda: dict(IT_PROFILES))
    company_modules: Tuple[TrainingModule, ...] = COMPANY_WIDE_MODULES
    role_modules: Dict[Department, Tuple[TrainingModule, ...]] = field(
        default_factory=lambda: dict(ROLE_MODULES)
    )
    buddy_pool: Tuple[BuddyCandidate, ...] = BUDDY_POOL
    check_ins: Tuple[CheckIn, ...] = CHECK_INS

    def it_profile(self, department: Department) -> ITProfile:
        return self.it_profiles.get(department) or self.it_profiles[Department.DEFAULT]

    def training_path(self, department: Department) -> Tuple[TrainingModule, ...]:
        return self.role_modules.get(department, ())


DEFAULT_REFERENCE_DATA = ReferenceData()
