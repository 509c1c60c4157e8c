"""
Employee classifier for onboarding previews.

Classifies new employees into onboarding tiers and risk levels from their
profile using a rule-based weighted scoring system.

Tier classification (first match wins):
- executive        → VP, Director, C-suite, Head-of and similar roles
- technical        → Engineering, Data, DevOps and similar departments
- remote-intensive → Remote or hybrid employees
- standard         → Everyone else

Risk classification:
- high   → Critical profile data missing or very short lead time
- medium → Some data missing or short lead time
- low    → Profile complete with enough lead time
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .models import Employee, now_iso


class Tier(Enum):
    EXECUTIVE = "executive"
    TECHNICAL = "technical"
    REMOTE_INTENSIVE = "remote-intensive"
    STANDARD = "standard"


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


EXECUTIVE_KEYWORDS: Tuple[str, ...] = (
    "ceo", "cto", "coo", "cfo", "ciso",
    "vp", "vice president",
    "director", "head of", "chief",
    "president", "partner", "principal",
)

TECHNICAL_DEPARTMENTS: Tuple[str, ...] = (
    "engineering", "data", "devops", "platform",
    "infrastructure", "ml", "ai", "security",
    "sre", "backend", "frontend", "fullstack",
)

REMOTE_LOCATIONS: Tuple[str, ...] = ("remote", "hybrid")

TIER_BASE_DAYS: Dict[Tier, int] = {
    Tier.EXECUTIVE: 60,
    Tier.TECHNICAL: 45,
    Tier.REMOTE_INTENSIVE: 35,
    Tier.STANDARD: 30,
}

TIER_BASE_INTENSITY: Dict[Tier, int] = {
    Tier.EXECUTIVE: 4,
    Tier.TECHNICAL: 4,
    Tier.REMOTE_INTENSIVE: 3,
    Tier.STANDARD: 2,
}

TIER_FOCUS_AREAS: Dict[Tier, Tuple[str, ...]] = {
    Tier.EXECUTIVE: ("strategic-alignment", "stakeholder-meetings", "leadership-integration"),
    Tier.TECHNICAL: ("system-access", "technical-training", "code-review-process"),
    Tier.REMOTE_INTENSIVE: ("communication-setup", "buddy-program", "async-workflows"),
    Tier.STANDARD: ("company-culture", "team-integration", "tools-training"),
}

# Penalties for missing profile fields
MISSING_FIELD_PENALTIES: Tuple[Tuple[str, int], ...] = (
    ("email", 2),
    ("role", 2),
    ("department", 2),
    ("manager", 1),
    ("location", 1),
)

# Weights for profile completeness
CONFIDENCE_WEIGHTS: Tuple[Tuple[str, int], ...] = (
    ("first_name", 1),
    ("last_name", 1),
    ("department", 2),
    ("role", 2),
    ("location", 1),
    ("start_date", 1),
    ("manager", 1),
    ("email", 1),
)

HIGH_RISK_THRESHOLD = 5
MEDIUM_RISK_THRESHOLD = 2
MAX_INTENSITY = 5


@dataclass
class ClassificationResult:
    tier: Tier
    risk_level: RiskLevel
    risk_score: int
    onboarding_intensity: int
    estimated_completion_days: int
    focus_areas: List[str]
    confidence: int
    model_version: str
    classified_at: str = field(default_factory=now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "risk_level": self.risk_level.value,
            "risk_score": self.risk_score,
            "onboarding_intensity": self.onboarding_intensity,
            "estimated_completion_days": self.estimated_completion_days,
            "focus_areas": list(self.focus_areas),
            "confidence": self.confidence,
            "classified_at": self.classified_at,
            "model_version": self.model_version,
        }


def _dedupe(items: List[str]) -> List[str]:
    """Drop repeats, keeping first occurrences in order."""
    return list(dict.fromkeys(items))


class EmployeeClassifier:
    """Rule-based onboarding classifier. Stateless; safe to share."""

    version = "1.0.0"

    def classify(
        self,
        employee: Union[Employee, Mapping[str, Any]],
        today: Optional[date] = None
    ) -> ClassificationResult:
        """
        Classify an employee and return a full classification result.

        Args:
            employee: Employee record or loosely-typed mapping
            today: Reference date for lead-time checks (defaults to today)

        Returns:
            ClassificationResult
        """
        if not isinstance(employee, Employee):
            employee = Employee.from_input(employee)

        tier = self.classify_tier(employee)
        score = self.risk_score(employee, today)
        risk_level = self.risk_level(score)
        intensity = self.intensity(tier, risk_level)

        return ClassificationResult(
            tier=tier,
            risk_level=risk_level,
            risk_score=score,
            onboarding_intensity=intensity,
            estimated_completion_days=self.estimate_days(tier, intensity),
            focus_areas=self.focus_areas(tier, risk_level, employee),
            confidence=self.confidence(employee),
            model_version=self.version,
        )

    def classify_tier(self, employee: Employee) -> Tier:
        role = employee.role.lower()
        department = employee.department.lower()
        location = employee.location.strip().lower()

        if any(keyword in role for keyword in EXECUTIVE_KEYWORDS):
            return Tier.EXECUTIVE
        if any(keyword in department for keyword in TECHNICAL_DEPARTMENTS):
            return Tier.TECHNICAL
        if location in REMOTE_LOCATIONS:
            return Tier.REMOTE_INTENSIVE
        return Tier.STANDARD

    def risk_score(self, employee: Employee, today: Optional[date] = None) -> int:
        """
        Sum of risk penalties.

        +2 email, role or department missing; +1 manager or location missing;
        +3 start date already passed, +2 within 3 days, +1 within 7 days,
        +1 start date not provided.
        """
        score = sum(penalty for name, penalty in MISSING_FIELD_PENALTIES if not getattr(employee, name))

        if employee.start_date is None:
            score += 1
        else:
            lead = (employee.start_date - (today or date.today())).days
            if lead < 0:
                score += 3
            elif lead < 3:
                score += 2
            elif lead < 7:
                score += 1

        return score

    @staticmethod
    def risk_level(score: int) -> RiskLevel:
        if score >= HIGH_RISK_THRESHOLD:
            return RiskLevel.HIGH
        if score >= MEDIUM_RISK_THRESHOLD:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    @staticmethod
    def intensity(tier: Tier, risk_level: RiskLevel) -> int:
        """Onboarding intensity on a 1-5 scale."""
        bonus = 1 if risk_level is RiskLevel.HIGH else 0
        return min(MAX_INTENSITY, TIER_BASE_INTENSITY[tier] + bonus)

    @staticmethod
    def estimate_days(tier: Tier, intensity: int) -> int:
        return TIER_BASE_DAYS[tier] + (intensity - 2) * 5

    @staticmethod
    def focus_areas(tier: Tier, risk_level: RiskLevel, employee: Employee) -> List[str]:
        areas: List[str] = []

        if risk_level is RiskLevel.HIGH:
            areas += ["document-collection", "account-provisioning"]
        areas += TIER_FOCUS_AREAS[tier]
        if risk_level is RiskLevel.MEDIUM:
            areas.append("document-collection")
        if not employee.manager:
            areas.append("manager-assignment")

        return _dedupe(areas)

    @staticmethod
    def confidence(employee: Employee) -> int:
        """Confidence (0-100) from weighted profile completeness."""
        total = sum(weight for _, weight in CONFIDENCE_WEIGHTS)
        earned = sum(weight for name, weight in CONFIDENCE_WEIGHTS if getattr(employee, name))
        return int(round(earned / total * 100))


_default_classifier = EmployeeClassifier()


def classify(
    employee: Union[Employee, Mapping[str, Any]],
    today: Optional[date] = None
) -> ClassificationResult:
    """Classify with the shared default classifier."""
    return _default_classifier.classify(employee, today)
