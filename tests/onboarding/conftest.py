"""Shared fixtures for onboarding tests."""

from datetime import date

import pytest

from onboarding.agents.metrics import MetricsCollector
from onboarding.models import Employee


@pytest.fixture
def engineer():
    """Engineering hire with a complete profile."""
    return Employee(
        id="emp-1",
        first_name="Ana",
        last_name="Lopez",
        department="engineering",
        role="Backend Engineer",
        start_date=date(2025, 3, 17),
        manager="Sam Rivera",
        location="Austin",
    )


@pytest.fixture
def metrics():
    return MetricsCollector()
