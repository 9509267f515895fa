"""Tests for calculate_risk — spend-vs-progress scoring, pure, no IO."""

import pytest

from sitebook.core.domain_types import RiskLevel
from sitebook.core.risk_engine import (
    calculate_risk, budget_used_percent, risk_level_for_score,
)


def test_overspend_without_near_limit_is_high(project_factory):
    project = project_factory(spent=90000, budget=100000, progress=50)
    risk = calculate_risk(project)
    assert risk.risk_score == 50
    assert risk.risk_level == RiskLevel.HIGH
    assert "90.0%" in risk.reason
    assert "50%" in risk.reason
    assert risk.reason == "Spending (90.0%) significantly exceeds progress (50%)."


def test_overspend_and_near_limit_is_critical(project_factory):
    project = project_factory(spent=95000, budget=100000, progress=10)
    risk = calculate_risk(project)
    assert risk.risk_score == 80
    assert risk.risk_level == RiskLevel.CRITICAL
    assert risk.reason == (
        "Spending (95.0%) significantly exceeds progress (10%)."
        " Also near budget limit."
    )


def test_healthy_project_is_low_and_on_track(project_factory):
    project = project_factory(spent=10000, budget=100000, progress=50)
    risk = calculate_risk(project)
    assert risk.risk_score == 0
    assert risk.risk_level == RiskLevel.LOW
    assert risk.reason == "Project is on track."


def test_near_limit_alone_is_medium(project_factory):
    # 95% used but 80% done: within the 20-point margin
    project = project_factory(spent=95000, budget=100000, progress=80)
    risk = calculate_risk(project)
    assert risk.risk_score == 30
    assert risk.risk_level == RiskLevel.MEDIUM
    assert risk.reason == "Project is nearing total budget."


@pytest.mark.parametrize("spent", [0, 1, 500000])
@pytest.mark.parametrize("progress", [0, 50, 100])
def test_zero_budget_never_triggers(project_factory, spent, progress):
    project = project_factory(budget=0, spent=spent, progress=progress)
    risk = calculate_risk(project)
    assert budget_used_percent(project) == 0
    assert risk.risk_score == 0
    assert risk.risk_level == RiskLevel.LOW


def test_exactly_at_margin_does_not_trigger(project_factory):
    # 70% used vs 50% progress: not strictly greater than progress + 20
    project = project_factory(spent=70000, budget=100000, progress=50)
    assert calculate_risk(project).risk_score == 0


def test_exactly_ninety_percent_is_not_near_limit(project_factory):
    project = project_factory(spent=90000, budget=100000, progress=80)
    assert calculate_risk(project).risk_score == 0


def test_spend_over_budget_is_reported_above_hundred_percent(project_factory):
    project = project_factory(spent=150000, budget=100000, progress=100)
    risk = calculate_risk(project)
    assert risk.risk_score == 80
    assert "150.0%" in risk.reason


def test_analysis_carries_project_id(project_factory):
    assert calculate_risk(project_factory(id=42)).project_id == 42


def test_deterministic_for_same_snapshot(project_factory):
    project = project_factory(spent=93000, budget=100000, progress=20)
    assert calculate_risk(project) == calculate_risk(project)


@pytest.mark.parametrize("score,level", [
    (0, RiskLevel.LOW),
    (10, RiskLevel.LOW),
    (11, RiskLevel.MEDIUM),
    (30, RiskLevel.MEDIUM),
    (31, RiskLevel.HIGH),
    (60, RiskLevel.HIGH),
    (61, RiskLevel.CRITICAL),
    (80, RiskLevel.CRITICAL),
])
def test_level_thresholds(score, level):
    assert risk_level_for_score(score) == level
