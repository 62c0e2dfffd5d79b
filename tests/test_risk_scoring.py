"""Tests for monthly scenario risk scoring."""

import pytest
from decimal import Decimal

from oracle.simulation.baseline import BaselineProjector
from oracle.simulation.risk_scoring import (
    RiskScorer,
    calculate_composite_risk,
    calculate_runway_months,
    calculate_runway_risk,
    calculate_trend_risk,
    calculate_utilization_risk,
)
from oracle.simulation.types import MonthFigures


def month(revenue, expenses, cash):
    return MonthFigures(
        revenue=Decimal(str(revenue)),
        expenses=Decimal(str(expenses)),
        cash_reserve=Decimal(str(cash)),
    )


class TestRiskComponents:

    def test_trend_zero_when_cash_grows(self):
        assert calculate_trend_risk(Decimal("100000"), month(30000, 25000, 105000)) == 0.0

    def test_trend_scales_with_decline(self):
        risk = calculate_trend_risk(Decimal("100000"), month(20000, 25000, 95000))
        assert risk == pytest.approx(0.2)

    def test_trend_capped_at_one(self):
        risk = calculate_trend_risk(Decimal("100000"), month(0, 25000, 50000))
        assert risk == 1.0

    def test_runway_months(self):
        assert calculate_runway_months(month(20000, 25000, 40000)) == pytest.approx(8.0)
        assert calculate_runway_months(month(30000, 25000, 40000)) is None

    def test_runway_risk(self):
        assert calculate_runway_risk(month(20000, 25000, 95000)) == 0.0  # 19 months
        assert calculate_runway_risk(month(20000, 25000, 30000)) == pytest.approx(0.5)  # 6 months
        assert calculate_runway_risk(month(20000, 25000, 0)) == 1.0
        assert calculate_runway_risk(month(20000, 25000, -5000)) == 1.0
        assert calculate_runway_risk(month(30000, 25000, 1000)) == 0.0

    def test_utilization_band(self):
        assert calculate_utilization_risk(75) == 0.0
        assert calculate_utilization_risk(60) == 0.0
        assert calculate_utilization_risk(90) == 0.0
        assert calculate_utilization_risk(105) == pytest.approx(0.5)
        assert calculate_utilization_risk(150) == 1.0
        assert calculate_utilization_risk(30) == pytest.approx(0.5)
        assert calculate_utilization_risk(0) == 1.0

    def test_no_staff_has_no_utilization_risk(self):
        assert calculate_utilization_risk(0, has_staff=False) == 0.0

    def test_composite_weights(self):
        assert calculate_composite_risk(0, 0, 0) == 0
        assert calculate_composite_risk(1, 1, 1) == 100
        assert calculate_composite_risk(1, 0, 0) == 30
        assert calculate_composite_risk(0, 1, 0) == 50
        assert calculate_composite_risk(0, 0, 1) == 20


class TestRiskScorer:

    def test_reference_baseline_scores(self, reference_snapshot):
        trajectory = BaselineProjector().project(reference_snapshot)
        scores = RiskScorer().score(reference_snapshot.starting_cash, trajectory, [75.0] * 12)

        assert len(scores) == 12
        # Month 1: trend 0.2 only
        assert scores[0].score == 6
        # Month 12: trend 0.2, runway 8 months -> 1/3
        assert scores[-1].score == 23
        assert scores[-1].runway_months == pytest.approx(8.0)

    def test_scores_stay_in_range(self):
        trajectory_months = [
            month(0, 1_000_000, -1_000_000 * (i + 1)) for i in range(12)
        ]
        scorer = RiskScorer()
        previous = Decimal("0")
        for figures in trajectory_months:
            result = scorer.score_month(previous, figures, 500.0)
            assert 0 <= result.score <= 100
            previous = figures.cash_reserve

    def test_contributions_identify_runway(self, reference_snapshot):
        trajectory = BaselineProjector().project(reference_snapshot)
        final = RiskScorer().score(reference_snapshot.starting_cash, trajectory, [75.0] * 12)[-1]

        contributions = final.contributions()
        assert max(contributions, key=contributions.get) == "runway"
        assert final.score == 23
