"""
Risk Scoring - monthly scenario risk.

Composite risk = (trend × 0.3) + (runway × 0.5) + (utilization × 0.2), scaled to 0-100.

Each component is a 0-1 signal computed from one month of the scenario
trajectory and the team utilization for that month.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from oracle.simulation.types import MonthFigures, Trajectory, clamp


TREND_WEIGHT = 0.3
RUNWAY_WEIGHT = 0.5
UTILIZATION_WEIGHT = 0.2

RUNWAY_HORIZON_MONTHS = 12.0
HEALTHY_UTILIZATION_LOW = 60.0
HEALTHY_UTILIZATION_HIGH = 90.0
OVERLOAD_SPAN = 30.0  # points above the band that max out the signal


@dataclass
class RiskScore:
    """Container for risk score components."""
    score: int  # 0-100 overall risk score
    trend_risk: float  # 0-1 cash declining versus prior month
    runway_risk: float  # 0-1 proximity of cash depletion
    utilization_risk: float  # 0-1 distance from the healthy utilization band
    runway_months: Optional[float]  # None when the month is cash-positive

    def contributions(self) -> Dict[str, float]:
        """Weighted share of each driver in the composite."""
        return {
            "trend": self.trend_risk * TREND_WEIGHT,
            "runway": self.runway_risk * RUNWAY_WEIGHT,
            "utilization": self.utilization_risk * UTILIZATION_WEIGHT,
        }


def calculate_trend_risk(previous_cash: Decimal, month: MonthFigures) -> float:
    """
    Decline in cash relative to the month's expenses.

    Losing a full month of expenses (nothing came in) is the maximum.
    """
    if month.cash_reserve >= previous_cash:
        return 0.0
    decline = previous_cash - month.cash_reserve
    expenses = max(month.expenses, Decimal("1"))
    return clamp(float(decline / expenses), 0.0, 1.0)


def calculate_runway_months(month: MonthFigures) -> Optional[float]:
    """Months of cash left at this month's net burn. None if not burning."""
    net_burn = month.expenses - month.revenue
    if net_burn <= 0:
        return None
    if month.cash_reserve <= 0:
        return 0.0
    return float(month.cash_reserve / net_burn)


def calculate_runway_risk(month: MonthFigures) -> float:
    """
    Inverted runway, scaled over the 12-month horizon.

    Depleted cash is maximum risk; a cash-positive month carries none.
    """
    if month.cash_reserve <= 0:
        return 1.0
    runway = calculate_runway_months(month)
    if runway is None:
        return 0.0
    return clamp(1.0 - runway / RUNWAY_HORIZON_MONTHS, 0.0, 1.0)


def calculate_utilization_risk(utilization: float, has_staff: bool = True) -> float:
    """Over- and under-utilization both raise risk."""
    if not has_staff:
        return 0.0
    if utilization > HEALTHY_UTILIZATION_HIGH:
        return clamp((utilization - HEALTHY_UTILIZATION_HIGH) / OVERLOAD_SPAN, 0.0, 1.0)
    if utilization < HEALTHY_UTILIZATION_LOW:
        return clamp(
            (HEALTHY_UTILIZATION_LOW - utilization) / HEALTHY_UTILIZATION_LOW, 0.0, 1.0
        )
    return 0.0


def calculate_composite_risk(trend: float, runway: float, utilization: float) -> int:
    """Weighted sum of the three signals, scaled to an integer 0-100."""
    composite = (
        (trend * TREND_WEIGHT) +
        (runway * RUNWAY_WEIGHT) +
        (utilization * UTILIZATION_WEIGHT)
    )
    return int(clamp(round(composite * 100), 0, 100))


class RiskScorer:
    """Scores every month of a scenario trajectory."""

    def __init__(self, has_staff: bool = True):
        self.has_staff = has_staff

    def score_month(
        self,
        previous_cash: Decimal,
        month: MonthFigures,
        utilization: float,
    ) -> RiskScore:
        trend = calculate_trend_risk(previous_cash, month)
        runway = calculate_runway_risk(month)
        staffing = calculate_utilization_risk(utilization, self.has_staff)

        return RiskScore(
            score=calculate_composite_risk(trend, runway, staffing),
            trend_risk=round(trend, 4),
            runway_risk=round(runway, 4),
            utilization_risk=round(staffing, 4),
            runway_months=calculate_runway_months(month),
        )

    def score(
        self,
        starting_cash: Decimal,
        scenario: Trajectory,
        team_utilization: List[float],
    ) -> List[RiskScore]:
        scores = []
        previous_cash = starting_cash
        for month, utilization in zip(scenario.months, team_utilization):
            scores.append(self.score_month(previous_cash, month, utilization))
            previous_cash = month.cash_reserve
        return scores
