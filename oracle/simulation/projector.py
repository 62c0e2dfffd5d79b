"""
Scenario Projector.

Advances the same starting snapshot as the baseline while applying the
scenario's deltas:

1. Market condition scales churn and growth (fixed coefficients below)
2. Recurring revenue compounds: churn erodes it, pipeline converts into it
   at one twelfth of the growth share per month
3. Every hire in the plan starts in month 1 (step cost, no staggered onboarding)
4. Recurring non-payroll costs are scaled by the expense multiplier

Negative cash never stops the projection; runway is read off the result.
"""

from decimal import Decimal
from typing import Dict, List, Tuple

from oracle.simulation.tiers import TierTable
from oracle.simulation.types import (
    HORIZON_MONTHS,
    FinancialSnapshot,
    MarketCondition,
    MonthFigures,
    SimulationScenario,
    Trajectory,
    to_money,
)


HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")

# (churn multiplier, growth multiplier)
MARKET_ADJUSTMENTS: Dict[MarketCondition, Tuple[Decimal, Decimal]] = {
    MarketCondition.BOOM: (Decimal("0.7"), Decimal("1.3")),
    MarketCondition.STABLE: (Decimal("1"), Decimal("1")),
    MarketCondition.RECESSION: (Decimal("1.5"), Decimal("0.6")),
}


def _clamp_percent(value: Decimal) -> Decimal:
    return max(Decimal("0"), min(HUNDRED, value))


def effective_rates(scenario: SimulationScenario) -> Tuple[Decimal, Decimal]:
    """Market-adjusted (churn, growth) as fractions in [0, 1]."""
    churn_factor, growth_factor = MARKET_ADJUSTMENTS[scenario.market_condition]
    churn = _clamp_percent(scenario.client_churn_rate * churn_factor)
    growth = _clamp_percent(scenario.new_client_growth * growth_factor)
    return churn / HUNDRED, growth / HUNDRED


class ScenarioProjector:
    """Projects the snapshot forward with one scenario applied."""

    def __init__(self, tiers: TierTable, horizon: int = HORIZON_MONTHS):
        self.tiers = tiers
        self.horizon = horizon

    def project(self, snapshot: FinancialSnapshot, scenario: SimulationScenario) -> Trajectory:
        churn, growth = effective_rates(scenario)
        pipeline_conversion = snapshot.pipeline_value * growth / MONTHS_PER_YEAR

        new_hire_cost = self.tiers.hiring_cost(scenario.hiring_plan)
        expenses = to_money(
            snapshot.monthly_payroll
            + new_hire_cost
            + snapshot.monthly_recurring_costs * scenario.expense_multiplier
        )

        months: List[MonthFigures] = []
        recurring = snapshot.monthly_retainers
        cash = snapshot.starting_cash
        for _ in range(self.horizon):
            recurring = recurring * (Decimal("1") - churn) + pipeline_conversion
            revenue = to_money(recurring)
            cash = cash + revenue - expenses
            months.append(MonthFigures(revenue=revenue, expenses=expenses, cash_reserve=cash))

        return Trajectory(months=months)
