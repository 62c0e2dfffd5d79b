"""
Baseline Projector.

"If nothing changes": retainers in, payroll and recurring costs out, flat
for twelve months. AR/AP timing and pipeline conversion are not modelled;
the result depends on the snapshot alone.
"""

from typing import List

from oracle.simulation.types import (
    HORIZON_MONTHS,
    FinancialSnapshot,
    MonthFigures,
    Trajectory,
    to_money,
)


class BaselineProjector:
    """Projects the snapshot forward with no hypothetical changes."""

    def __init__(self, horizon: int = HORIZON_MONTHS):
        self.horizon = horizon

    def project(self, snapshot: FinancialSnapshot) -> Trajectory:
        revenue = to_money(snapshot.monthly_retainers)
        expenses = to_money(snapshot.total_burn)

        months: List[MonthFigures] = []
        cash = snapshot.starting_cash
        for _ in range(self.horizon):
            cash = cash + revenue - expenses
            months.append(MonthFigures(revenue=revenue, expenses=expenses, cash_reserve=cash))

        return Trajectory(months=months)
