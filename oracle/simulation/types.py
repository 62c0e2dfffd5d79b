"""
Simulation Engine Types - Core Data Structures.

Plain value objects shared by the projectors, the risk scorer and the
resource forecaster. Everything here is built fresh per request.

Money is held as Decimal quantized to cents; percentages and scores are floats.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List, Optional


HORIZON_MONTHS = 12
CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert a number to a cent-quantized Decimal."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


# =============================================================================
# ENUMS
# =============================================================================

class MarketCondition(str, Enum):
    """Macro environment applied to growth and churn."""
    BOOM = "BOOM"
    STABLE = "STABLE"
    RECESSION = "RECESSION"


class UtilizationTrend(str, Enum):
    """Direction of a worker's load between month 1 and month 12."""
    UP = "UP"
    DOWN = "DOWN"
    STABLE = "STABLE"


class RiskLevel(str, Enum):
    """Coarse bucket derived from the month-12 risk score."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


# =============================================================================
# INPUTS
# =============================================================================

@dataclass(frozen=True)
class FinancialSnapshot:
    """Current-state facts, assembled once per request."""
    starting_cash: Decimal
    monthly_retainers: Decimal
    monthly_recurring_costs: Decimal
    monthly_payroll: Decimal
    outstanding_ar: Decimal
    outstanding_ap: Decimal
    pipeline_value: Decimal

    @property
    def total_burn(self) -> Decimal:
        return self.monthly_payroll + self.monthly_recurring_costs


@dataclass(frozen=True)
class SimulationScenario:
    """
    One hypothetical set of strategic decisions.

    Passed by value into the coordinator; the engine never holds on to it
    between calls.
    """
    hiring_plan: Dict[str, int] = field(default_factory=dict)
    client_churn_rate: Decimal = Decimal("0")
    new_client_growth: Decimal = Decimal("0")
    market_condition: MarketCondition = MarketCondition.STABLE
    expense_multiplier: Decimal = Decimal("1")
    id: Optional[str] = None
    name: Optional[str] = None

    @property
    def total_hires(self) -> int:
        return sum(self.hiring_plan.values())


# =============================================================================
# OUTPUTS
# =============================================================================

@dataclass(frozen=True)
class MonthFigures:
    """Revenue, expenses and closing cash for one month of one trajectory."""
    revenue: Decimal
    expenses: Decimal
    cash_reserve: Decimal


@dataclass
class Trajectory:
    """Twelve months of figures, month 1 first."""
    months: List[MonthFigures]

    @property
    def final(self) -> MonthFigures:
        return self.months[-1]

    def first_negative_month(self) -> Optional[int]:
        """1-based month in which cash first drops below zero, if any."""
        for index, figures in enumerate(self.months, start=1):
            if figures.cash_reserve < 0:
                return index
        return None


@dataclass
class SimulationResult:
    """One simulated month: both trajectories side by side."""
    month: int
    label: str
    baseline: MonthFigures
    scenario: MonthFigures
    team_utilization: float
    risk_score: int


@dataclass
class ResourceForecast:
    """Burnout outlook for one staff member under the scenario."""
    user_id: str
    user_name: str
    tier: str
    current_utilization: float
    burnout_risk: float
    months_until_burnout: Optional[int]  # None: not projected within the horizon
    utilization_trend: UtilizationTrend
