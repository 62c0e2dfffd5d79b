"""Simulation Pydantic schemas for request/response validation.

JSON uses camelCase keys; Python attributes stay snake_case.
"""
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from oracle.simulation.engine import SimulationOutcome
from oracle.simulation.errors import InvalidScenario
from oracle.simulation.types import (
    FinancialSnapshot,
    MarketCondition,
    MonthFigures,
    ResourceForecast,
    RiskLevel,
    SimulationResult,
    SimulationScenario,
    UtilizationTrend,
)


class CamelModel(BaseModel):
    """Base model serializing to camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# REQUEST
# ============================================================================

class ScenarioInput(CamelModel):
    """
    Caller-supplied scenario.

    Only types are checked here. Bounds are checked by the coordinator,
    which answers out-of-range values with a 400.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    hiring_plan: Dict[str, int] = Field(default_factory=dict, description="Tier label to headcount delta")
    client_churn_rate: float = Field(0, description="Monthly recurring revenue lost, percent")
    new_client_growth: float = Field(0, description="Pipeline share converting to recurring revenue, percent")
    market_condition: str = Field(MarketCondition.STABLE.value, description="BOOM | STABLE | RECESSION")
    expense_multiplier: float = Field(1.0, description="Scalar applied to recurring costs")

    def to_scenario(self) -> SimulationScenario:
        try:
            market = MarketCondition(self.market_condition.upper())
        except ValueError:
            raise InvalidScenario(f"Unknown marketCondition '{self.market_condition}'")

        return SimulationScenario(
            hiring_plan=dict(self.hiring_plan),
            client_churn_rate=Decimal(str(self.client_churn_rate)),
            new_client_growth=Decimal(str(self.new_client_growth)),
            market_condition=market,
            expense_multiplier=Decimal(str(self.expense_multiplier)),
            id=self.id,
            name=self.name,
        )


class SimulateRequest(CamelModel):
    """Body of POST /oracle/simulate."""
    scenario: ScenarioInput = Field(default_factory=ScenarioInput)


# ============================================================================
# RESPONSE
# ============================================================================

class MonthFiguresSchema(CamelModel):
    revenue: float
    expenses: float
    cash_reserve: float

    @classmethod
    def from_figures(cls, figures: MonthFigures) -> "MonthFiguresSchema":
        return cls(
            revenue=float(figures.revenue),
            expenses=float(figures.expenses),
            cash_reserve=float(figures.cash_reserve),
        )


class SimulationResultSchema(CamelModel):
    """One simulated month."""
    month: int
    label: str
    baseline: MonthFiguresSchema
    scenario: MonthFiguresSchema
    team_utilization: float
    risk_score: int

    @classmethod
    def from_result(cls, result: SimulationResult) -> "SimulationResultSchema":
        return cls(
            month=result.month,
            label=result.label,
            baseline=MonthFiguresSchema.from_figures(result.baseline),
            scenario=MonthFiguresSchema.from_figures(result.scenario),
            team_utilization=result.team_utilization,
            risk_score=result.risk_score,
        )


class ResourceForecastSchema(CamelModel):
    user_id: str
    user_name: str
    tier: str
    current_utilization: float
    burnout_risk: float
    months_until_burnout: Optional[int] = Field(None, description="Null when not projected within 12 months")
    utilization_trend: UtilizationTrend

    @classmethod
    def from_forecast(cls, forecast: ResourceForecast) -> "ResourceForecastSchema":
        return cls(
            user_id=forecast.user_id,
            user_name=forecast.user_name,
            tier=forecast.tier,
            current_utilization=forecast.current_utilization,
            burnout_risk=forecast.burnout_risk,
            months_until_burnout=forecast.months_until_burnout,
            utilization_trend=forecast.utilization_trend,
        )


class FinancialSnapshotSchema(CamelModel):
    starting_cash: float
    monthly_retainers: float
    monthly_recurring_costs: float
    monthly_payroll: float
    total_burn: float
    outstanding_ar: float = Field(..., alias="outstandingAR")
    outstanding_ap: float = Field(..., alias="outstandingAP")
    pipeline_value: float

    @classmethod
    def from_snapshot(cls, snapshot: FinancialSnapshot) -> "FinancialSnapshotSchema":
        return cls(
            starting_cash=float(snapshot.starting_cash),
            monthly_retainers=float(snapshot.monthly_retainers),
            monthly_recurring_costs=float(snapshot.monthly_recurring_costs),
            monthly_payroll=float(snapshot.monthly_payroll),
            total_burn=float(snapshot.total_burn),
            outstanding_ar=float(snapshot.outstanding_ar),
            outstanding_ap=float(snapshot.outstanding_ap),
            pipeline_value=float(snapshot.pipeline_value),
        )


def snapshot_field_aliases(names: List[str]) -> List[str]:
    """JSON names of snapshot fields, as they appear in financialSnapshot."""
    fields = FinancialSnapshotSchema.model_fields
    return [fields[name].alias or name for name in names]


class SimulateResponse(CamelModel):
    """Body of a successful POST /oracle/simulate."""
    results: List[SimulationResultSchema]
    resources: List[ResourceForecastSchema]
    risk_level: RiskLevel
    prediction: str
    recommendation: str
    financial_snapshot: FinancialSnapshotSchema
    tier_costs: Dict[str, float] = Field(default_factory=dict, description="Monthly cost of one hire per tier")
    advisor_context: str = Field("", description="Month-12 comparison to pass to POST /oracle/advisor")
    degraded: bool = False
    missing_data: List[str] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: SimulationOutcome) -> "SimulateResponse":
        return cls(
            results=[SimulationResultSchema.from_result(r) for r in outcome.results],
            resources=[ResourceForecastSchema.from_forecast(r) for r in outcome.resources],
            risk_level=outcome.risk_level,
            prediction=outcome.prediction,
            recommendation=outcome.recommendation,
            financial_snapshot=FinancialSnapshotSchema.from_snapshot(outcome.snapshot),
            tier_costs={name: float(cost) for name, cost in outcome.tier_costs.items()},
            advisor_context=outcome.advisor_context,
            degraded=outcome.degraded,
            missing_data=snapshot_field_aliases(outcome.missing_data),
        )


# ============================================================================
# DASHBOARD
# ============================================================================

class DashboardFinancials(CamelModel):
    cash_on_hand: float
    monthly_retainer_revenue: float
    monthly_burn_rate: float


class ProjectStatusCount(CamelModel):
    status: str
    count: int
    budget: float


class TaskStatusCount(CamelModel):
    status: str
    count: int


class DashboardResponse(CamelModel):
    """Body of GET /oracle/dashboard."""
    financials: DashboardFinancials
    projects: List[ProjectStatusCount]
    tasks: List[TaskStatusCount]
    missing_data: List[str] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: Dict) -> "DashboardResponse":
        financials = summary["financials"]
        return cls(
            financials=DashboardFinancials(
                cash_on_hand=float(financials["cash_on_hand"]),
                monthly_retainer_revenue=float(financials["monthly_retainer_revenue"]),
                monthly_burn_rate=float(financials["monthly_burn_rate"]),
            ),
            projects=[
                ProjectStatusCount(status=p["status"], count=p["count"], budget=float(p["budget"]))
                for p in summary["projects"]
            ],
            tasks=[TaskStatusCount(status=t["status"], count=t["count"]) for t in summary["tasks"]],
            missing_data=snapshot_field_aliases(summary.get("missing_data", [])),
        )
