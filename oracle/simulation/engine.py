"""
Simulation Coordinator - the Oracle's single entry point.

Flow for one request:
1. Validate the scenario (reject, never clamp, caller input)
2. Read the business records once
3. Assemble the snapshot, zeroing and flagging aggregates that cannot be read
4. Project baseline and scenario independently from the same snapshot
5. Derive workload and risk from the scenario projection
6. Aggregate results, risk level, prediction and recommendation

The coordinator keeps no state between calls.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from oracle.simulation.baseline import BaselineProjector
from oracle.simulation.errors import DataUnavailable, InvalidScenario
from oracle.simulation.projector import ScenarioProjector
from oracle.simulation.records import BusinessRecords, RecordStore
from oracle.simulation.resources import ResourceForecaster
from oracle.simulation.risk_scoring import RiskScore, RiskScorer
from oracle.simulation.snapshot import FinancialSnapshotBuilder
from oracle.simulation.tiers import TierTable, resolve_hiring_plan
from oracle.simulation.types import (
    HORIZON_MONTHS,
    FinancialSnapshot,
    MarketCondition,
    ResourceForecast,
    RiskLevel,
    SimulationResult,
    SimulationScenario,
    Trajectory,
    to_money,
)

logger = logging.getLogger(__name__)


@dataclass
class SimulationOutcome:
    """Everything one simulate call returns."""
    results: List[SimulationResult]
    resources: List[ResourceForecast]
    snapshot: FinancialSnapshot
    risk_level: RiskLevel
    prediction: str
    recommendation: str
    missing_data: List[str] = field(default_factory=list)
    tier_costs: Dict[str, Decimal] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return bool(self.missing_data)

    @property
    def advisor_context(self) -> str:
        return build_comparison_context(self)


# =============================================================================
# VALIDATION
# =============================================================================

def _check_finite(name: str, value: Decimal) -> None:
    if not Decimal(str(value)).is_finite():
        raise InvalidScenario(f"{name} must be a finite number, got {value}")


def _check_percentage(name: str, value: Decimal) -> None:
    _check_finite(name, value)
    if value < 0 or value > 100:
        raise InvalidScenario(f"{name} must be between 0 and 100, got {value}")


def validate_scenario(scenario: SimulationScenario) -> None:
    """
    Reject out-of-range scenarios before any record is read.

    Raises InvalidScenario describing the first violation.
    """
    _check_percentage("clientChurnRate", scenario.client_churn_rate)
    _check_percentage("newClientGrowth", scenario.new_client_growth)

    if not isinstance(scenario.market_condition, MarketCondition):
        raise InvalidScenario(f"Unknown marketCondition '{scenario.market_condition}'")

    _check_finite("expenseMultiplier", scenario.expense_multiplier)
    if scenario.expense_multiplier <= 0:
        raise InvalidScenario(
            f"expenseMultiplier must be positive, got {scenario.expense_multiplier}"
        )

    for label, count in scenario.hiring_plan.items():
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidScenario(f"Headcount for '{label}' must be an integer")
        if count < 0:
            raise InvalidScenario(f"Headcount for '{label}' cannot be negative, got {count}")

    resolve_hiring_plan(scenario.hiring_plan)


# =============================================================================
# ASSEMBLY HELPERS
# =============================================================================

def assemble_snapshot(records: BusinessRecords) -> Tuple[FinancialSnapshot, List[str]]:
    """
    Build the snapshot, substituting zero for aggregates that cannot be read.

    Returns the snapshot and the names of the substituted fields.
    """
    builder = FinancialSnapshotBuilder(records)
    values: Dict[str, Decimal] = {}
    missing: List[str] = []

    for name, compute in builder.aggregates():
        try:
            values[name] = compute()
        except DataUnavailable as e:
            logger.warning(f"Snapshot degraded, using zero for {e}")
            values[name] = to_money(0)
            missing.append(name)

    return FinancialSnapshot(**values), missing


def month_labels(as_of: date, horizon: int = HORIZON_MONTHS) -> List[str]:
    """Calendar labels for the months following the as-of date."""
    return [(as_of + relativedelta(months=i)).strftime("%b %Y") for i in range(1, horizon + 1)]


def classify_risk(score: int) -> RiskLevel:
    if score > 90:
        return RiskLevel.CRITICAL
    if score > 70:
        return RiskLevel.HIGH
    if score > 40:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def build_prediction(scenario: Trajectory, labels: List[str]) -> str:
    negative_month = scenario.first_negative_month()
    if negative_month is not None:
        return (
            f"CRITICAL: Cash flow goes negative in {labels[negative_month - 1]} "
            f"(month {negative_month})."
        )
    return f"Scenario ends with ${scenario.final.cash_reserve:,.0f} cash."


def build_recommendation(
    final_risk: RiskScore,
    baseline: Trajectory,
    scenario: Trajectory,
    final_utilization: float,
) -> str:
    """Name the dominant month-12 risk driver, then compare cash with the baseline."""
    contributions = final_risk.contributions()
    driver = max(contributions, key=contributions.get)

    if contributions[driver] <= 0:
        headline = "No material risk drivers by month 12."
    elif driver == "runway":
        if scenario.final.cash_reserve <= 0:
            headline = "Cash is exhausted by month 12; the plan needs new funding or deeper cuts."
        else:
            headline = (
                f"Runway is the dominant risk: about {final_risk.runway_months:.1f} months "
                f"of cash left at the month-12 burn rate."
            )
    elif driver == "trend":
        headline = "Cash reserve is still falling month over month; tighten spending or grow recurring revenue."
    elif final_utilization > 90:
        headline = (
            f"Team is over capacity at {final_utilization:.0f}% utilization; "
            f"delivery risk dominates, consider hiring."
        )
    else:
        headline = (
            f"Team is under-utilized at {final_utilization:.0f}%; "
            f"payroll is outpacing the workload."
        )

    scenario_cash = scenario.final.cash_reserve
    baseline_cash = baseline.final.cash_reserve
    if scenario_cash > baseline_cash:
        comparison = "Strategy improves cash position."
    elif scenario_cash < baseline_cash:
        comparison = "Strategy consumes more cash than baseline."
    else:
        comparison = "Strategy leaves cash unchanged versus baseline."

    return f"{headline} {comparison}"


def build_comparison_context(outcome: SimulationOutcome) -> str:
    """Summarize the month-12 baseline vs scenario comparison for the advisor."""
    final = outcome.results[-1]
    snapshot = outcome.snapshot

    lines = [
        f"Starting cash: ${snapshot.starting_cash:,.0f}",
        f"Monthly retainers: ${snapshot.monthly_retainers:,.0f}; monthly burn: ${snapshot.total_burn:,.0f}",
        f"Month 12 ({final.label}) baseline: revenue ${final.baseline.revenue:,.0f}, "
        f"expenses ${final.baseline.expenses:,.0f}, cash ${final.baseline.cash_reserve:,.0f}",
        f"Month 12 ({final.label}) scenario: revenue ${final.scenario.revenue:,.0f}, "
        f"expenses ${final.scenario.expenses:,.0f}, cash ${final.scenario.cash_reserve:,.0f}",
        f"Team utilization: {final.team_utilization:.0f}%; risk score {final.risk_score}/100 "
        f"({outcome.risk_level.value})",
        f"Prediction: {outcome.prediction}",
    ]

    at_risk = [r for r in outcome.resources if r.burnout_risk >= 50]
    if at_risk:
        names = ", ".join(f"{r.user_name} ({r.burnout_risk:.0f}%)" for r in at_risk)
        lines.append(f"Burnout risk: {names}")

    if outcome.degraded:
        lines.append(f"Note: missing data for {', '.join(outcome.missing_data)}")

    return "\n".join(lines)


# =============================================================================
# SIMULATION
# =============================================================================

def run_simulation(
    records: BusinessRecords,
    scenario: SimulationScenario,
    as_of: date,
) -> SimulationOutcome:
    """Pure computation over one records read. The scenario must be validated."""
    snapshot, missing = assemble_snapshot(records)
    workers = records.workers if records.is_available("workers") else []
    tasks = records.open_tasks if records.is_available("tasks") else []

    tiers = TierTable.calibrated(workers)
    baseline = BaselineProjector().project(snapshot)
    projected = ScenarioProjector(tiers).project(snapshot, scenario)

    workload = ResourceForecaster(
        workers=workers,
        open_tasks=tasks,
        hires_by_tier=resolve_hiring_plan(scenario.hiring_plan),
    ).forecast(baseline, projected)

    has_staff = bool(workers) or scenario.total_hires > 0
    risks = RiskScorer(has_staff=has_staff).score(
        snapshot.starting_cash, projected, workload.team_utilization
    )

    labels = month_labels(as_of)
    results = [
        SimulationResult(
            month=i + 1,
            label=labels[i],
            baseline=baseline.months[i],
            scenario=projected.months[i],
            team_utilization=workload.team_utilization[i],
            risk_score=risks[i].score,
        )
        for i in range(HORIZON_MONTHS)
    ]

    final_risk = risks[-1]
    outcome = SimulationOutcome(
        results=results,
        resources=workload.resources,
        snapshot=snapshot,
        risk_level=classify_risk(final_risk.score),
        prediction=build_prediction(projected, labels),
        recommendation=build_recommendation(
            final_risk, baseline, projected, workload.team_utilization[-1]
        ),
        missing_data=missing,
        tier_costs=tiers.costs(),
    )

    logger.info(
        f"Simulation complete: risk={outcome.risk_level.value} "
        f"score={final_risk.score} degraded={outcome.degraded}"
    )
    return outcome


class SimulationCoordinator:
    """
    Orchestrates one simulation per call.

    Holds only the record store; concurrent calls share nothing else.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def simulate(
        self,
        scenario: SimulationScenario,
        as_of: Optional[date] = None,
    ) -> SimulationOutcome:
        validate_scenario(scenario)
        records = await self.store.fetch()
        return run_simulation(records, scenario, as_of or date.today())

    async def dashboard(self) -> Dict[str, Any]:
        records = await self.store.fetch()
        return build_dashboard(records)


# =============================================================================
# DASHBOARD
# =============================================================================

def build_dashboard(records: BusinessRecords) -> Dict[str, Any]:
    """Headline financials plus project and task counts by status."""
    snapshot, missing = assemble_snapshot(records)

    project_budgets: Dict[str, Decimal] = defaultdict(Decimal)
    project_counts: Counter = Counter()
    for project in records.projects:
        project_counts[project.status] += 1
        project_budgets[project.status] += Decimal(str(project.budget or 0))

    task_counts = Counter(t.status for t in records.tasks)

    return {
        "financials": {
            "cash_on_hand": snapshot.starting_cash,
            "monthly_retainer_revenue": snapshot.monthly_retainers,
            "monthly_burn_rate": snapshot.monthly_recurring_costs,
        },
        "projects": [
            {"status": status, "count": count, "budget": to_money(project_budgets[status])}
            for status, count in sorted(project_counts.items())
        ],
        "tasks": [
            {"status": status, "count": count}
            for status, count in sorted(task_counts.items())
        ],
        "missing_data": missing,
    }
