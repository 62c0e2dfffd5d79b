"""
Resource Forecaster.

Turns today's task assignments into a 12-month workload outlook under the
scenario:

- Load: open tasks per person against a capacity of 8 open tasks (= 100%)
- Demand: scenario revenue relative to baseline revenue, month by month
- Dilution: hires into a tier spread that tier's existing load over more people

Burnout risk rises linearly with sustained utilization above 80%.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional

from oracle.simulation.records import TaskRecord, WorkerRecord
from oracle.simulation.tiers import tier_for_worker
from oracle.simulation.types import (
    ResourceForecast,
    Trajectory,
    UtilizationTrend,
    clamp,
)


TASK_CAPACITY = 8  # open tasks one person carries at 100%
BURNOUT_THRESHOLD = 80.0  # % utilization where overload starts to count
BURNOUT_CEILING = 120.0  # % sustained utilization mapping to risk 100
OVERLOAD_TOLERANCE = 120.0  # cumulative percentage-point-months above threshold
TREND_TOLERANCE = 0.5  # percentage points


@dataclass
class WorkloadForecast:
    """Team utilization per month plus one forecast per loaded worker."""
    team_utilization: List[float]
    resources: List[ResourceForecast]


def demand_factors(baseline: Trajectory, scenario: Trajectory) -> List[float]:
    """Scenario revenue as a multiple of baseline revenue, per month."""
    factors = []
    for base, scen in zip(baseline.months, scenario.months):
        if base.revenue > 0:
            factors.append(float(scen.revenue / base.revenue))
        else:
            factors.append(1.0)
    return factors


def months_until_burnout(utilization: List[float]) -> Optional[int]:
    """First month where accumulated overload reaches the tolerance, or None."""
    overload = 0.0
    for month, value in enumerate(utilization, start=1):
        overload += max(0.0, value - BURNOUT_THRESHOLD)
        if overload >= OVERLOAD_TOLERANCE:
            return month
    return None


def burnout_risk(utilization: List[float]) -> float:
    """Map mean utilization onto 0-100 between the threshold and the ceiling."""
    if not utilization:
        return 0.0
    sustained = sum(utilization) / len(utilization)
    risk = (sustained - BURNOUT_THRESHOLD) / (BURNOUT_CEILING - BURNOUT_THRESHOLD) * 100
    return round(clamp(risk, 0.0, 100.0), 1)


def utilization_trend(utilization: List[float]) -> UtilizationTrend:
    change = utilization[-1] - utilization[0]
    if change > TREND_TOLERANCE:
        return UtilizationTrend.UP
    if change < -TREND_TOLERANCE:
        return UtilizationTrend.DOWN
    return UtilizationTrend.STABLE


class ResourceForecaster:
    """Workload and burnout outlook for the current team under one hiring plan."""

    def __init__(
        self,
        workers: List[WorkerRecord],
        open_tasks: List[TaskRecord],
        hires_by_tier: Dict[str, int],
    ):
        self.workers = workers
        self.hires_by_tier = hires_by_tier
        worker_ids = {w.id for w in workers}
        self.task_counts = Counter(
            t.assigned_to_id for t in open_tasks if t.assigned_to_id in worker_ids
        )
        self.headcount = Counter(tier_for_worker(w) for w in workers)

    def dilution(self, tier: str) -> float:
        """Share of a tier's current load each existing member keeps after hiring."""
        current = self.headcount.get(tier, 0)
        if current == 0:
            return 1.0
        return current / (current + self.hires_by_tier.get(tier, 0))

    def team_utilization(self, demand: List[float]) -> List[float]:
        """Assigned load over capacity of the scenario headcount, per month."""
        headcount = len(self.workers) + sum(self.hires_by_tier.values())
        if headcount == 0:
            return [0.0 for _ in demand]

        assigned = sum(self.task_counts.values())
        capacity = headcount * TASK_CAPACITY
        return [
            round(max(0.0, assigned * factor / capacity * 100), 1)
            for factor in demand
        ]

    def forecast_worker(self, worker: WorkerRecord, demand: List[float]) -> ResourceForecast:
        tier = tier_for_worker(worker)
        current = self.task_counts[worker.id] / TASK_CAPACITY * 100
        dilution = self.dilution(tier)
        monthly = [max(0.0, current * factor * dilution) for factor in demand]

        return ResourceForecast(
            user_id=worker.id,
            user_name=worker.name,
            tier=tier,
            current_utilization=round(current, 1),
            burnout_risk=burnout_risk(monthly),
            months_until_burnout=months_until_burnout(monthly),
            utilization_trend=utilization_trend(monthly),
        )

    def forecast(self, baseline: Trajectory, scenario: Trajectory) -> WorkloadForecast:
        demand = demand_factors(baseline, scenario)
        resources = [
            self.forecast_worker(worker, demand)
            for worker in self.workers
            if self.task_counts[worker.id] > 0
        ]
        return WorkloadForecast(
            team_utilization=self.team_utilization(demand),
            resources=resources,
        )
