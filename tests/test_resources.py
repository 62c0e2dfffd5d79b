"""
Tests for hiring tiers and the resource forecaster.

Tests cover:
1. Tier label matching and cost calibration
2. Dilution of per-person load by hires into the same tier
3. Burnout risk, months until burnout and utilization trend
4. Team utilization against scenario headcount
"""

import pytest
from decimal import Decimal

from oracle.simulation.baseline import BaselineProjector
from oracle.simulation.errors import InvalidScenario
from oracle.simulation.projector import ScenarioProjector
from oracle.simulation.records import TaskRecord, WorkerRecord
from oracle.simulation.resources import (
    ResourceForecaster,
    burnout_risk,
    months_until_burnout,
    utilization_trend,
)
from oracle.simulation.tiers import (
    TierTable,
    match_tier,
    resolve_hiring_plan,
    tier_for_worker,
)
from oracle.simulation.types import SimulationScenario, UtilizationTrend


def tasks_for(user_id, count, status="TODO"):
    return [TaskRecord(id=f"{user_id}_t{i}", status=status, assigned_to_id=user_id) for i in range(count)]


# =============================================================================
# TIERS
# =============================================================================

class TestHiringTiers:

    @pytest.mark.parametrize("label,expected", [
        ("Junior Dev", "Junior"),
        ("senior designer", "Senior"),
        ("Mid", "Mid"),
        ("Creative Director", "Director"),
        ("Intern", None),
        ("", None),
    ])
    def test_match_tier(self, label, expected):
        assert match_tier(label) == expected

    def test_worker_without_matching_title_is_mid(self):
        assert tier_for_worker(WorkerRecord(id="w", name="W", job_title="Designer")) == "Mid"
        assert tier_for_worker(WorkerRecord(id="w", name="W")) == "Mid"

    def test_resolve_hiring_plan_groups_labels(self):
        plan = {"Junior Dev": 2, "Junior Designer": 1, "Senior PM": 1}
        assert resolve_hiring_plan(plan) == {"Junior": 3, "Senior": 1}

    def test_unknown_tier_rejected(self):
        with pytest.raises(InvalidScenario, match="Intern"):
            resolve_hiring_plan({"Intern": 1})

    def test_default_calibration(self):
        costs = TierTable.calibrated([]).costs()
        assert costs == {
            "Junior": Decimal("5600.00"),
            "Mid": Decimal("8000.00"),
            "Senior": Decimal("12000.00"),
            "Director": Decimal("20000.00"),
        }

    def test_calibration_uses_team_hourly_rates(self):
        workers = [
            WorkerRecord(id="a", name="A", hourly_rate=40),
            WorkerRecord(id="b", name="B", hourly_rate=60),
            WorkerRecord(id="c", name="C", monthly_salary=9000),
        ]
        table = TierTable.calibrated(workers)
        # Mean of rated workers is 50/h
        assert table.monthly_cost("Mid") == Decimal("8000.00")
        assert table.hiring_cost({"Senior": 2, "Junior": 1}) == Decimal("29600.00")


# =============================================================================
# BURNOUT MATH
# =============================================================================

class TestBurnoutFunctions:

    def test_burnout_risk_mapping(self):
        assert burnout_risk([80.0] * 12) == 0.0
        assert burnout_risk([50.0] * 12) == 0.0
        assert burnout_risk([100.0] * 12) == 50.0
        assert burnout_risk([120.0] * 12) == 100.0
        assert burnout_risk([300.0] * 12) == 100.0

    def test_burnout_risk_monotonic(self):
        levels = [60.0, 85.0, 95.0, 110.0, 140.0]
        risks = [burnout_risk([level] * 12) for level in levels]
        assert risks == sorted(risks)

    def test_months_until_burnout(self):
        assert months_until_burnout([100.0] * 12) == 6
        assert months_until_burnout([120.0] * 12) == 3
        assert months_until_burnout([80.0] * 12) is None
        assert months_until_burnout([85.0] * 12) is None

    def test_utilization_trend(self):
        assert utilization_trend([50.0, 60.0, 70.0]) == UtilizationTrend.UP
        assert utilization_trend([70.0, 60.0, 50.0]) == UtilizationTrend.DOWN
        assert utilization_trend([70.0, 90.0, 70.2]) == UtilizationTrend.STABLE


# =============================================================================
# FORECASTER
# =============================================================================

class TestResourceForecaster:

    @pytest.fixture
    def team(self):
        return [
            WorkerRecord(id="user_sam", name="Sam", job_title="Senior Designer", monthly_salary=9000),
            WorkerRecord(id="user_jo", name="Jo", job_title="Junior Developer", hourly_rate=30),
            WorkerRecord(id="user_idle", name="Idle", job_title="Mid Copywriter", monthly_salary=5000),
        ]

    @pytest.fixture
    def open_tasks(self):
        return tasks_for("user_sam", 8) + tasks_for("user_jo", 4)

    def trajectories(self, snapshot, scenario):
        tiers = TierTable.calibrated([])
        baseline = BaselineProjector().project(snapshot)
        projected = ScenarioProjector(tiers).project(snapshot, scenario)
        return baseline, projected

    def test_only_loaded_workers_are_forecast(self, reference_snapshot, team, open_tasks):
        baseline, projected = self.trajectories(reference_snapshot, SimulationScenario())
        forecast = ResourceForecaster(team, open_tasks, {}).forecast(baseline, projected)

        assert [r.user_id for r in forecast.resources] == ["user_sam", "user_jo"]

    def test_neutral_scenario_keeps_load_flat(self, reference_snapshot, team, open_tasks):
        baseline, projected = self.trajectories(reference_snapshot, SimulationScenario())
        forecast = ResourceForecaster(team, open_tasks, {}).forecast(baseline, projected)

        sam = forecast.resources[0]
        assert sam.tier == "Senior"
        assert sam.current_utilization == 100.0
        assert sam.burnout_risk == 50.0
        assert sam.months_until_burnout == 6
        assert sam.utilization_trend == UtilizationTrend.STABLE

        jo = forecast.resources[1]
        assert jo.current_utilization == 50.0
        assert jo.burnout_risk == 0.0
        assert jo.months_until_burnout is None

        # 12 open tasks over 3 people * 8 capacity
        assert forecast.team_utilization == [50.0] * 12

    def test_hiring_dilutes_same_tier(self, reference_snapshot, team, open_tasks):
        scenario = SimulationScenario(hiring_plan={"Senior Designer": 1})
        baseline, projected = self.trajectories(reference_snapshot, scenario)
        forecaster = ResourceForecaster(team, open_tasks, resolve_hiring_plan(scenario.hiring_plan))
        forecast = forecaster.forecast(baseline, projected)

        assert forecaster.dilution("Senior") == 0.5
        assert forecaster.dilution("Junior") == 1.0

        sam = forecast.resources[0]
        assert sam.burnout_risk == 0.0
        assert sam.months_until_burnout is None
        # 12 tasks over 4 people * 8 capacity
        assert forecast.team_utilization == [37.5] * 12

    def test_churn_lowers_load(self, reference_snapshot, team, open_tasks):
        scenario = SimulationScenario(client_churn_rate=Decimal("10"))
        baseline, projected = self.trajectories(reference_snapshot, scenario)
        forecast = ResourceForecaster(team, open_tasks, {}).forecast(baseline, projected)

        assert all(r.utilization_trend == UtilizationTrend.DOWN for r in forecast.resources)
        assert forecast.team_utilization[0] == 45.0
        assert forecast.team_utilization == sorted(forecast.team_utilization, reverse=True)

    def test_growth_raises_load(self, reference_snapshot, team, open_tasks):
        from dataclasses import replace
        snapshot = replace(reference_snapshot, pipeline_value=Decimal("240000.00"))
        scenario = SimulationScenario(new_client_growth=Decimal("20"))
        baseline, projected = self.trajectories(snapshot, scenario)
        forecast = ResourceForecaster(team, open_tasks, {}).forecast(baseline, projected)

        sam = forecast.resources[0]
        assert sam.utilization_trend == UtilizationTrend.UP
        assert sam.months_until_burnout is not None
        assert 0 <= sam.burnout_risk <= 100

    def test_no_team_reports_zero_utilization(self, reference_snapshot):
        baseline, projected = self.trajectories(reference_snapshot, SimulationScenario())
        forecast = ResourceForecaster([], [], {}).forecast(baseline, projected)

        assert forecast.resources == []
        assert forecast.team_utilization == [0.0] * 12

    def test_tasks_for_unknown_users_are_ignored(self, reference_snapshot, team):
        baseline, projected = self.trajectories(reference_snapshot, SimulationScenario())
        tasks = tasks_for("user_sam", 2) + tasks_for("user_gone", 10) + [
            TaskRecord(id="unassigned", status="TODO"),
        ]
        forecast = ResourceForecaster(team, tasks, {}).forecast(baseline, projected)

        assert forecast.team_utilization[0] == pytest.approx(8.3)
        assert [r.user_id for r in forecast.resources] == ["user_sam"]
