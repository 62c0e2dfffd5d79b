"""Shared test fixtures and configuration for Oracle tests."""
import pytest
from datetime import date
from decimal import Decimal

from oracle.simulation.records import (
    BusinessRecords,
    RecordStore,
    RecurringExpenseRecord,
    RetainerRecord,
    TaskRecord,
    WorkerRecord,
)
from oracle.simulation.types import FinancialSnapshot, SimulationScenario


class FakeRecordStore(RecordStore):
    """In-memory record store counting how often it is read."""

    def __init__(self, records: BusinessRecords):
        self.records = records
        self.fetch_count = 0

    async def fetch(self) -> BusinessRecords:
        self.fetch_count += 1
        return self.records


@pytest.fixture
def as_of():
    """Fixed as-of date so month labels are stable."""
    return date(2026, 1, 15)


@pytest.fixture
def reference_snapshot():
    """Cash 100k, retainers 20k, recurring costs 15k, payroll 10k."""
    return FinancialSnapshot(
        starting_cash=Decimal("100000.00"),
        monthly_retainers=Decimal("20000.00"),
        monthly_recurring_costs=Decimal("15000.00"),
        monthly_payroll=Decimal("10000.00"),
        outstanding_ar=Decimal("0.00"),
        outstanding_ap=Decimal("0.00"),
        pipeline_value=Decimal("0.00"),
    )


@pytest.fixture
def reference_records():
    """Records that sum to the reference snapshot, one worker at 75% load."""
    return BusinessRecords(
        workers=[
            WorkerRecord(id="user_ana", name="Ana", job_title="Designer", monthly_salary=10000),
        ],
        tasks=[TaskRecord(id=f"task_{i}", status="IN_PROGRESS", assigned_to_id="user_ana") for i in range(6)]
        + [TaskRecord(id="task_done", status="COMPLETED", assigned_to_id="user_ana")],
        retainers=[RetainerRecord(id="ret_1", amount=20000)],
        recurring_expenses=[RecurringExpenseRecord(id="rexp_1", amount=15000)],
        financial_config={"cashOnHand": 100000},
    )


@pytest.fixture
def record_store(reference_records):
    return FakeRecordStore(reference_records)


@pytest.fixture
def neutral_scenario():
    return SimulationScenario()


@pytest.fixture
def store_factory():
    """Build a FakeRecordStore around arbitrary records."""
    return FakeRecordStore
