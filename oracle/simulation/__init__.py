"""
Oracle simulation engine.

Projects a 12-month baseline and one hypothetical scenario from the agency's
current records, then scores monthly risk and per-worker burnout.
"""

from oracle.simulation.engine import (
    SimulationCoordinator,
    SimulationOutcome,
    run_simulation,
    validate_scenario,
)
from oracle.simulation.errors import AdvisorUnavailable, DataUnavailable, InvalidScenario
from oracle.simulation.records import BusinessRecords, RecordStore, SQLRecordStore
from oracle.simulation.types import (
    FinancialSnapshot,
    MarketCondition,
    SimulationScenario,
)

__all__ = [
    "SimulationCoordinator",
    "SimulationOutcome",
    "run_simulation",
    "validate_scenario",
    "AdvisorUnavailable",
    "DataUnavailable",
    "InvalidScenario",
    "BusinessRecords",
    "RecordStore",
    "SQLRecordStore",
    "FinancialSnapshot",
    "MarketCondition",
    "SimulationScenario",
]
