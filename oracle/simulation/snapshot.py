"""
Financial Snapshot Builder.

Sums the business records into the current-state facts the projectors
start from. Pure read: summation and interval normalization only.
"""

from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, List, Tuple

from oracle.simulation.errors import DataUnavailable
from oracle.simulation.records import BusinessRecords
from oracle.simulation.types import FinancialSnapshot, to_money


DEFAULT_CASH_ON_HAND = Decimal("50000")
HOURS_PER_MONTH = Decimal("160")

# Monthly equivalents per billing interval
RETAINER_INTERVAL_FACTORS = {
    "MONTHLY": Decimal("1"),
    "QUARTERLY": Decimal("1") / Decimal("3"),
    "YEARLY": Decimal("1") / Decimal("12"),
}

EXPENSE_INTERVAL_FACTORS = {
    "WEEKLY": Decimal("4"),
    "MONTHLY": Decimal("1"),
    "QUARTERLY": Decimal("1") / Decimal("3"),
    "YEARLY": Decimal("1") / Decimal("12"),
}


def _dec(value) -> Decimal:
    return Decimal(str(value or 0))


class FinancialSnapshotBuilder:
    """
    Builds a FinancialSnapshot from one BusinessRecords read.

    Each aggregate has its own method so a caller can tell exactly which
    figure is missing when a collection could not be read.
    """

    def __init__(self, records: BusinessRecords):
        self.records = records

    def _require(self, field: str, *collections: str) -> None:
        for collection in collections:
            if not self.records.is_available(collection):
                raise DataUnavailable(field, self.records.unavailable[collection])

    def aggregates(self) -> List[Tuple[str, Callable[[], Decimal]]]:
        """Snapshot field names paired with the method computing each."""
        return [
            ("starting_cash", self.starting_cash),
            ("monthly_retainers", self.monthly_retainers),
            ("monthly_recurring_costs", self.monthly_recurring_costs),
            ("monthly_payroll", self.monthly_payroll),
            ("outstanding_ar", self.outstanding_ar),
            ("outstanding_ap", self.outstanding_ap),
            ("pipeline_value", self.pipeline_value),
        ]

    def starting_cash(self) -> Decimal:
        self._require("starting_cash", "financial_config")
        config = self.records.financial_config or {}
        if not isinstance(config, dict):
            raise DataUnavailable("starting_cash", "financial config is not an object")

        cash = config.get("cashOnHand")
        if cash is None:
            return to_money(DEFAULT_CASH_ON_HAND)
        try:
            amount = None if isinstance(cash, bool) else Decimal(str(cash))
        except InvalidOperation:
            amount = None
        if amount is None or not amount.is_finite():
            raise DataUnavailable("starting_cash", f"cashOnHand is not a number: {cash!r}")
        return to_money(amount)

    def monthly_retainers(self) -> Decimal:
        self._require("monthly_retainers", "retainers")
        total = sum(
            (_dec(r.amount) * RETAINER_INTERVAL_FACTORS.get(r.interval, Decimal("1"))
             for r in self.records.retainers),
            Decimal("0"),
        )
        return to_money(total)

    def monthly_recurring_costs(self) -> Decimal:
        self._require("monthly_recurring_costs", "recurring_expenses")
        total = sum(
            (_dec(e.amount) * EXPENSE_INTERVAL_FACTORS.get(e.interval, Decimal("1"))
             for e in self.records.recurring_expenses),
            Decimal("0"),
        )
        return to_money(total)

    def monthly_payroll(self) -> Decimal:
        """Salaried staff at their salary; hourly-only staff at 160 hours a month."""
        self._require("monthly_payroll", "workers")
        fixed = sum((_dec(w.monthly_salary) for w in self.records.workers), Decimal("0"))
        hourly = sum(
            (_dec(w.hourly_rate) * HOURS_PER_MONTH
             for w in self.records.workers
             if not w.monthly_salary and w.hourly_rate),
            Decimal("0"),
        )
        return to_money(fixed + hourly)

    def outstanding_ar(self) -> Decimal:
        self._require("outstanding_ar", "invoices")
        return to_money(sum((_dec(i.balance_due) for i in self.records.invoices), Decimal("0")))

    def outstanding_ap(self) -> Decimal:
        self._require("outstanding_ap", "bills")
        return to_money(sum((_dec(b.total) for b in self.records.bills), Decimal("0")))

    def pipeline_value(self) -> Decimal:
        self._require("pipeline_value", "leads")
        return to_money(sum((_dec(c.budget_allocated) for c in self.records.leads), Decimal("0")))

    def build(self) -> FinancialSnapshot:
        """Build the full snapshot. Raises DataUnavailable on the first missing aggregate."""
        values: Dict[str, Decimal] = {name: compute() for name, compute in self.aggregates()}
        return FinancialSnapshot(**values)
