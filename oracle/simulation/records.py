"""
Business record access for the simulation engine.

The agency platform owns these records; the engine only needs one coherent
read of them per request. RecordStore is the collaborator seam: the SQL
implementation reads everything through a single AsyncSession and hands back
plain detached values, so nothing downstream touches the database.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.models import (
    Bill,
    Client,
    Invoice,
    Project,
    RecurringExpense,
    RetainerAgreement,
    SystemSetting,
    Task,
    User,
)

logger = logging.getLogger(__name__)

FINANCIAL_CONFIG_KEY = "FINANCIAL_CONFIG"
OPEN_INVOICE_STATUSES = ("SENT", "PARTIAL", "OVERDUE")
COMPLETED_TASK_STATUS = "COMPLETED"


# =============================================================================
# RECORD VALUES
# =============================================================================

@dataclass(frozen=True)
class WorkerRecord:
    id: str
    name: str
    job_title: Optional[str] = None
    monthly_salary: Optional[float] = None
    hourly_rate: Optional[float] = None


@dataclass(frozen=True)
class TaskRecord:
    id: str
    status: str
    assigned_to_id: Optional[str] = None


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    status: str
    budget: Optional[float] = None


@dataclass(frozen=True)
class LeadRecord:
    id: str
    budget_allocated: Optional[float] = None


@dataclass(frozen=True)
class InvoiceRecord:
    id: str
    status: str
    balance_due: Optional[float] = None


@dataclass(frozen=True)
class BillRecord:
    id: str
    total: float = 0.0


@dataclass(frozen=True)
class RetainerRecord:
    id: str
    amount: float
    interval: str = "MONTHLY"


@dataclass(frozen=True)
class RecurringExpenseRecord:
    id: str
    amount: float
    interval: str = "MONTHLY"


@dataclass
class BusinessRecords:
    """
    Everything the engine reads, captured in one pass.

    A collection listed in `unavailable` could not be read; its list is left
    empty and any aggregate depending on it must be treated as missing.
    """
    workers: List[WorkerRecord] = field(default_factory=list)
    tasks: List[TaskRecord] = field(default_factory=list)
    projects: List[ProjectRecord] = field(default_factory=list)
    leads: List[LeadRecord] = field(default_factory=list)
    invoices: List[InvoiceRecord] = field(default_factory=list)
    bills: List[BillRecord] = field(default_factory=list)
    retainers: List[RetainerRecord] = field(default_factory=list)
    recurring_expenses: List[RecurringExpenseRecord] = field(default_factory=list)
    financial_config: Optional[Dict[str, Any]] = None
    unavailable: Dict[str, str] = field(default_factory=dict)

    def is_available(self, collection: str) -> bool:
        return collection not in self.unavailable

    @property
    def open_tasks(self) -> List[TaskRecord]:
        return [t for t in self.tasks if t.status != COMPLETED_TASK_STATUS]


# =============================================================================
# STORES
# =============================================================================

class RecordStore(ABC):
    """Read handle on the agency's current business records."""

    @abstractmethod
    async def fetch(self) -> BusinessRecords:
        """Read every collection the engine needs. Must not mutate records."""
        pass


class SQLRecordStore(RecordStore):
    """
    RecordStore backed by the platform database.

    All collections are read inside the session's one transaction. Each read
    runs in its own savepoint, so a failed query is rolled back to that
    savepoint and the remaining reads stay in the same transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch(self) -> BusinessRecords:
        records = BusinessRecords()
        loaders = [
            ("workers", self._load_workers),
            ("tasks", self._load_tasks),
            ("projects", self._load_projects),
            ("leads", self._load_leads),
            ("invoices", self._load_invoices),
            ("bills", self._load_bills),
            ("retainers", self._load_retainers),
            ("recurring_expenses", self._load_recurring_expenses),
            ("financial_config", self._load_financial_config),
        ]

        for name, loader in loaders:
            try:
                async with self.db.begin_nested():
                    value = await loader()
            except (SQLAlchemyError, ValueError) as e:
                logger.warning(f"Could not read {name} for simulation: {e}")
                records.unavailable[name] = str(e)
                continue
            setattr(records, name, value)

        return records

    async def _scalars(self, stmt) -> list:
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _load_workers(self) -> List[WorkerRecord]:
        rows = await self._scalars(select(User).where(User.role == "WORKER"))
        return [
            WorkerRecord(
                id=u.id,
                name=u.name or u.email,
                job_title=u.job_title,
                monthly_salary=u.monthly_salary,
                hourly_rate=u.hourly_rate,
            )
            for u in rows
        ]

    async def _load_tasks(self) -> List[TaskRecord]:
        rows = await self._scalars(select(Task))
        return [TaskRecord(id=t.id, status=t.status, assigned_to_id=t.assigned_to_id) for t in rows]

    async def _load_projects(self) -> List[ProjectRecord]:
        rows = await self._scalars(select(Project))
        return [ProjectRecord(id=p.id, status=p.status, budget=p.budget) for p in rows]

    async def _load_leads(self) -> List[LeadRecord]:
        rows = await self._scalars(select(Client).where(Client.status == "LEAD"))
        return [LeadRecord(id=c.id, budget_allocated=c.budget_allocated) for c in rows]

    async def _load_invoices(self) -> List[InvoiceRecord]:
        rows = await self._scalars(
            select(Invoice).where(Invoice.status.in_(OPEN_INVOICE_STATUSES))
        )
        return [InvoiceRecord(id=i.id, status=i.status, balance_due=i.balance_due) for i in rows]

    async def _load_bills(self) -> List[BillRecord]:
        rows = await self._scalars(select(Bill).where(Bill.status == "PENDING"))
        return [BillRecord(id=b.id, total=b.total or 0.0) for b in rows]

    async def _load_retainers(self) -> List[RetainerRecord]:
        rows = await self._scalars(
            select(RetainerAgreement).where(RetainerAgreement.status == "ACTIVE")
        )
        return [RetainerRecord(id=r.id, amount=r.amount, interval=r.interval) for r in rows]

    async def _load_recurring_expenses(self) -> List[RecurringExpenseRecord]:
        rows = await self._scalars(
            select(RecurringExpense).where(RecurringExpense.active.is_(True))
        )
        return [RecurringExpenseRecord(id=r.id, amount=r.amount, interval=r.interval) for r in rows]

    async def _load_financial_config(self) -> Optional[Dict[str, Any]]:
        result = await self.db.execute(
            select(SystemSetting).where(SystemSetting.key == FINANCIAL_CONFIG_KEY)
        )
        setting = result.scalar_one_or_none()
        if setting is None or setting.value is None:
            return None
        # json.JSONDecodeError is a ValueError
        config = json.loads(setting.value)
        if not isinstance(config, dict):
            raise ValueError(f"{FINANCIAL_CONFIG_KEY} is not a JSON object")
        return config
