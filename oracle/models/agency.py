"""Agency business records consumed by the simulation engine.

These tables belong to the record-management side of the platform
(CRM, finance, projects). The Oracle never writes to them.
"""
from sqlalchemy import Column, String, DateTime, Float, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from oracle.database import Base


class Client(Base):
    """Client or lead. Leads carry an allocated budget that forms the pipeline."""

    __tablename__ = "clients"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="LEAD")  # "LEAD" | "ACTIVE" | "INACTIVE"
    budget_allocated = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Project(Base):
    """Client project."""

    __tablename__ = "projects"

    id = Column(String, primary_key=True)
    client_id = Column(String, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="PLANNING")  # "PLANNING" | "ACTIVE" | "ON_HOLD" | "COMPLETED"
    budget = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    tasks = relationship("Task", back_populates="project")


class Task(Base):
    """Unit of assigned work. Open tasks drive the workload model."""

    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)
    assigned_to_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String, nullable=False)
    status = Column(String, nullable=False, default="TODO")  # "TODO" | "IN_PROGRESS" | "REVIEW" | "COMPLETED"
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    project = relationship("Project", back_populates="tasks")
    assigned_to = relationship("User", back_populates="assigned_tasks")


class Invoice(Base):
    """Outgoing invoice (accounts receivable)."""

    __tablename__ = "invoices"

    id = Column(String, primary_key=True)
    client_id = Column(String, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String, nullable=False, default="DRAFT")  # "DRAFT" | "SENT" | "PARTIAL" | "OVERDUE" | "PAID"
    total = Column(Float, nullable=False, default=0)
    balance_due = Column(Float, nullable=True)


class Bill(Base):
    """Incoming bill (accounts payable)."""

    __tablename__ = "bills"

    id = Column(String, primary_key=True)
    vendor_name = Column(String, nullable=True)
    status = Column(String, nullable=False, default="PENDING")  # "PENDING" | "PAID"
    total = Column(Float, nullable=False, default=0)


class RetainerAgreement(Base):
    """Recurring client retainer."""

    __tablename__ = "retainer_agreements"

    id = Column(String, primary_key=True)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=True, index=True)
    status = Column(String, nullable=False, default="ACTIVE")  # "ACTIVE" | "PAUSED" | "CANCELLED"
    amount = Column(Float, nullable=False)
    interval = Column(String, nullable=False, default="MONTHLY")  # "MONTHLY" | "QUARTERLY" | "YEARLY"


class RecurringExpense(Base):
    """Recurring non-payroll cost (rent, software, contractors)."""

    __tablename__ = "recurring_expenses"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    amount = Column(Float, nullable=False)
    interval = Column(String, nullable=False, default="MONTHLY")  # "WEEKLY" | "MONTHLY" | "QUARTERLY" | "YEARLY"


class SystemSetting(Base):
    """Key/value platform settings. FINANCIAL_CONFIG holds a JSON document."""

    __tablename__ = "system_settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
