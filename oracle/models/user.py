"""User model - staff members and administrators of the agency."""
from sqlalchemy import Column, String, DateTime, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from oracle.database import Base


class User(Base):
    """
    User model.

    Owned by the agency platform; the Oracle only reads it. Users with
    role "WORKER" make up the staffing list for payroll and burnout forecasts.
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    role = Column(String, nullable=False, default="WORKER")  # "WORKER" | "ADMIN" | "SUPER_ADMIN" | "CLIENT"

    # Staffing
    job_title = Column(String, nullable=True)  # e.g. "Senior Designer" - matched against hiring tiers
    monthly_salary = Column(Float, nullable=True)
    hourly_rate = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    assigned_tasks = relationship("Task", back_populates="assigned_to")
