"""
Consolidated models package.

IMPORTANT: Explicit imports only - no wildcards to prevent circular imports.
Use string-based forward references in relationships: relationship("Task", ...)
"""

# User model
from oracle.models.user import User

# Agency records
from oracle.models.agency import (
    Client,
    Project,
    Task,
    Invoice,
    Bill,
    RetainerAgreement,
    RecurringExpense,
    SystemSetting,
)


__all__ = [
    # User
    "User",
    # Agency records
    "Client",
    "Project",
    "Task",
    "Invoice",
    "Bill",
    "RetainerAgreement",
    "RecurringExpense",
    "SystemSetting",
]
