"""
Database Models Package
Exports all SQLAlchemy models
"""

from crm.models.customer import Customer
from crm.models.enquiry import Assignee, Enquiry, PersistedStatus, Segment
from crm.models.task import Task, TaskStatus

__all__ = [
    "Customer",
    "Enquiry",
    "Task",
    "PersistedStatus",
    "Segment",
    "Assignee",
    "TaskStatus",
]
