"""
Task Model
Follow-up work item, optionally linked to an enquiry
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, Date, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, String, Text, Uuid

from crm.database import Base
from crm.models.enquiry import Assignee


class TaskStatus(str, enum.Enum):
    """Status of task"""

    PENDING = "Pending"
    COMPLETED = "Completed"


class Task(Base):
    """
    Task Model
    The enquiry link is a lookup reference only; deleting either side never cascades
    """

    __tablename__ = "tasks"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    title = Column(String(255), nullable=False)
    description = Column(Text)

    enquiry_id = Column(Uuid(as_uuid=True), ForeignKey("enquiries.id"), index=True)

    status = Column(
        SQLEnum(TaskStatus, values_callable=lambda x: [e.value for e in x]),
        default=TaskStatus.PENDING,
        nullable=False,
        index=True,
    )
    assigned_to = Column(
        SQLEnum(Assignee, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    due_date = Column(Date)
    completed_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Task(title='{self.title}', status='{self.status}')>"
