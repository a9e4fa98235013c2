"""
Task Pydantic Schemas
Request and response models for Task endpoints
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from crm.schemas.enquiry import Assignee, EnquiryResponse


class TaskStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"


class TaskBase(BaseModel):
    """Base Task schema"""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    enquiry_id: Optional[UUID] = None
    assigned_to: Assignee
    due_date: Optional[date] = None


class TaskCreate(TaskBase):
    """Schema for creating a task"""

    status: TaskStatus = TaskStatus.PENDING


class TaskUpdate(BaseModel):
    """Schema for updating a task"""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    enquiry_id: Optional[UUID] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[Assignee] = None
    due_date: Optional[date] = None


class TaskResponse(TaskBase):
    """Schema for Task responses"""

    id: UUID
    status: TaskStatus
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    # Resolved for display, never stored
    enquiry: Optional[EnquiryResponse] = None

    class Config:
        from_attributes = True


class TaskList(BaseModel):
    """Schema for list of tasks"""

    tasks: List[TaskResponse]
    total: int
