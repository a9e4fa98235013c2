"""
Task Repository
Task CRUD with completion stamping
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from crm.errors import RecordNotFound
from crm.schemas.task import TaskCreate, TaskResponse, TaskStatus, TaskUpdate
from crm.services.enquiry_repository import EnquiryRepository
from crm.services.store_gateway import TableGateway

logger = logging.getLogger(__name__)

TABLE = "tasks"


class TaskRepository:
    """Tasks reference enquiries for lookup only; nothing cascades"""

    def __init__(self, gateway: TableGateway, enquiries: Optional[EnquiryRepository] = None):
        self.gateway = gateway
        self.enquiries = enquiries or EnquiryRepository(gateway)

    def create(self, draft: TaskCreate, now: Optional[datetime] = None) -> TaskResponse:
        data = draft.model_dump()
        if data["status"] == TaskStatus.COMPLETED:
            data["completed_at"] = now or datetime.utcnow()
        row = self.gateway.insert(TABLE, data)
        return TaskResponse.model_validate(row)

    def update(self, task_id: UUID, patch: TaskUpdate, now: Optional[datetime] = None) -> TaskResponse:
        """
        Update a task. Moving to Completed stamps completed_at; reopening clears it.
        """
        changes = patch.model_dump(exclude_unset=True)
        if changes.get("status") is not None:
            current = self.gateway.select_one(TABLE, {"id": task_id})
            if current is None:
                raise RecordNotFound(TABLE, task_id)
            new_status = TaskStatus(changes["status"])
            if new_status != TaskStatus(current["status"]):
                if new_status == TaskStatus.COMPLETED:
                    changes["completed_at"] = now or datetime.utcnow()
                else:
                    changes["completed_at"] = None

        row = self.gateway.update(TABLE, task_id, changes)
        return TaskResponse.model_validate(row)

    def delete(self, task_id: UUID) -> bool:
        return self.gateway.delete(TABLE, task_id)

    def list(self, status: Optional[TaskStatus] = None, assigned_to=None) -> List[TaskResponse]:
        """
        Tasks ordered by due date (undated last), each with its enquiry attached when it still exists
        """
        filters: Dict[str, Any] = {}
        if status is not None:
            filters["status"] = status
        if assigned_to is not None:
            filters["assigned_to"] = assigned_to

        rows = self.gateway.select(TABLE, filters, order_by="created_at", descending=True)
        rows.sort(key=lambda r: (r["due_date"] is None, r["due_date"] or date.min))

        linked = {}
        if any(row.get("enquiry_id") for row in rows):
            linked = {enquiry.id: enquiry for enquiry in self.enquiries.list()}

        tasks = []
        for row in rows:
            task = TaskResponse.model_validate(row)
            task.enquiry = linked.get(task.enquiry_id)
            tasks.append(task)
        return tasks
