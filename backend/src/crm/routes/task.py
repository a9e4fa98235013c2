"""
Task API Routes
Endpoints for follow-up tasks
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from crm.dependencies.repositories import get_task_repository
from crm.schemas.enquiry import Assignee
from crm.schemas.task import TaskCreate, TaskList, TaskResponse, TaskStatus, TaskUpdate
from crm.services.task_repository import TaskRepository

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("/", response_model=TaskList)
def list_tasks(
    status: Optional[TaskStatus] = None,
    assigned_to: Optional[Assignee] = None,
    tasks: TaskRepository = Depends(get_task_repository),
):
    """List tasks by due date, with their enquiries attached"""
    items = tasks.list(status=status, assigned_to=assigned_to)
    return {"tasks": items, "total": len(items)}


@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, tasks: TaskRepository = Depends(get_task_repository)):
    """Create a task"""
    return tasks.create(task_data)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: UUID,
    task_data: TaskUpdate,
    tasks: TaskRepository = Depends(get_task_repository),
):
    """Update a task; completing or reopening maintains completed_at"""
    return tasks.update(task_id, task_data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: UUID, tasks: TaskRepository = Depends(get_task_repository)):
    """Delete a task"""
    tasks.delete(task_id)
