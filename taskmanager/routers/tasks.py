import math
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskmanager.core import responses
from taskmanager.core.database import get_db
from taskmanager.core.deps import get_current_user
from taskmanager.core.messages import TaskMessages
from taskmanager.models.user import User
from taskmanager.schemas.task import (
    BulkDeleteRequest,
    BulkUpdateRequest,
    Priority,
    TaskCreate,
    TaskUpdate,
    serialize_task,
    serialize_tasks,
)
from taskmanager.services import task_service

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

SortField = Literal["createdAt", "updatedAt", "dueDate", "priority", "title"]


@router.post("", status_code=201)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = task_service.create_task(db, current_user.id, task_data)
    return responses.created(TaskMessages.CREATED, {"task": serialize_task(task)})


@router.get("")
def list_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    page: int = Query(1, ge=1),
    limit: int = Query(task_service.DEFAULT_PAGE_SIZE, ge=1, le=task_service.MAX_PAGE_SIZE),
    is_completed: Optional[bool] = Query(None, alias="isCompleted"),
    priority: Optional[Priority] = Query(None),
    category: Optional[str] = Query(None),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder")
):
    tasks, total = task_service.list_tasks(
        db,
        current_user.id,
        is_completed=is_completed,
        priority=priority,
        category=category,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order
    )
    return responses.success(TaskMessages.LISTED, {
        "tasks": serialize_tasks(tasks),
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit)
        }
    })


# Les routes fixes avant /{task_id}

@router.get("/overdue")
def overdue(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    tasks = task_service.get_overdue_tasks(db, current_user.id)
    return responses.success(TaskMessages.OVERDUE, {"tasks": serialize_tasks(tasks)})


@router.get("/upcoming")
def upcoming(
    days: int = Query(7, ge=1, le=365),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    tasks = task_service.get_upcoming_tasks(db, current_user.id, days)
    return responses.success(TaskMessages.UPCOMING, {"tasks": serialize_tasks(tasks)})


@router.get("/stats")
def stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return responses.success(TaskMessages.STATS, task_service.get_task_stats(db, current_user.id))


@router.put("/bulk/update")
def bulk_update(
    payload: BulkUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    count = task_service.bulk_update_tasks(db, current_user.id, payload.task_ids, payload.updates)
    return responses.success(TaskMessages.BULK_UPDATED.format(count), {"modifiedCount": count})


@router.delete("/bulk/delete")
def bulk_delete(
    payload: BulkDeleteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    count = task_service.bulk_delete_tasks(db, current_user.id, payload.task_ids)
    return responses.success(TaskMessages.BULK_DELETED.format(count), {"deletedCount": count})


@router.get("/{task_id}")
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = task_service.get_task(db, current_user.id, task_id)
    return responses.success(TaskMessages.RETRIEVED, {"task": serialize_task(task)})


@router.put("/{task_id}")
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = task_service.update_task(db, current_user.id, task_id, task_data)
    return responses.success(TaskMessages.UPDATED, {"task": serialize_task(task)})


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task_service.delete_task(db, current_user.id, task_id)
    return responses.success(TaskMessages.DELETED)


@router.patch("/{task_id}/toggle")
def toggle_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = task_service.toggle_task(db, current_user.id, task_id)
    return responses.success(TaskMessages.TOGGLED, {"task": serialize_task(task)})
