"""Task service"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from taskmanager.core.exceptions import NotFoundError
from taskmanager.core.messages import TaskMessages
from taskmanager.models.task import Task
from taskmanager.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# tri par importance, pas par ordre alphabétique
PRIORITY_RANK = case({"low": 0, "medium": 1, "high": 2}, value=Task.priority)

SORT_COLUMNS = {
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "dueDate": Task.due_date,
    "priority": PRIORITY_RANK,
    "title": Task.title,
}


def _owned(db: Session, user_id: int):
    return db.query(Task).filter(Task.user_id == user_id)


def create_task(db: Session, user_id: int, data: TaskCreate) -> Task:
    now = datetime.utcnow()
    task = Task(
        user_id=user_id,
        title=data.title,
        description=data.description,
        due_date=data.due_date,
        priority=data.priority,
        category=data.category,
        tags=list(data.tags),
        attachments=[a.model_dump() for a in data.attachments],
        notes=data.notes,
        created_at=now,
        updated_at=now
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def list_tasks(
    db: Session,
    user_id: int,
    is_completed: Optional[bool] = None,
    priority: Optional[str] = None,
    category: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort_by: str = "createdAt",
    sort_order: str = "desc"
) -> Tuple[List[Task], int]:
    query = _owned(db, user_id)

    if is_completed is not None:
        query = query.filter(Task.is_completed == is_completed)
    if priority:
        query = query.filter(Task.priority == priority)
    if category:
        query = query.filter(Task.category == category)

    total = query.count()

    limit = min(limit, MAX_PAGE_SIZE)
    column = SORT_COLUMNS.get(sort_by, Task.created_at)
    if sort_order == "asc":
        query = query.order_by(column.asc(), Task.id.asc())
    else:
        query = query.order_by(column.desc(), Task.id.desc())

    tasks = query.offset((page - 1) * limit).limit(limit).all()
    return tasks, total


def get_task(db: Session, user_id: int, task_id: int) -> Task:
    # la tâche d'un autre utilisateur n'existe pas pour nous
    task = _owned(db, user_id).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError(TaskMessages.NOT_FOUND)
    return task


def update_task(db: Session, user_id: int, task_id: int, data: TaskUpdate) -> Task:
    task = get_task(db, user_id, task_id)

    changes = data.changes()
    is_completed = changes.pop("is_completed", None)
    for field, value in changes.items():
        setattr(task, field, value)

    if is_completed is True:
        task.mark_completed()
    elif is_completed is False:
        task.mark_incomplete()

    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, user_id: int, task_id: int) -> None:
    task = get_task(db, user_id, task_id)
    db.delete(task)
    db.commit()


def toggle_task(db: Session, user_id: int, task_id: int) -> Task:
    task = get_task(db, user_id, task_id)

    if task.is_completed:
        task.mark_incomplete()
    else:
        task.mark_completed()

    db.commit()
    db.refresh(task)
    return task


def get_overdue_tasks(db: Session, user_id: int) -> List[Task]:
    now = datetime.utcnow()

    return _owned(db, user_id).filter(
        Task.is_completed == False,
        Task.due_date < now
    ).order_by(Task.due_date.asc()).all()


def get_upcoming_tasks(db: Session, user_id: int, days: int = 7) -> List[Task]:
    now = datetime.utcnow()
    until = now + timedelta(days=days)

    return _owned(db, user_id).filter(
        Task.is_completed == False,
        Task.due_date >= now,
        Task.due_date <= until
    ).order_by(Task.due_date.asc()).all()


def completion_rate(completed: int, total: int) -> float:
    if total == 0:
        return 0
    return round(completed / total * 100, 1)


def count_by_state(db: Session, user_id: int) -> dict:
    """total / completed / pending / overdue pour un utilisateur"""
    now = datetime.utcnow()
    query = _owned(db, user_id)

    total = query.count()
    completed = query.filter(Task.is_completed == True).count()
    overdue = query.filter(Task.is_completed == False, Task.due_date < now).count()

    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
        "overdue": overdue,
    }


def get_task_stats(db: Session, user_id: int) -> dict:
    counts = count_by_state(db, user_id)

    by_priority = db.query(Task.priority, func.count(Task.id)).filter(
        Task.user_id == user_id
    ).group_by(Task.priority).all()

    by_category = db.query(Task.category, func.count(Task.id)).filter(
        Task.user_id == user_id,
        Task.category.isnot(None),
        Task.category != ""
    ).group_by(Task.category).all()

    return {
        "stats": {
            **counts,
            "completionRate": completion_rate(counts["completed"], counts["total"]),
        },
        "priorityStats": [{"priority": p, "count": c} for p, c in by_priority],
        "categoryStats": [{"category": cat, "count": c} for cat, c in by_category],
    }


def bulk_update_tasks(db: Session, user_id: int, task_ids: List[int], updates: TaskUpdate) -> int:
    changes = updates.changes()
    if "is_completed" in changes:
        changes["completed_at"] = datetime.utcnow() if changes["is_completed"] else None

    if not changes:
        return 0

    count = _owned(db, user_id).filter(Task.id.in_(task_ids)).update(
        changes, synchronize_session=False
    )
    db.commit()
    logger.info("User %s bulk-updated %s tasks", user_id, count)
    return count


def bulk_delete_tasks(db: Session, user_id: int, task_ids: List[int]) -> int:
    count = _owned(db, user_id).filter(Task.id.in_(task_ids)).delete(synchronize_session=False)
    db.commit()
    logger.info("User %s bulk-deleted %s tasks", user_id, count)
    return count
