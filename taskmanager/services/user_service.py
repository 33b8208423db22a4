"""User service - statistiques, activité, suppression de compte"""

import logging
from datetime import datetime, timedelta
from typing import List

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from taskmanager.core.exceptions import AuthenticationError
from taskmanager.core.messages import UserMessages
from taskmanager.models.task import Task
from taskmanager.models.user import User
from taskmanager.services.task_service import completion_rate, count_by_state

logger = logging.getLogger(__name__)

RECENT_DAYS = 30
DAILY_STATS_DAYS = 7
ACTIVITY_LIMIT = 50


def get_user_stats(db: Session, user_id: int) -> dict:
    now = datetime.utcnow()
    counts = count_by_state(db, user_id)

    recent = db.query(Task).filter(
        Task.user_id == user_id,
        Task.created_at >= now - timedelta(days=RECENT_DAYS)
    ).count()

    # tâches créées / complétées par jour de création
    day = func.date(Task.created_at)
    rows = db.query(
        day,
        func.count(Task.id),
        func.sum(case((Task.is_completed == True, 1), else_=0))
    ).filter(
        Task.user_id == user_id,
        Task.created_at >= now - timedelta(days=DAILY_STATS_DAYS)
    ).group_by(day).order_by(day).all()

    return {
        "stats": {
            "totalTasks": counts["total"],
            "completedTasks": counts["completed"],
            "pendingTasks": counts["pending"],
            "overdueTasks": counts["overdue"],
            "recentTasks": recent,
            "completionRate": completion_rate(counts["completed"], counts["total"]),
        },
        "dailyStats": [
            {"date": str(date), "created": created, "completed": int(completed or 0)}
            for date, created, completed in rows
        ],
    }


def get_user_activity(db: Session, user_id: int, days: int = 30) -> List[dict]:
    """
    Dernières créations / modifications de tâches dans la fenêtre.

    updated_at >= created_at, donc la date de l'événement est updated_at.
    """
    start = datetime.utcnow() - timedelta(days=days)

    tasks = db.query(Task).filter(
        Task.user_id == user_id,
        or_(Task.created_at >= start, Task.updated_at >= start)
    ).order_by(Task.updated_at.desc(), Task.id.desc()).limit(ACTIVITY_LIMIT).all()

    return [
        {
            "id": task.id,
            "title": task.title,
            "action": "created" if task.created_at == task.updated_at else "updated",
            "date": max(task.created_at, task.updated_at).isoformat(),
        }
        for task in tasks
    ]


def delete_account(db: Session, user: User, password: str) -> None:
    if not user.verify_password(password):
        raise AuthenticationError(UserMessages.PASSWORD_INCORRECT)

    user_id = user.id
    # tâches puis utilisateur, dans une seule transaction
    try:
        db.query(Task).filter(Task.user_id == user_id).delete(synchronize_session=False)
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Account deletion failed for user %s", user_id)
        raise

    logger.info("User %s deleted their account", user_id)
