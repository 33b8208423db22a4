"""Task model"""

import math
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, JSON, Index
from taskmanager.core.database import Base

PRIORITIES = ("low", "medium", "high")


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_created", "user_id", "created_at"),
        Index("ix_tasks_user_completed", "user_id", "is_completed"),
        Index("ix_tasks_user_due", "user_id", "due_date"),
        Index("ix_tasks_user_priority", "user_id", "priority"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    due_date = Column(DateTime, nullable=False)
    priority = Column(String, default="medium", nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    category = Column(String(50), nullable=True)

    tags = Column(JSON, default=list)
    attachments = Column(JSON, default=list)
    notes = Column(String(1000), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def mark_completed(self, now: datetime = None):
        self.is_completed = True
        self.completed_at = now or datetime.utcnow()

    def mark_incomplete(self):
        self.is_completed = False
        self.completed_at = None

    @property
    def status(self) -> str:
        return task_status(self)

    @property
    def days_until_due(self) -> int:
        return days_until_due(self)


# ============ CHAMPS VIRTUELS ============

def task_status(task, now: datetime = None) -> str:
    """completed > overdue > pending, jamais stocké"""
    if task.is_completed:
        return "completed"
    now = now or datetime.utcnow()
    if now > task.due_date:
        return "overdue"
    return "pending"


def days_until_due(task, now: datetime = None) -> int:
    now = now or datetime.utcnow()
    delta = task.due_date - now
    return math.ceil(delta.total_seconds() / 86400)
