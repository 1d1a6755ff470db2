from datetime import date, datetime
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..core.enums import TaskBatchSource, TaskCategory, TaskDifficulty
from ..database import Base, enum_type, generate_id


class DailyTask(Base):
    __tablename__ = "daily_tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    points: Mapped[int] = mapped_column(Integer, default=10, nullable=False)
    category: Mapped[TaskCategory] = mapped_column(
        enum_type(TaskCategory), nullable=False
    )
    difficulty: Mapped[TaskDifficulty] = mapped_column(
        enum_type(TaskDifficulty),
        default=TaskDifficulty.EASY,
        nullable=False,
    )
    ai_recommended: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # NULL owner marks a global template copied into every user's batch.
    user_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=True
    )
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, nullable=False
    )


class DailyTaskBatch(Base):
    """One row per user per calendar day on which a task batch was generated."""

    __tablename__ = "daily_task_batches"
    __table_args__ = (UniqueConstraint("user_id", "batch_date", name="daily_task_batch_unique"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    batch_date: Mapped[date] = mapped_column(Date, nullable=False)
    source: Mapped[TaskBatchSource] = mapped_column(
        enum_type(TaskBatchSource),
        default=TaskBatchSource.FALLBACK,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, nullable=False
    )
