"""
Daily task lifecycle.

Tasks move ``pending -> completed`` exactly once. A batch of tasks is
generated at most once per user per calendar day: generation runs under a
per-user lock in this process and is keyed by a ``DailyTaskBatch`` row whose
(user, date) unique constraint rejects a second batch from any other process.

Global templates (tasks without an owner) are never completed directly: each
batch copies the templates that are still current into the user's own tasks.
A template added after a user's batch reaches them with the next day's batch.
"""
import logging
import threading
import weakref
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.enums import TaskBatchSource, UserRole
from ..core.exceptions import DependencyUnavailableError, ForbiddenError, NotFoundError
from ..models.achievement import UserAchievement
from ..models.performance import PerformanceRecord
from ..models.task import DailyTask, DailyTaskBatch
from ..models.user import User
from ..schemas.ai import Recommendation
from ..schemas.user import SkillMetrics
from .ai import FALLBACK_RECOMMENDATIONS, AIClient
from .points import apply_award
from .scoring import NO_AWARD, AwardResult, award_points, score_task_completion

logger = logging.getLogger(__name__)


class _UserLock:
    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info):
        self._lock.release()


# entries live only while some request holds them
_user_locks: "weakref.WeakValueDictionary[str, _UserLock]" = weakref.WeakValueDictionary()
_registry_lock = threading.Lock()


def _lock_for(user_id: str) -> _UserLock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _UserLock()
            _user_locks[user_id] = lock
        return lock


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _current_tasks(db: Session, user_id: str, today: date) -> list[DailyTask]:
    return (
        db.query(DailyTask)
        .filter(
            DailyTask.user_id == user_id,
            DailyTask.due_date >= _start_of_day(today),
        )
        .order_by(DailyTask.due_date.asc(), DailyTask.created_at.asc())
        .all()
    )


def needs_new_batch(tasks: list[DailyTask], user_id: str, today: date) -> bool:
    own = [task for task in tasks if task.user_id == user_id]
    if not own:
        return True
    newest = max(task.created_at for task in own)
    return newest.date() != today


def _task_from_recommendation(
    recommendation: Recommendation, user_id: str, due_date: datetime, ai_recommended: bool
) -> DailyTask:
    return DailyTask(
        title=recommendation.title,
        description=recommendation.description,
        points=recommendation.points,
        category=recommendation.category,
        difficulty=recommendation.difficulty,
        ai_recommended=ai_recommended,
        user_id=user_id,
        due_date=due_date,
    )


def _current_templates(db: Session, today: date) -> list[DailyTask]:
    return (
        db.query(DailyTask)
        .filter(DailyTask.user_id.is_(None), DailyTask.due_date >= _start_of_day(today))
        .order_by(DailyTask.due_date.asc(), DailyTask.created_at.asc())
        .all()
    )


def _copy_template(template: DailyTask, user_id: str) -> DailyTask:
    return DailyTask(
        title=template.title,
        description=template.description,
        points=template.points,
        category=template.category,
        difficulty=template.difficulty,
        ai_recommended=template.ai_recommended,
        user_id=user_id,
        due_date=template.due_date,
    )


def _recent_history(db: Session, user_id: str, limit: int = 5) -> list[dict]:
    records = (
        db.query(PerformanceRecord)
        .filter(PerformanceRecord.user_id == user_id)
        .order_by(PerformanceRecord.recorded_at.desc())
        .limit(limit)
        .all()
    )
    return [{"recorded_at": r.recorded_at.isoformat(), "metrics": r.metrics} for r in records]


def _request_recommendations(db: Session, user: User, ai_client: AIClient) -> list[Recommendation]:
    """Ask the AI generator for today's tasks. Returns an empty list when it is unavailable."""
    if not ai_client.enabled:
        return []
    try:
        return ai_client.generate_task_recommendations(
            sport=user.sport or "General",
            metrics=SkillMetrics.model_validate(user.metrics or {}),
            skill_level=user.skill_level or "beginner",
            history=_recent_history(db, user.id),
        )
    except DependencyUnavailableError:
        logger.warning("AI task generation failed for user %s, using fallback tasks", user.id)
        return []


def _generate_batch(db: Session, user: User, ai_client: AIClient, today: date, now: datetime) -> bool:
    """Create today's batch. Returns False when another request already created it."""
    # The AI call happens before any write so a timeout leaves nothing behind.
    recommendations = _request_recommendations(db, user, ai_client)

    batch = DailyTaskBatch(
        user_id=user.id,
        batch_date=today,
        source=TaskBatchSource.AI if recommendations else TaskBatchSource.FALLBACK,
    )
    db.add(batch)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.info("Daily batch for user %s on %s already exists", user.id, today)
        return False

    tomorrow = _start_of_day(today + timedelta(days=1))
    db.add_all(
        [_task_from_recommendation(rec, user.id, tomorrow, ai_recommended=True) for rec in recommendations]
    )
    db.add_all([_copy_template(template, user.id) for template in _current_templates(db, today)])
    db.flush()

    if not _current_tasks(db, user.id, today):
        due = now + timedelta(days=1)
        db.add_all(
            [
                _task_from_recommendation(rec, user.id, due, ai_recommended=False)
                for rec in FALLBACK_RECOMMENDATIONS
            ]
        )
    db.commit()
    logger.info(
        "Generated %s daily batch for user %s (%s AI tasks)",
        batch.source.value,
        user.id,
        len(recommendations),
    )
    return True


def get_daily_tasks(
    db: Session, user: User, ai_client: AIClient, now: Optional[datetime] = None
) -> list[DailyTask]:
    now = now or datetime.utcnow()
    today = now.date()
    tasks = _current_tasks(db, user.id, today)
    if not needs_new_batch(tasks, user.id, today):
        return tasks

    with _lock_for(user.id):
        already_generated = (
            db.query(DailyTaskBatch.id)
            .filter(DailyTaskBatch.user_id == user.id, DailyTaskBatch.batch_date == today)
            .first()
        )
        if already_generated is None:
            _generate_batch(db, user, ai_client, today, now)
    return _current_tasks(db, user.id, today)


def complete_task(
    db: Session, task_id: str, user: User
) -> tuple[DailyTask, AwardResult, list[UserAchievement]]:
    """Complete a task and credit its points. Completing it again awards nothing."""
    task = db.get(DailyTask, task_id)
    if not task:
        raise NotFoundError("Task", task_id)
    if task.user_id is None:
        raise ForbiddenError("Templates are completed through your daily tasks.")
    if task.user_id != user.id and user.role != UserRole.ADMIN:
        raise ForbiddenError("Not your task.")
    owner_id = task.user_id

    if task.completed:
        return task, award_points(_points_of(db, owner_id), NO_AWARD), []

    completed_at = datetime.utcnow()
    transitioned = db.execute(
        update(DailyTask)
        .where(DailyTask.id == task_id, DailyTask.completed.is_(False))
        .values(completed=True, completed_at=completed_at)
        .execution_options(synchronize_session=False)
    ).rowcount
    if transitioned != 1:
        # lost the race: someone else completed it in between
        db.rollback()
        db.refresh(task)
        return task, award_points(_points_of(db, owner_id), NO_AWARD), []

    result, unlocked = apply_award(db, owner_id, score_task_completion(task.points))
    db.commit()
    db.refresh(task)
    logger.info("User %s completed task %s for %s points", owner_id, task_id, result.delta)
    return task, result, unlocked


def _points_of(db: Session, user_id: str) -> int:
    owner = db.get(User, user_id)
    if owner is None:
        raise NotFoundError("User", user_id)
    return owner.points
