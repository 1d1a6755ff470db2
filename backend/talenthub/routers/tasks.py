from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user
from ..models.task import DailyTask
from ..models.user import User
from ..schemas.achievement import UserAchievementRead
from ..schemas.task import DailyTaskRead, TaskCompletionRead
from ..services.ai import AIClient, get_ai_client
from ..services.tasks import complete_task, get_daily_tasks

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/daily", response_model=list[DailyTaskRead])
def daily_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client),
) -> list[DailyTask]:
    return get_daily_tasks(db, current_user, ai_client)


@router.patch("/{task_id}/complete", response_model=TaskCompletionRead)
def complete(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskCompletionRead:
    task, award, unlocked = complete_task(db, task_id, current_user)
    return TaskCompletionRead(
        **DailyTaskRead.model_validate(task).model_dump(),
        points_awarded=award.delta,
        new_total=award.new_total,
        badge=award.badge,
        badge_changed=award.badge_changed,
        unlocked_achievements=[UserAchievementRead.model_validate(u) for u in unlocked],
    )
