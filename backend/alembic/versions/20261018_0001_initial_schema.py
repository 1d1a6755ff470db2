"""initial schema

Revision ID: 20261018_0001
Revises: 
Create Date: 2026-10-18 00:00:00
"""

import uuid
from datetime import datetime
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261018_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_ACHIEVEMENTS = (
    ("First Steps", "Added your first talent", "trophy", 10, None),
    ("Bronze Athlete", "Reached 50 points", "medal", 50, "Bronze"),
    ("Silver Athlete", "Reached 100 points", "medal", 100, "Silver"),
    ("Gold Athlete", "Reached 200 points", "medal", 200, "Gold"),
    ("Platinum Athlete", "Reached 500 points", "crown", 500, "Platinum"),
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("external_id", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("display_name", sa.String(length=150), nullable=False),
        sa.Column("photo_url", sa.String(length=500), nullable=True),
        sa.Column("role", sa.String(length=7), nullable=False),
        sa.Column("sport", sa.String(length=80), nullable=True),
        sa.Column("skill_level", sa.String(length=40), nullable=True),
        sa.Column("location", sa.String(length=120), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("badge", sa.String(length=8), nullable=False, server_default="Bronze"),
        sa.Column("metrics", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_external_id", "users", ["external_id"], unique=True)
    op.create_index("ix_users_sport", "users", ["sport"], unique=False)

    op.create_table(
        "coach_athletes",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("coach_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("athlete_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("coach_id", "athlete_id", name="coach_athlete_unique"),
    )

    op.create_table(
        "talents",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("sport", sa.String(length=80), nullable=False),
        sa.Column("category", sa.String(length=80), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("approved_by", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("points_awarded", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_talents_user_id", "talents", ["user_id"], unique=False)

    op.create_table(
        "daily_tasks",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=9), nullable=False),
        sa.Column("difficulty", sa.String(length=6), nullable=False),
        sa.Column("ai_recommended", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_daily_tasks_user_id", "daily_tasks", ["user_id"], unique=False)

    op.create_table(
        "daily_task_batches",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("batch_date", sa.Date(), nullable=False),
        sa.Column("source", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "batch_date", name="daily_task_batch_unique"),
    )

    achievements = op.create_table(
        "achievements",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(length=40), nullable=False),
        sa.Column("points_required", sa.Integer(), nullable=False),
        sa.Column("badge", sa.String(length=8), nullable=True),
        sa.Column("type", sa.String(length=11), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "user_achievements",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "achievement_id",
            sa.String(length=36),
            sa.ForeignKey("achievements.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("points_earned", sa.Integer(), nullable=False),
        sa.Column("unlocked_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "achievement_id", name="user_achievement_unique"),
    )
    op.create_index("ix_user_achievements_user_id", "user_achievements", ["user_id"], unique=False)

    op.create_table(
        "performance_records",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sport", sa.String(length=80), nullable=False),
        sa.Column("metrics", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("recorded_by", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_performance_records_user_id", "performance_records", ["user_id"], unique=False)

    op.create_table(
        "injury_alerts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("athlete_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("coach_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("risk_level", sa.String(length=8), nullable=False),
        sa.Column("body_part", sa.String(length=80), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("recommendations", sa.Text(), nullable=True),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_injury_alerts_athlete_id", "injury_alerts", ["athlete_id"], unique=False)
    op.create_index("ix_injury_alerts_coach_id", "injury_alerts", ["coach_id"], unique=False)

    now = datetime.utcnow()
    op.bulk_insert(
        achievements,
        [
            {
                "id": str(uuid.uuid4()),
                "name": name,
                "description": description,
                "icon": icon,
                "points_required": points_required,
                "badge": badge,
                "type": "milestone",
                "created_at": now,
            }
            for name, description, icon, points_required, badge in DEFAULT_ACHIEVEMENTS
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_injury_alerts_coach_id", table_name="injury_alerts")
    op.drop_index("ix_injury_alerts_athlete_id", table_name="injury_alerts")
    op.drop_table("injury_alerts")
    op.drop_index("ix_performance_records_user_id", table_name="performance_records")
    op.drop_table("performance_records")
    op.drop_index("ix_user_achievements_user_id", table_name="user_achievements")
    op.drop_table("user_achievements")
    op.drop_table("achievements")
    op.drop_table("daily_task_batches")
    op.drop_index("ix_daily_tasks_user_id", table_name="daily_tasks")
    op.drop_table("daily_tasks")
    op.drop_index("ix_talents_user_id", table_name="talents")
    op.drop_table("talents")
    op.drop_table("coach_athletes")
    op.drop_index("ix_users_sport", table_name="users")
    op.drop_index("ix_users_external_id", table_name="users")
    op.drop_table("users")
