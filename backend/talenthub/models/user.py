from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.enums import BadgeTier, UserRole
from ..database import Base, enum_type, generate_id

DEFAULT_METRICS = {"speed": 5.0, "strength": 5.0, "stamina": 5.0, "technique": 5.0}


def _default_metrics() -> dict:
    return dict(DEFAULT_METRICS)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    external_id: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    display_name: Mapped[str] = mapped_column(String(150), nullable=False)
    photo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        enum_type(UserRole),
        default=UserRole.ATHLETE,
        nullable=False,
    )
    sport: Mapped[Optional[str]] = mapped_column(String(80), nullable=True, index=True)
    skill_level: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    badge: Mapped[BadgeTier] = mapped_column(
        enum_type(BadgeTier),
        default=BadgeTier.BRONZE,
        nullable=False,
    )
    metrics: Mapped[dict] = mapped_column(JSON, default=_default_metrics, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, nullable=False
    )

    coached_links: Mapped[list["CoachAthlete"]] = relationship(
        back_populates="coach", foreign_keys="CoachAthlete.coach_id"
    )
    assigned_coaches: Mapped[list["CoachAthlete"]] = relationship(
        back_populates="athlete", foreign_keys="CoachAthlete.athlete_id"
    )


class CoachAthlete(Base):
    __tablename__ = "coach_athletes"
    __table_args__ = (UniqueConstraint("coach_id", "athlete_id", name="coach_athlete_unique"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    coach_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    athlete_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    approved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, nullable=False
    )

    coach: Mapped[User] = relationship(
        back_populates="coached_links", foreign_keys=[coach_id], lazy="joined"
    )
    athlete: Mapped[User] = relationship(
        back_populates="assigned_coaches", foreign_keys=[athlete_id], lazy="joined"
    )
