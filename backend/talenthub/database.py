import uuid

from sqlalchemy import Enum, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from .core.config import get_settings


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


def generate_id() -> str:
    return str(uuid.uuid4())


def enum_type(enum_cls) -> Enum:
    """Non-native enum column storing member values ('athlete', 'Gold', ...)."""
    return Enum(enum_cls, native_enum=False, values_callable=lambda e: [m.value for m in e])


settings = get_settings()
connect_args: dict = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    future=True,
    connect_args=connect_args,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
