# hospital/db/models/db_base_model.py
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import DateTime, String
from sqlalchemy.types import TypeDecorator
from datetime import datetime, timezone
from uuid import uuid4


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class UtcDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetime on every backend.

    sqlite drops the offset on write; naive values read back are UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class DbBaseModel(DeclarativeBase):
    """
    Base for every collection table.

    Records carry a generated string id and a creation timestamp. There is
    no updated_at: an update writes exactly the fields it was given.
    """

    __abstract__ = True  # prevents SQLAlchemy from creating a table for this base

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: DbBaseModel.generate_uuid(),
    )

    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(),
        default=utcnow,  # always UTC
        nullable=False,
    )

    @staticmethod
    def generate_uuid() -> str:
        return str(uuid4())


__all__ = ["DbBaseModel", "UtcDateTime", "utcnow"]
