from datetime import datetime

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from interface_monitor.core.datetime_utils import utc_now


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class TimestampMixin:
    """Mixin that adds created_at/updated_at timestamps to models."""

    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
