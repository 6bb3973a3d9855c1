"""Declarative mixins for the service's models (SQLAlchemy 2.0 typing)."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column


def _timestamp(*, touch_on_update: bool = False) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now() if touch_on_update else None,
    )


class TimestampMixin:
    """Database-maintained ``created_at`` / ``updated_at`` columns."""

    created_at: Mapped[datetime] = _timestamp()
    updated_at: Mapped[datetime] = _timestamp(touch_on_update=True)


class UUIDPKMixin:
    """Opaque UUID primary key named ``id``.

    The value is generated client-side at flush, so callers never choose
    identifiers and never change them afterwards.
    """

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)


class ReprMixin:
    """``<ClassName attr=value ...>`` built from ``__repr_attrs__``."""

    __repr_attrs__: tuple[str, ...] = ("id",)

    def __repr__(self) -> str:
        parts = " ".join(f"{attr}={getattr(self, attr, None)}" for attr in self.__repr_attrs__)
        return f"<{type(self).__name__} {parts}>"
