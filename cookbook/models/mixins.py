"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import declared_attr


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class NameMixin:
    """Mixin for shared lookup tables keyed by a unique name.

    The unique constraint is named ``<table>_name_key`` because insert
    statements target it with ``ON CONFLICT ON CONSTRAINT``.
    """

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(1000), nullable=False)

    @declared_attr
    def __table_args__(cls):
        return (UniqueConstraint("name", name=f"{cls.__tablename__}_name_key"),)
