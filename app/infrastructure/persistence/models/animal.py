"""Animal ORM model. Adoption listing with an ordered photo set."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.shared.utils.datetime import utc_now


class Animal(CuidMixin, TimestampMixin, Base):
    """Animal entity. Table: animals.

    photos is a JSON array of locators stored as text; read it through
    decode_attachments, never json.loads directly.
    """

    __tablename__ = "animals"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    size: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[str] = mapped_column(String, nullable=False)
    genre: Mapped[str] = mapped_column(String(16), nullable=False)
    adopted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    photos: Mapped[str] = mapped_column(
        Text, nullable=False, default="[]", server_default=text("'[]'")
    )
    register_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint(
            "genre IN ('male', 'female', 'unknown')", name="animals_genre_check"
        ),
        Index("ix_animals_register_date", "register_date"),
    )
