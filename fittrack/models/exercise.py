"""Exercise model - catalog entry independent of any plan."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fittrack.db.base import Base, JSONDocument


class Exercise(Base):
    """Exercise definition: equipment, muscle groups and instructional content."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    equipment: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    muscle_groups: Mapped[list] = mapped_column(JSONDocument, default=list, nullable=False)
    # {"1": "Lie on the bench...", "2": "..."} or {"text": "..."}
    instructions: Mapped[dict] = mapped_column(JSONDocument, default=dict, nullable=False)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    images: Mapped[list] = mapped_column(JSONDocument, default=list, nullable=False)
    tags: Mapped[list] = mapped_column(JSONDocument, default=list, nullable=False)
    videos: Mapped[list] = mapped_column(JSONDocument, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
