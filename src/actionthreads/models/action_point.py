import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Boolean, DateTime, func
from actionthreads.db.session import Base, utcnow

ACTION_POINT_TITLE_MAX_LENGTH = 255


class ActionPoint(Base):
    """Short task derived from a thread's transcript (by hand or by the summarizer)."""
    __tablename__ = "action_point"
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    thread_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("thread.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(ACTION_POINT_TITLE_MAX_LENGTH), nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
