import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import ForeignKey, Text, DateTime, func
from actionthreads.db.session import Base, utcnow

TRANSCRIPT_CONTENT_MAX_LENGTH = 30_000


class Transcript(Base):
    """Free-text meeting transcript attached to a thread.

    A thread keeps every transcript ever posted to it; the most recently
    created one is the thread's "current" transcript.
    """
    __tablename__ = "transcript"
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    thread_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("thread.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
