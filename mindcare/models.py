from datetime import datetime
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from .core.db import Base

class ConversationRecord(Base):
    __tablename__ = "conversations"
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # serialized ConversationState (phase, session snapshot, pending plan, messages)
    state_json: Mapped[str] = mapped_column(Text, default="{}")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

class UserProgress(Base):
    __tablename__ = "user_progress"
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    plan_id: Mapped[str] = mapped_column(String(32), index=True)
    plan_json: Mapped[str] = mapped_column(Text)
    start_date: Mapped[datetime] = mapped_column(DateTime)
    completed_therapies_json: Mapped[str] = mapped_column(Text, default="[]")
    daily_progress_json: Mapped[str] = mapped_column(Text, default="{}")
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
