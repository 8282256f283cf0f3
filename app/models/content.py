# app/models/content.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from app.db.base_class import Base

def _new_id() -> str:
    return uuid.uuid4().hex

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Post(Base):
    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    owner_id = Column(String(32), ForeignKey("accounts.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    @property
    def friend_only(self) -> bool:
        # 貼文一律只給自己和好友看
        return True

class Poll(Base):
    __tablename__ = "polls"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    owner_id = Column(String(32), ForeignKey("accounts.id"), nullable=False, index=True)
    question = Column(String(255), nullable=False)
    description = Column(Text, default="")
    is_friend_only = Column(Boolean, nullable=False, default=False)
    allow_comments = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    @property
    def friend_only(self) -> bool:
        return bool(self.is_friend_only)
