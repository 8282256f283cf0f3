# app/models/account.py

import uuid
from datetime import datetime, timezone
from typing import List, Literal, Union

from sqlalchemy import Column, Integer, String, DateTime, JSON
from pydantic import BaseModel, ConfigDict, Field
from app.db.base_class import Base

def _new_id() -> str:
    return uuid.uuid4().hex

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    first_name = Column(String(50), nullable=False, index=True)
    last_name = Column(String(50), nullable=False, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    userpic = Column(String(255), default="")

    joined = Column(DateTime(timezone=True), default=_utcnow)
    last_seen = Column(DateTime(timezone=True), default=_utcnow)

    # 關係集合 (JSON list of account id)
    # friends: 雙向，pending_friend_requests: 別人對我送出、等我決定的邀請
    friends = Column(JSON, nullable=False, default=list)
    pending_friend_requests = Column(JSON, nullable=False, default=list)

    # 🔥 條件式更新用的版本號，每次寫關係集合就 +1
    version = Column(Integer, nullable=False, default=0)

class AccountSummary(BaseModel):
    id: str
    first_name: str
    last_name: str
    username: str
    userpic: str = ""

    model_config = ConfigDict(from_attributes=True)

class PublicView(AccountSummary):
    view: Literal["public"] = "public"

class FriendView(AccountSummary):
    view: Literal["friend"] = "friend"
    joined: datetime
    last_seen: datetime
    friends: List[AccountSummary]
    mutual_friends: int
    mutual_friend_ids: List[str]

class ProfileResponse(BaseModel):
    user: Union[PublicView, FriendView] = Field(discriminator="view")
    is_friend: bool
    is_friend_request_pending: bool

class FriendAction(BaseModel):
    user_id: str = Field(min_length=1)
