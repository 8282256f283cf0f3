# app/models/search.py

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

class UserHit(BaseModel):
    id: str
    first_name: str
    last_name: str
    userpic: str = ""

    model_config = ConfigDict(from_attributes=True)

class PostHit(BaseModel):
    id: str
    text: str
    updated_at: Optional[datetime] = None
    owner_id: str

    model_config = ConfigDict(from_attributes=True)

class PollHit(BaseModel):
    id: str
    question: str
    description: Optional[str] = ""
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class UserResult(BaseModel):
    type: Literal["user"] = "user"
    data: UserHit

class PostResult(BaseModel):
    type: Literal["post"] = "post"
    data: PostHit

class PollResult(BaseModel):
    type: Literal["poll"] = "poll"
    data: PollHit

SearchResult = Annotated[Union[UserResult, PostResult, PollResult], Field(discriminator="type")]
