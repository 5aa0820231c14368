"""Identity models

Users are provisioned by the external sign-in provider; this service only reads
them, plus the two privacy preferences that gate friend requests.
"""

import datetime
from enum import Enum

from sqlalchemy import func
from sqlmodel import SQLModel, Field, Column

from .common import CamelModel
from .types import UtcAwareDateTime, utc_now


class ProfileVisibility(str, Enum):
    public = "public"
    friends = "friends"
    private = "private"


class User(SQLModel, CamelModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    username: str | None = Field(default=None, index=True, unique=True, nullable=True)
    picture: str | None = None
    bio: str | None = None
    join_date: datetime.datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UtcAwareDateTime(), nullable=False),
    )

    # Privacy preferences
    allow_friend_requests: bool = Field(default=True)
    profile_visibility: ProfileVisibility = Field(default=ProfileVisibility.public)

    updated_at: datetime.datetime | None = Field(
        default=None,
        sa_column=Column(UtcAwareDateTime(), onupdate=func.now(), nullable=True),
    )

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "picture": self.picture,
            "bio": self.bio,
        }

    def __str__(self):
        return self.email
