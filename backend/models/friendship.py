import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, Column, Index, UniqueConstraint, text
from sqlmodel import SQLModel, Field

from models.types import UtcAwareDateTime, new_id, utc_now


class FriendRequestStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    if a == b:
        raise ValueError("A relation needs two distinct users.")
    return (a, b) if a < b else (b, a)


class Friendship(SQLModel, table=True):
    __tablename__ = "friendships"
    __table_args__ = (
        UniqueConstraint("pair_low_id", "pair_high_id", name="uq_friendship_pair"),
        CheckConstraint("pair_low_id < pair_high_id", name="ck_friendship_order"),
        CheckConstraint("user_a_id <> user_b_id", name="ck_friendship_distinct"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)

    # As accepted: user_a sent the request, user_b accepted it
    user_a_id: str = Field(foreign_key="users.id", index=True)
    user_b_id: str = Field(foreign_key="users.id", index=True)

    # Canonical pair (always low < high), used for symmetric lookups
    pair_low_id: str
    pair_high_id: str

    created_at: datetime.datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UtcAwareDateTime(), nullable=False),
    )

    @classmethod
    def between(cls, user_a_id: str, user_b_id: str, **kwargs) -> "Friendship":
        low, high = canonical_pair(user_a_id, user_b_id)
        return cls(
            user_a_id=user_a_id,
            user_b_id=user_b_id,
            pair_low_id=low,
            pair_high_id=high,
            **kwargs,
        )

    def other(self, user_id: str) -> str:
        return self.user_b_id if user_id == self.user_a_id else self.user_a_id


PENDING_ONLY = text("status = 'pending'")


class FriendRequest(SQLModel, table=True):
    __tablename__ = "friend_requests"
    __table_args__ = (
        CheckConstraint("from_user_id <> to_user_id", name="ck_friend_request_distinct"),
        # At most one pending request per unordered pair, in either direction
        Index(
            "uq_friend_request_pending_pair",
            "pair_low_id",
            "pair_high_id",
            unique=True,
            sqlite_where=PENDING_ONLY,
            postgresql_where=PENDING_ONLY,
        ),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    from_user_id: str = Field(foreign_key="users.id", index=True)
    to_user_id: str = Field(foreign_key="users.id", index=True)

    pair_low_id: str
    pair_high_id: str

    status: FriendRequestStatus = Field(
        default=FriendRequestStatus.pending, index=True
    )
    message: str | None = None

    created_at: datetime.datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UtcAwareDateTime(), nullable=False),
    )
    updated_at: datetime.datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UtcAwareDateTime(), nullable=False),
    )

    @classmethod
    def pending_between(
        cls, from_user_id: str, to_user_id: str, message: str | None = None
    ) -> "FriendRequest":
        low, high = canonical_pair(from_user_id, to_user_id)
        now = utc_now()
        return cls(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            pair_low_id=low,
            pair_high_id=high,
            status=FriendRequestStatus.pending,
            message=message,
            created_at=now,
            updated_at=now,
        )
