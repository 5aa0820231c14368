import logging
from enum import Enum

from pydantic import BaseModel
from sqlmodel import Session

from services.friendship import find_friendship, find_pending_request
from services.identity import get_user

logger = logging.getLogger("animeweb.status")


class RelationshipStatus(str, Enum):
    self = "self"
    user_not_found = "user_not_found"
    friends = "friends"
    request_sent = "request_sent"
    request_received = "request_received"
    not_accepting = "not_accepting"
    none = "none"


STATUS_MESSAGES = {
    RelationshipStatus.self: "This is your own profile",
    RelationshipStatus.user_not_found: "User not found",
    RelationshipStatus.friends: "You are friends with this user",
    RelationshipStatus.request_sent: "Friend request sent",
    RelationshipStatus.request_received: "Friend request received",
    RelationshipStatus.not_accepting: "This user is not accepting friend requests",
    RelationshipStatus.none: "You can send a friend request to this user",
}


class RelationshipState(BaseModel):
    status: RelationshipStatus
    friendship_id: str | None = None
    request_id: str | None = None

    @property
    def can_send_request(self) -> bool:
        return self.status == RelationshipStatus.none

    @property
    def message(self) -> str:
        return STATUS_MESSAGES[self.status]


def resolve_status(session: Session, *, viewer_id: str, subject_id: str) -> RelationshipState:
    """How ``viewer_id`` relates to ``subject_id``.

    Checked in order: self, missing subject, friendship, pending request either
    way, then the subject's preference. Existing relations win over a subject
    who has since stopped accepting requests.
    """
    if viewer_id == subject_id:
        return RelationshipState(status=RelationshipStatus.self)

    subject = get_user(session, subject_id)
    if not subject:
        return RelationshipState(status=RelationshipStatus.user_not_found)

    friendship = find_friendship(session, viewer_id, subject_id)
    if friendship:
        return RelationshipState(
            status=RelationshipStatus.friends, friendship_id=friendship.id
        )

    pending = find_pending_request(session, viewer_id, subject_id)
    if pending:
        status = (
            RelationshipStatus.request_sent
            if pending.from_user_id == viewer_id
            else RelationshipStatus.request_received
        )
        return RelationshipState(status=status, request_id=pending.id)

    if not subject.allow_friend_requests:
        return RelationshipState(status=RelationshipStatus.not_accepting)

    return RelationshipState(status=RelationshipStatus.none)
