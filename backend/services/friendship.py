import logging
from enum import Enum

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, delete, select, update

import settings
from models.auth import User
from models.friendship import (
    FriendRequest,
    FriendRequestStatus,
    Friendship,
    canonical_pair,
)
from models.types import utc_now
from services.errors import (
    AlreadyFriends,
    FriendshipNotFound,
    InvalidAction,
    InvalidTarget,
    MessageTooLong,
    RequestAlreadyExists,
    RequestNotFound,
    RequestsDisabled,
    TargetNotFound,
    TransitionFailed,
)
from services.identity import get_user
from utils import ratelimited_log

logger = logging.getLogger("animeweb.friendship")


class ResponseAction(str, Enum):
    accept = "accept"
    decline = "decline"


def find_friendship(session: Session, a: str, b: str) -> Friendship | None:
    low, high = canonical_pair(a, b)
    return session.exec(
        select(Friendship).where(
            Friendship.pair_low_id == low,
            Friendship.pair_high_id == high,
        )
    ).first()


def find_pending_request(session: Session, a: str, b: str) -> FriendRequest | None:
    """The pending request between two users, whichever direction it goes."""
    low, high = canonical_pair(a, b)
    return session.exec(
        select(FriendRequest).where(
            FriendRequest.pair_low_id == low,
            FriendRequest.pair_high_id == high,
            FriendRequest.status == FriendRequestStatus.pending,
        )
    ).first()


def _clean_message(message: str | None) -> str | None:
    message = (message or "").strip()
    if not message:
        return None
    if len(message) > settings.FRIEND_REQUEST_MESSAGE_MAX_LENGTH:
        raise MessageTooLong(
            f"Message must be at most {settings.FRIEND_REQUEST_MESSAGE_MAX_LENGTH} characters."
        )
    return message


def send_request(
    session: Session,
    *,
    requester_id: str,
    target_id: str,
    message: str | None = None,
) -> FriendRequest:
    if requester_id == target_id:
        raise InvalidTarget()
    message = _clean_message(message)

    target = get_user(session, target_id)
    if not target:
        raise TargetNotFound()
    if not target.allow_friend_requests:
        raise RequestsDisabled()
    if find_friendship(session, requester_id, target_id):
        raise AlreadyFriends()
    if find_pending_request(session, requester_id, target_id):
        raise RequestAlreadyExists()

    request = FriendRequest.pending_between(requester_id, target_id, message)
    session.add(request)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.debug(
            f"Friend request {requester_id} -> {target_id} rejected by the store: {e.orig}"
        )
        # A concurrent send or accept for the same pair won the race
        if find_friendship(session, requester_id, target_id):
            ratelimited_log(logger.warning, "Friend request collided with a friendship")
            raise AlreadyFriends() from e
        if find_pending_request(session, requester_id, target_id):
            ratelimited_log(logger.warning, "Friend request collided with a pending one")
            raise RequestAlreadyExists() from e
        # Anything else, e.g. a requester missing from the identity store
        logger.warning(f"Could not store friend request {requester_id} -> {target_id}")
        raise TransitionFailed() from e

    logger.info(f"Friend request {request.id} sent {requester_id} -> {target_id}")
    return request


def respond_to_request(
    session: Session,
    *,
    responder_id: str,
    request_id: str,
    action: ResponseAction | str,
) -> str:
    """Accept or decline a pending request addressed to ``responder_id``.

    Accepting flips the request and creates the friendship in one transaction:
    the conditional update only matches a still-pending row, so of two
    concurrent accepts exactly one wins and the other gets ``RequestNotFound``.
    """
    try:
        action = ResponseAction(action)
    except ValueError:
        raise InvalidAction()

    request = session.exec(
        select(FriendRequest).where(
            FriendRequest.id == request_id,
            FriendRequest.to_user_id == responder_id,
            FriendRequest.status == FriendRequestStatus.pending,
        )
    ).first()
    if not request:
        raise RequestNotFound()
    from_user_id = request.from_user_id

    new_status = (
        FriendRequestStatus.accepted
        if action == ResponseAction.accept
        else FriendRequestStatus.declined
    )
    now = utc_now()
    try:
        result = session.exec(
            update(FriendRequest)
            .where(
                FriendRequest.id == request_id,
                FriendRequest.to_user_id == responder_id,
                FriendRequest.status == FriendRequestStatus.pending,
            )
            .values(status=new_status, updated_at=now)
        )
        if result.rowcount != 1:
            session.rollback()
            raise RequestNotFound()

        if action == ResponseAction.accept:
            session.add(Friendship.between(from_user_id, responder_id, created_at=now))
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(f"Could not {action.value} friend request {request_id}: {e}")
        raise TransitionFailed() from e

    outcome = new_status.value
    logger.info(f"Friend request {request_id} {outcome} by {responder_id}")
    return outcome


def cancel_request(session: Session, *, requester_id: str, request_id: str) -> None:
    result = session.exec(
        delete(FriendRequest).where(
            FriendRequest.id == request_id,
            FriendRequest.from_user_id == requester_id,
            FriendRequest.status == FriendRequestStatus.pending,
        )
    )
    if result.rowcount != 1:
        session.rollback()
        raise RequestNotFound()
    session.commit()
    logger.info(f"Friend request {request_id} cancelled by {requester_id}")


def remove_friendship(
    session: Session, *, acting_user_id: str, friendship_id: str
) -> None:
    result = session.exec(
        delete(Friendship).where(
            Friendship.id == friendship_id,
            or_(
                Friendship.user_a_id == acting_user_id,
                Friendship.user_b_id == acting_user_id,
            ),
        )
    )
    if result.rowcount != 1:
        session.rollback()
        raise FriendshipNotFound()
    session.commit()
    logger.info(f"Friendship {friendship_id} removed by {acting_user_id}")


def _request_entry(request: FriendRequest, other: User, key: str) -> dict:
    return {
        "id": request.id,
        key: other.summary(),
        "message": request.message,
        "created_at": request.created_at.isoformat(),
    }


def list_friends(session: Session, user_id: str) -> list[dict]:
    rows = session.exec(
        select(Friendship, User)
        .join(
            User,
            or_(
                and_(Friendship.user_a_id == user_id, User.id == Friendship.user_b_id),
                and_(Friendship.user_b_id == user_id, User.id == Friendship.user_a_id),
            ),
        )
        .order_by(Friendship.created_at.desc(), Friendship.id)
    ).all()
    return [
        {
            "friendship_id": friendship.id,
            "friend_since": friendship.created_at.isoformat(),
            "user": friend.summary(),
        }
        for friendship, friend in rows
    ]


def list_incoming_requests(session: Session, user_id: str) -> list[dict]:
    rows = session.exec(
        select(FriendRequest, User)
        .join(User, User.id == FriendRequest.from_user_id)
        .where(
            FriendRequest.to_user_id == user_id,
            FriendRequest.status == FriendRequestStatus.pending,
        )
        .order_by(FriendRequest.created_at.desc(), FriendRequest.id)
    ).all()
    return [_request_entry(fr, sender, "from_user") for fr, sender in rows]


def list_outgoing_requests(session: Session, user_id: str) -> list[dict]:
    rows = session.exec(
        select(FriendRequest, User)
        .join(User, User.id == FriendRequest.to_user_id)
        .where(
            FriendRequest.from_user_id == user_id,
            FriendRequest.status == FriendRequestStatus.pending,
        )
        .order_by(FriendRequest.created_at.desc(), FriendRequest.id)
    ).all()
    return [_request_entry(fr, recipient, "to_user") for fr, recipient in rows]


def friends_overview(session: Session, user_id: str) -> dict:
    return {
        "friends": list_friends(session, user_id),
        "incoming_requests": list_incoming_requests(session, user_id),
        "outgoing_requests": list_outgoing_requests(session, user_id),
    }
