import logging

from sqlalchemy import func, or_
from sqlmodel import Session, select

import settings
from models.auth import ProfileVisibility, User
from services.errors import InvalidQuery

logger = logging.getLogger("animeweb.identity")


def get_user(session: Session, user_id: str) -> User | None:
    return session.get(User, user_id)


def update_privacy(
    session: Session,
    user: User,
    *,
    allow_friend_requests: bool | None = None,
    profile_visibility: ProfileVisibility | None = None,
) -> User:
    """Change the preferences that gate incoming friend requests.

    Existing friendships and pending requests are left untouched.
    """
    if allow_friend_requests is not None:
        user.allow_friend_requests = allow_friend_requests
    if profile_visibility is not None:
        user.profile_visibility = ProfileVisibility(profile_visibility)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.debug(
        f"Privacy of {user.id}: requests={user.allow_friend_requests} "
        f"visibility={user.profile_visibility.value}"
    )
    return user


def search_users(
    session: Session, *, viewer_id: str, query: str, limit: int = 10
) -> list[User]:
    """Find users open to friend requests by name or username."""
    term = (query or "").strip()
    if len(term) < settings.USER_SEARCH_MIN_QUERY:
        raise InvalidQuery(
            f"Query must be at least {settings.USER_SEARCH_MIN_QUERY} characters."
        )
    limit = max(1, min(limit, settings.USER_SEARCH_MAX_RESULTS))

    pattern = f"%{term.lower()}%"
    stmt = (
        select(User)
        .where(
            User.id != viewer_id,
            or_(
                func.lower(User.name).like(pattern),
                func.lower(User.username).like(pattern),
            ),
            User.profile_visibility != ProfileVisibility.private,
            User.allow_friend_requests == True,  # noqa: E712
        )
        .order_by(User.name)
        .limit(limit)
    )
    return list(session.exec(stmt).all())
