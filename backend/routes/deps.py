from fastapi import Depends, Request, HTTPException
from sqlmodel import Session

from models.auth import User
from models.common import get_session
from services import errors


def get_current_user_id(request: Request) -> str | None:
    return request.session.get("user_id")


def get_current_user(
    request: Request, session: Session = Depends(get_session)
) -> User | None:
    user_id = get_current_user_id(request)
    if not user_id:
        return None
    return session.get(User, user_id)


def current_user(user: User = Depends(get_current_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


ERROR_STATUS_CODES: dict[type[errors.RelationshipError], int] = {
    errors.InvalidTarget: 400,
    errors.InvalidAction: 400,
    errors.MessageTooLong: 400,
    errors.InvalidQuery: 400,
    errors.RequestsDisabled: 403,
    errors.TargetNotFound: 404,
    errors.RequestNotFound: 404,
    errors.FriendshipNotFound: 404,
    errors.AlreadyFriends: 409,
    errors.RequestAlreadyExists: 409,
    errors.TransitionFailed: 503,
}


def as_http_error(error: errors.RelationshipError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), 400)
    return HTTPException(status_code=status_code, detail=error.detail)
