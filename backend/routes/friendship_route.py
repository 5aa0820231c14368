from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from models.auth import User
from models.common import get_session
from routes.deps import as_http_error, current_user
from services.errors import RelationshipError
from services.friendship import (
    ResponseAction,
    cancel_request as svc_cancel_request,
    friends_overview,
    list_incoming_requests,
    list_outgoing_requests,
    remove_friendship as svc_remove_friendship,
    respond_to_request as svc_respond_to_request,
    send_request as svc_send_request,
)
from services.status import resolve_status

router = APIRouter(prefix="/friends")


class FriendRequestIn(BaseModel):
    to_user_id: str
    message: str | None = None


class FriendRequestResponseIn(BaseModel):
    action: ResponseAction


@router.get("")
async def list_friends_and_requests(
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    return friends_overview(session, user.id)


@router.get("/requests/incoming")
async def incoming_requests(
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    return {"incoming_requests": list_incoming_requests(session, user.id)}


@router.get("/requests/outgoing")
async def outgoing_requests(
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    return {"outgoing_requests": list_outgoing_requests(session, user.id)}


@router.post("/requests", status_code=201)
async def send_friend_request(
    payload: FriendRequestIn,
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    try:
        fr = svc_send_request(
            session,
            requester_id=user.id,
            target_id=payload.to_user_id,
            message=payload.message,
        )
    except RelationshipError as e:
        raise as_http_error(e)

    return {
        "request": {
            "id": fr.id,
            "from_user_id": fr.from_user_id,
            "to_user_id": fr.to_user_id,
            "status": fr.status.value,
            "message": fr.message,
            "created_at": fr.created_at.isoformat(),
        }
    }


@router.put("/requests/{request_id}")
async def respond_to_request(
    request_id: str,
    payload: FriendRequestResponseIn,
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    try:
        outcome = svc_respond_to_request(
            session, responder_id=user.id, request_id=request_id, action=payload.action
        )
    except RelationshipError as e:
        raise as_http_error(e)

    return {"outcome": outcome, "message": f"Friend request {outcome}"}


@router.delete("/requests/{request_id}")
async def cancel_request(
    request_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    try:
        svc_cancel_request(session, requester_id=user.id, request_id=request_id)
    except RelationshipError as e:
        raise as_http_error(e)

    return {"message": "Friend request cancelled"}


@router.get("/status/{user_id}")
async def relationship_status(
    user_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    state = resolve_status(session, viewer_id=user.id, subject_id=user_id)
    return {
        **state.model_dump(mode="json"),
        "can_send_request": state.can_send_request,
        "message": state.message,
    }


@router.delete("/{friendship_id}")
async def remove_friendship(
    friendship_id: str,
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    try:
        svc_remove_friendship(
            session, acting_user_id=user.id, friendship_id=friendship_id
        )
    except RelationshipError as e:
        raise as_http_error(e)

    return {"message": "Friendship removed"}
