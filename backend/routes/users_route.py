from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from models.auth import User
from models.common import get_session
from routes.deps import as_http_error, current_user
from services.errors import RelationshipError
from services.identity import search_users

router = APIRouter(prefix="/users")


@router.get("/search")
async def search(
    q: str = Query(""),
    limit: int = Query(10, ge=1),
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    try:
        users = search_users(session, viewer_id=user.id, query=q, limit=limit)
    except RelationshipError as e:
        raise as_http_error(e)

    return {"users": [u.summary() for u in users]}
