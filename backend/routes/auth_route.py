import tomllib

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlmodel import Session

from models.auth import ProfileVisibility, User
from models.common import get_session
from routes.deps import current_user, get_current_user
from services.identity import update_privacy
from settings import PROJECT_PATH

router = APIRouter()


def get_version() -> str:
    with open(PROJECT_PATH / "pyproject.toml", "rb") as f:
        pyproject = tomllib.load(f)
    return pyproject["project"]["version"]


@router.get("/")
async def index():
    return {"version": get_version(), "status": "ok"}


@router.get("/user/me")
async def get_current_user_info(
    user: User | None = Depends(get_current_user),
):
    if not user:
        return {"user": None}

    return {
        "user": {
            **user.summary(),
            "email": user.email,
            "join_date": user.join_date.isoformat(),
        }
    }


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out successfully"}


class PrivacySettings(BaseModel):
    allow_friend_requests: bool | None = None
    profile_visibility: ProfileVisibility | None = None


def _privacy(user: User) -> dict:
    return {
        "privacy": {
            "allow_friend_requests": user.allow_friend_requests,
            "profile_visibility": user.profile_visibility.value,
        }
    }


@router.get("/user/settings/privacy")
async def get_privacy(user: User = Depends(current_user)):
    return _privacy(user)


@router.put("/user/settings/privacy")
async def set_privacy(
    payload: PrivacySettings,
    session: Session = Depends(get_session),
    user: User = Depends(current_user),
):
    db_user = session.get(User, user.id)
    db_user = update_privacy(
        session,
        db_user,
        allow_friend_requests=payload.allow_friend_requests,
        profile_visibility=payload.profile_visibility,
    )
    return _privacy(db_user)
