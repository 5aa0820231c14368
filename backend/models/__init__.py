"""Models package for the anime-web social backend"""

from .common import get_session, CamelModel
from .auth import User, ProfileVisibility
from .friendship import Friendship, FriendRequest, FriendRequestStatus, canonical_pair
from .types import UtcAwareDateTime

__all__ = [
    "Friendship",
    "FriendRequest",
    "FriendRequestStatus",
    "ProfileVisibility",
    "User",
    "UtcAwareDateTime",
    "canonical_pair",
    "get_session",
    "CamelModel",
]
