from .errors import RelationshipError
from .friendship import (
    ResponseAction,
    cancel_request,
    friends_overview,
    list_friends,
    list_incoming_requests,
    list_outgoing_requests,
    remove_friendship,
    respond_to_request,
    send_request,
)
from .status import RelationshipState, RelationshipStatus, resolve_status

__all__ = [
    "RelationshipError",
    "RelationshipState",
    "RelationshipStatus",
    "ResponseAction",
    "cancel_request",
    "friends_overview",
    "list_friends",
    "list_incoming_requests",
    "list_outgoing_requests",
    "remove_friendship",
    "resolve_status",
    "respond_to_request",
    "send_request",
]
