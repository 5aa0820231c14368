"""Business-rule failures raised by the social services.

Every error carries a stable ``code`` so callers (HTTP routes, CLI) can render a
specific message. They subclass ``ValueError`` as the service layer always
signalled rejected operations that way.
"""


class RelationshipError(ValueError):
    code = "relationship_error"
    message = "Relationship operation rejected."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> dict:
        return {"code": self.code, "message": str(self)}


class InvalidTarget(RelationshipError):
    code = "invalid_target"
    message = "Cannot send a friend request to yourself."


class TargetNotFound(RelationshipError):
    code = "target_not_found"
    message = "User not found."


class RequestsDisabled(RelationshipError):
    code = "requests_disabled"
    message = "User is not accepting friend requests."


class AlreadyFriends(RelationshipError):
    code = "already_friends"
    message = "Already friends with this user."


class RequestAlreadyExists(RelationshipError):
    code = "request_already_exists"
    message = "A friend request between these users is already pending."


class RequestNotFound(RelationshipError):
    # Also returned when the request belongs to someone else
    code = "request_not_found"
    message = "Friend request not found."


class FriendshipNotFound(RelationshipError):
    code = "friendship_not_found"
    message = "Friendship not found."


class InvalidAction(RelationshipError):
    code = "invalid_action"
    message = "Action must be 'accept' or 'decline'."


class MessageTooLong(RelationshipError):
    code = "message_too_long"
    message = "Friend request message is too long."


class InvalidQuery(RelationshipError):
    code = "invalid_query"
    message = "Search query is too short."


class TransitionFailed(RelationshipError):
    code = "transition_failed"
    message = "Could not complete the request, please retry."
