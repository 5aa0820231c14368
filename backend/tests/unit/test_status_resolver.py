import pytest
from sqlmodel import select

from models.friendship import Friendship
from services.friendship import (
    cancel_request,
    remove_friendship,
    respond_to_request,
    send_request,
)
from services.identity import update_privacy
from services.status import RelationshipStatus, resolve_status

MIRRORED = {
    RelationshipStatus.none: RelationshipStatus.none,
    RelationshipStatus.friends: RelationshipStatus.friends,
    RelationshipStatus.request_sent: RelationshipStatus.request_received,
    RelationshipStatus.request_received: RelationshipStatus.request_sent,
}


def both_ways(session, a, b):
    return (
        resolve_status(session, viewer_id=a.id, subject_id=b.id),
        resolve_status(session, viewer_id=b.id, subject_id=a.id),
    )


def assert_mirrored(session, a, b):
    forward, backward = both_ways(session, a, b)
    assert MIRRORED[forward.status] == backward.status
    assert forward.friendship_id == backward.friendship_id
    assert forward.request_id == backward.request_id
    return forward, backward


def test_self(test_session, users):
    alice, _, _ = users
    state = resolve_status(test_session, viewer_id=alice.id, subject_id=alice.id)
    assert state.status == RelationshipStatus.self
    assert state.can_send_request is False


def test_self_short_circuits_before_lookup(test_session):
    # Neither user exists, self still wins
    state = resolve_status(test_session, viewer_id="nobody", subject_id="nobody")
    assert state.status == RelationshipStatus.self


def test_user_not_found(test_session, users):
    alice, _, _ = users
    state = resolve_status(test_session, viewer_id=alice.id, subject_id="ghost")
    assert state.status == RelationshipStatus.user_not_found


def test_none_allows_sending(test_session, users):
    alice, bob, _ = users
    forward, _ = assert_mirrored(test_session, alice, bob)
    assert forward.status == RelationshipStatus.none
    assert forward.can_send_request is True


def test_request_sent_and_received(test_session, users):
    alice, bob, _ = users
    fr = send_request(test_session, requester_id=alice.id, target_id=bob.id)

    forward, backward = assert_mirrored(test_session, alice, bob)
    assert forward.status == RelationshipStatus.request_sent
    assert backward.status == RelationshipStatus.request_received
    assert forward.request_id == fr.id


def test_decline_returns_to_none(test_session, users):
    alice, bob, _ = users
    fr = send_request(test_session, requester_id=alice.id, target_id=bob.id)
    respond_to_request(test_session, responder_id=bob.id, request_id=fr.id, action="decline")

    forward, _ = assert_mirrored(test_session, alice, bob)
    assert forward.status == RelationshipStatus.none

    send_request(test_session, requester_id=alice.id, target_id=bob.id)
    forward, _ = both_ways(test_session, alice, bob)
    assert forward.status == RelationshipStatus.request_sent


def test_accept_makes_friends(test_session, users):
    alice, bob, _ = users
    fr = send_request(test_session, requester_id=alice.id, target_id=bob.id)
    respond_to_request(test_session, responder_id=bob.id, request_id=fr.id, action="accept")

    forward, backward = assert_mirrored(test_session, alice, bob)
    assert forward.status == RelationshipStatus.friends
    assert forward.friendship_id == test_session.exec(select(Friendship.id)).one()
    assert forward.request_id is None


def test_cancel_returns_to_none(test_session, users):
    alice, bob, _ = users
    fr = send_request(test_session, requester_id=alice.id, target_id=bob.id)
    cancel_request(test_session, requester_id=alice.id, request_id=fr.id)

    forward, _ = assert_mirrored(test_session, alice, bob)
    assert forward.status == RelationshipStatus.none


def test_removed_friendship_returns_to_none(test_session, users):
    alice, bob, _ = users
    fr = send_request(test_session, requester_id=alice.id, target_id=bob.id)
    respond_to_request(test_session, responder_id=bob.id, request_id=fr.id, action="accept")
    friendship_id = resolve_status(
        test_session, viewer_id=alice.id, subject_id=bob.id
    ).friendship_id

    remove_friendship(test_session, acting_user_id=bob.id, friendship_id=friendship_id)
    forward, _ = assert_mirrored(test_session, alice, bob)
    assert forward.status == RelationshipStatus.none


def test_not_accepting(test_session, make_user, users):
    alice, _, _ = users
    hermit = make_user("u9", "Hermit", allow_friend_requests=False)

    state = resolve_status(test_session, viewer_id=alice.id, subject_id=hermit.id)
    assert state.status == RelationshipStatus.not_accepting
    assert state.can_send_request is False


@pytest.mark.parametrize("accept", [True, False])
def test_existing_relation_wins_over_disabled_requests(test_session, users, accept):
    alice, bob, _ = users
    fr = send_request(test_session, requester_id=alice.id, target_id=bob.id)
    if accept:
        respond_to_request(
            test_session, responder_id=bob.id, request_id=fr.id, action="accept"
        )
    update_privacy(test_session, bob, allow_friend_requests=False)

    state = resolve_status(test_session, viewer_id=alice.id, subject_id=bob.id)
    expected = RelationshipStatus.friends if accept else RelationshipStatus.request_sent
    assert state.status == expected


def test_message_for_each_status():
    from services.status import STATUS_MESSAGES

    assert set(STATUS_MESSAGES) == set(RelationshipStatus)
