import asyncio
import json
from contextlib import contextmanager
from unittest.mock import patch

import pytest

from scripts.friends_admin import build_parser, main, run_command


@pytest.fixture
def patched_db(test_session):
    @contextmanager
    def _get_db():
        yield test_session

    with patch("scripts.friends_admin.get_db", _get_db):
        yield


def run(argv):
    return asyncio.run(main(build_parser().parse_args(argv)))


def test_send_respond_and_status(test_session, users):
    parser = build_parser()

    sent = run_command(test_session, parser.parse_args(["send", "u1", "u2"]))
    assert sent["status"] == "pending"

    answered = run_command(
        test_session, parser.parse_args(["respond", "u2", sent["id"], "accept"])
    )
    assert answered == {"outcome": "accepted"}

    state = run_command(test_session, parser.parse_args(["status", "u1", "u2"]))
    assert state["status"] == "friends"

    listing = run_command(test_session, parser.parse_args(["list", "u1"]))
    assert [f["user"]["id"] for f in listing["friends"]] == ["u2"]


def test_main_prints_json(patched_db, users, capsys):
    assert run(["send", "u1", "u2", "--message", "hi"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["status"] == "pending"


def test_main_reports_rejection(patched_db, users, capsys):
    assert run(["send", "u1", "u1"]) == 1
    err = json.loads(capsys.readouterr().err)
    assert err["error"]["code"] == "invalid_target"


def test_respond_choices_are_validated():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["respond", "u2", "r1", "ignore"])


def test_main_reports_unknown_requester(patched_db, users, capsys):
    assert run(["send", "ghost", "u2"]) == 1
    err = json.loads(capsys.readouterr().err)
    assert err["error"]["code"] == "transition_failed"
