"""Inspect and drive friend relationships from the command line"""

import argparse
import asyncio
import json
import logging
import sys

from models.common import get_db
from services import (
    RelationshipError,
    friends_overview,
    resolve_status,
    respond_to_request,
    send_request,
)
from utils import setup_logs, time_it

logger = logging.getLogger("animeweb.cli")


def run_command(session, args) -> dict:
    match args.command:
        case "status":
            state = resolve_status(
                session, viewer_id=args.viewer, subject_id=args.subject
            )
            return state.model_dump(mode="json")
        case "send":
            fr = send_request(
                session,
                requester_id=args.from_user,
                target_id=args.to_user,
                message=args.message,
            )
            return {"id": fr.id, "status": fr.status.value}
        case "respond":
            outcome = respond_to_request(
                session,
                responder_id=args.user,
                request_id=args.request_id,
                action=args.action,
            )
            return {"outcome": outcome}
        case "list":
            return friends_overview(session, args.user)
    raise ValueError(f"Unknown command {args.command}")


@time_it
async def main(args) -> int:
    with get_db() as session:
        try:
            result = run_command(session, args)
        except RelationshipError as e:
            logger.debug(f"{args.command} rejected: {e}")
            print(json.dumps({"error": e.detail}), file=sys.stderr)
            return 1
    print(json.dumps(result, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Relationship between two users")
    status.add_argument("viewer")
    status.add_argument("subject")

    send = sub.add_parser("send", help="Send a friend request")
    send.add_argument("from_user")
    send.add_argument("to_user")
    send.add_argument("--message", default=None)

    respond = sub.add_parser("respond", help="Accept or decline a request")
    respond.add_argument("user")
    respond.add_argument("request_id")
    respond.add_argument("action", choices=["accept", "decline"])

    listing = sub.add_parser("list", help="Friends and pending requests of a user")
    listing.add_argument("user")
    return parser


if __name__ == "__main__":  # pragma: no cover
    setup_logs()
    sys.exit(asyncio.run(main(build_parser().parse_args())))
