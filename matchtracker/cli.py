"""Command line helper for a running match API.

Usage:
    python -m matchtracker.cli create --home "Spain" --away "Brazil" --date 2024-09-14
    python -m matchtracker.cli goal 1
    python -m matchtracker.cli --url http://localhost:8081 list

Every command prints a JSON document. Exit code is 0 on success and 2 when
the API rejects the request or cannot be reached.
"""
from __future__ import annotations

import argparse
import json
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from matchtracker.client import MatchApiError, MatchClient
from matchtracker.config import load_settings


# command name -> MatchClient method for the bodiless PATCH/DELETE calls
_ID_COMMANDS = {
    "delete": "delete_match",
    "goal": "register_goal",
    "yellow": "register_yellow_card",
    "red": "register_red_card",
    "extratime": "set_extra_time",
}


def _make_client(url: str) -> MatchClient:
    return MatchClient(base_url=url)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Talk to the match tracking API")
    p.add_argument("--url", help="API base URL (default: MATCHTRACKER_API_URL or http://localhost:8081)")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all matches")

    get = sub.add_parser("get", help="Show one match")
    get.add_argument("id", type=int)

    create = sub.add_parser("create", help="Create a match")
    create.add_argument("--home", required=True, help="Home team")
    create.add_argument("--away", required=True, help="Away team")
    create.add_argument("--date", default="", help="Match date (free text)")

    update = sub.add_parser(
        "update",
        help="Replace a match's teams/date; any of --home/--away/--date left out is cleared",
    )
    update.add_argument("id", type=int)
    update.add_argument("--home", default="", help="Home team (cleared when omitted)")
    update.add_argument("--away", default="", help="Away team (cleared when omitted)")
    update.add_argument("--date", default="", help="Match date (cleared when omitted)")

    for name, method in _ID_COMMANDS.items():
        cmd = sub.add_parser(name, help=method.replace("_", " ").capitalize())
        cmd.add_argument("id", type=int)

    return p


def run(client: MatchClient, args: argparse.Namespace) -> Dict[str, Any]:
    if args.command == "list":
        return {"ok": True, "matches": [m.to_dict() for m in client.list_matches()]}
    if args.command == "get":
        return {"ok": True, "match": client.get_match(args.id).to_dict()}
    if args.command == "create":
        match_id = client.create_match(home_team=args.home, away_team=args.away, match_date=args.date)
        return {"ok": True, "id": match_id}
    if args.command == "update":
        client.update_match(args.id, home_team=args.home, away_team=args.away, match_date=args.date)
        return {"ok": True}
    getattr(client, _ID_COMMANDS[args.command])(args.id)
    return {"ok": True}


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    url = args.url or load_settings().api_url

    try:
        with _make_client(url) as client:
            res = run(client, args)
    except (MatchApiError, httpx.HTTPError, ValidationError) as exc:
        print(json.dumps({"ok": False, "error": str(exc)}))
        return 2

    print(json.dumps(res))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())  # pragma: no cover
