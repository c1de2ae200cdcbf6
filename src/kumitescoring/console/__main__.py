"""Command-line interface for Kumite scoring.

``kumite-score resolve FILE`` resolves a stored match offline.
``kumite-score live`` opens an interactive scoring console, either on an
in-memory backend seeded from a match file or against the tournament
backend's REST API.
"""

# Kumite Scoring
# Copyright (C) 2025  Kumite Scoring developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory

from kumitescoring.console.commands import (
    ACTION_WORDS,
    COMMANDS,
    LiveConsole,
    create_offline_session,
    load_match_file,
    resolve_match_file,
)
from kumitescoring.constants import DEFAULT_API_TIMEOUT
from kumitescoring.exceptions import KumiteScoringException
from kumitescoring.models.scoring import ScoringConfig
from kumitescoring.scoring import ScoringSession
from kumitescoring.services import LocalPushChannel, create_http_services
from kumitescoring.utils import set_log_level, setup_logger
from kumitescoring.utils.api_adapters import match_api_to_match

logger = setup_logger(__name__)


def create_completer(session: ScoringSession) -> NestedCompleter:
    """Build tab completion for commands, judges, sides and actions."""
    actions = {word: None for word in ACTION_WORDS}
    sides = {side: actions for side in ("aka", "ao")}
    judges = {judge_id: sides for judge_id in session.match.judge_ids}
    options = {name: None for name in COMMANDS}
    options["score"] = judges
    # Commands work with or without a leading "/"
    options.update({f"/{name}": value for name, value in list(options.items())})
    return NestedCompleter.from_nested_dict(options)


def run_interactive(console: LiveConsole) -> int:
    """Read commands until ``quit`` or end of input."""
    prompt = PromptSession(
        history=InMemoryHistory(), completer=create_completer(console.session)
    )
    print(console.session.scoreboard().render())
    print("Type 'help' for commands.")
    while not console.finished:
        try:
            line = prompt.prompt("kumite> ")
        except KeyboardInterrupt:
            continue
        except EOFError:
            break
        reply = console.execute(line)
        if reply:
            print(reply)
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    scoreboard = resolve_match_file(Path(args.file))
    if args.json:
        print(json.dumps(scoreboard.to_dict(), indent=2))
    else:
        print(scoreboard.render())
    return 0


def cmd_live(args: argparse.Namespace) -> int:
    if args.api_url or args.match_id:
        if not args.match_id:
            print("Error: --match-id is required with --api-url", file=sys.stderr)
            return 1
        services = create_http_services(
            base_url=args.api_url, token=args.token, timeout=args.timeout
        )
        with services["client"]:
            match = match_api_to_match(
                services["match_service"].get_match(args.match_id)
            )
            config = (
                load_match_file(Path(args.file))[2] if args.file else ScoringConfig()
            )
            session = ScoringSession(
                match,
                services["score_storage"],
                services["match_service"],
                config=config,
            )
            session.load()
            return run_interactive(LiveConsole(session))

    if not args.file:
        print("Error: give a match FILE or --api-url/--match-id", file=sys.stderr)
        return 1
    match, entries, config = load_match_file(Path(args.file))
    channel = LocalPushChannel(autoconnect=True)
    session = create_offline_session(match, entries, config, push_channel=channel)
    try:
        return run_interactive(LiveConsole(session))
    finally:
        session.detach()
        channel.disconnect()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kumite-score",
        description="Live scoring and winner determination for Kumite matches",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve the winner of a match file"
    )
    resolve_parser.add_argument("file", help="Match file (JSON)")
    resolve_parser.add_argument(
        "--json", action="store_true", help="Print the scoreboard as JSON"
    )
    resolve_parser.set_defaults(func=cmd_resolve)

    live_parser = subparsers.add_parser("live", help="Interactive scoring console")
    live_parser.add_argument("file", nargs="?", help="Match file (JSON)")
    live_parser.add_argument("--api-url", help="Tournament backend base URL")
    live_parser.add_argument("--match-id", help="Match to score on the backend")
    live_parser.add_argument("--token", help="Bearer token for the backend")
    live_parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_API_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {DEFAULT_API_TIMEOUT})",
    )
    live_parser.set_defaults(func=cmd_live)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)
    try:
        return args.func(args)
    except KumiteScoringException as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
