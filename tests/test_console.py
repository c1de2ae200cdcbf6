import json

import pytest

from kumitescoring.console import LiveConsole, create_offline_session, load_match_file
from kumitescoring.console.__main__ import create_completer, main
from kumitescoring.console.commands import COMMANDS
from kumitescoring.exceptions import InvalidConfigurationException
from kumitescoring.models.enums import MatchStatus
from kumitescoring.services import LocalPushChannel


def _write_match_file(tmp_path, scores=(), config=None):
    data = {
        "match": {
            "match_id": "m1",
            "match_name": "Final",
            "status": "In Progress",
            "participants": [
                {"participant_id": "aka", "name": "Red Fighter"},
                {"participant_id": "ao", "name": "Blue Fighter"},
            ],
            "judges": ["j1", "j2"],
        },
        "scores": list(scores),
    }
    if config is not None:
        data["config"] = config
    path = tmp_path / "match.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _score(judge_id, participant_id, **counts):
    return {"judge_id": judge_id, "participant_id": participant_id, **counts}


def test_resolve_prints_the_scoreboard(tmp_path, capsys):
    path = _write_match_file(
        tmp_path,
        [
            _score("j1", "aka", ippon=1, scored_at="2025-05-01T10:00:05Z"),
            _score("j2", "aka", waza_ari=1, scored_at="2025-05-01T10:00:07Z"),
            _score("j1", "ao", yuko=1, scored_at="2025-05-01T10:00:01Z"),
        ],
    )

    assert main(["resolve", str(path)]) == 0

    out = capsys.readouterr().out
    assert "Final [In Progress]" in out
    assert "Red Fighter" in out
    assert "Outcome: aka by higher score" in out


def test_resolve_json_output(tmp_path, capsys):
    path = _write_match_file(
        tmp_path,
        [
            _score("j1", "aka", waza_ari=1, scored_at="2025-05-01T10:00:09Z"),
            _score("j2", "ao", yuko=2, scored_at="2025-05-01T10:00:03Z"),
        ],
    )

    assert main(["resolve", str(path), "--json"]) == 0

    board = json.loads(capsys.readouterr().out)
    assert board["outcome"] == {"winner_id": "ao", "decided_by": "first_score"}
    assert [line["final_score"] for line in board["lines"]] == [2, 2]


def test_resolve_applies_the_configured_point_gap(tmp_path, capsys):
    path = _write_match_file(
        tmp_path, [_score("j1", "aka", ippon=1)], config={"point_gap": 3}
    )

    assert main(["resolve", str(path), "--json"]) == 0

    board = json.loads(capsys.readouterr().out)
    assert board["outcome"]["decided_by"] == "point_gap"


def test_resolve_reports_unreadable_files(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert main(["resolve", str(path)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_load_match_file_rejects_invalid_config(tmp_path):
    path = _write_match_file(tmp_path, config={"point_gap": 0})

    with pytest.raises(InvalidConfigurationException):
        load_match_file(path)


def test_live_requires_a_source(capsys):
    assert main(["live"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_console_scores_and_finalizes(tmp_path):
    match, entries, config = load_match_file(_write_match_file(tmp_path))
    console = LiveConsole(create_offline_session(match, entries, config))

    console.execute("score j1 aka ippon")
    reply = console.execute("score j2 ao penalty:1:keikoku")

    assert "Outcome: aka" in reply
    assert console.execute("finalize") == "Match finalized. Winner: aka"
    assert console.session.match.status is MatchStatus.COMPLETED
    assert console.execute("score j1 ao yuko").startswith("Error:")


def test_console_reports_errors_without_raising(tmp_path):
    match, entries, config = load_match_file(_write_match_file(tmp_path))
    console = LiveConsole(create_offline_session(match, entries, config))

    assert console.execute("score j1 aka jogai").startswith("Error:")
    assert console.execute("score j9 aka yuko").startswith("Error:")
    assert console.execute("score j1 green yuko").startswith("Error:")
    assert console.execute("score j1 aka yuko x") == "Invalid delta: x"
    assert console.execute("score j1").startswith("Usage:")
    assert console.execute("finalize").startswith("Error:")
    assert console.execute("dance").startswith("Unknown command")
    assert console.execute("") == ""


def test_console_help_and_quit(tmp_path):
    match, entries, config = load_match_file(_write_match_file(tmp_path))
    console = LiveConsole(create_offline_session(match, entries, config))

    assert "penalty:2:hansokuChui" in console.execute("help")
    assert console.execute("quit") == "Bye."
    assert console.finished


def test_completer_offers_commands_with_and_without_slash(tmp_path):
    match, entries, config = load_match_file(_write_match_file(tmp_path))
    completer = create_completer(create_offline_session(match, entries, config))

    for name in COMMANDS:
        assert name in completer.options
        assert f"/{name}" in completer.options
    assert set(completer.options["score"].options) == {"j1", "j2"}


def test_slash_prefixed_commands_are_accepted(tmp_path):
    match, entries, config = load_match_file(_write_match_file(tmp_path))
    console = LiveConsole(create_offline_session(match, entries, config))

    assert "Final" in console.execute("/show")


def test_offline_session_seeds_stored_scores(tmp_path):
    path = _write_match_file(tmp_path, [_score("j2", "ao", ippon=2, keikoku=1)])
    match, entries, config = load_match_file(path)
    channel = LocalPushChannel(autoconnect=True)

    session = create_offline_session(match, entries, config, push_channel=channel)
    console = LiveConsole(session)
    console.execute("score j1 aka yuko")

    aka, ao = session.aggregates
    assert (aka.yuko, ao.ippon, ao.keikoku) == (1, 2, 1)
    assert channel.subscriber_count("m1") == 1
    assert "Blue Fighter" in console.execute("reload")


def test_finalize_uses_scores_stored_since_the_last_action(tmp_path):
    match, entries, config = load_match_file(_write_match_file(tmp_path))
    console = LiveConsole(create_offline_session(match, entries, config))
    console.execute("score j1 aka yuko")

    # Another judge's device writes straight to storage, no push channel
    console.session.ledger.storage.submit_score(
        {
            "match_id": "m1",
            "judge_id": "j2",
            "participant_id": "ao",
            "ippon": 1,
            "scored_at": "2025-05-01T10:00:20Z",
        }
    )

    assert console.execute("finalize") == "Match finalized. Winner: ao"
    assert console.session.match.winner_id == "ao"
