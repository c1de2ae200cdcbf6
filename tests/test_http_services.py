import json

import httpx
import pytest

from kumitescoring.exceptions import APIException, NetworkException
from kumitescoring.models.match import Judge, Match, Participant
from kumitescoring.scoring import ScoringSession
from kumitescoring.services import BackendClient, HttpMatchService, HttpScoreStorage

BASE_URL = "http://backend.test/api"


def _build_client(handler, token="secret"):
    transport = httpx.MockTransport(handler)
    return BackendClient(
        base_url=BASE_URL, token=token, client=httpx.Client(transport=transport)
    )


def test_envelope_is_unwrapped_and_token_sent():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"success": True, "data": [{"yuko": 1}]})

    with _build_client(handler) as client:
        records = HttpScoreStorage(client).get_match_scores("m1")

    assert records == [{"yuko": 1}]
    assert seen["auth"] == "Bearer secret"
    assert seen["url"] == f"{BASE_URL}/scores?match_id=m1"


def test_submit_posts_the_payload():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            201, json={"success": True, "data": {"_id": "s1", **seen["body"]}}
        )

    client = _build_client(handler)
    stored = HttpScoreStorage(client).submit_score({"match_id": "m1", "ippon": 1})

    assert seen["method"] == "POST"
    assert seen["body"] == {"match_id": "m1", "ippon": 1}
    assert stored["_id"] == "s1"


def test_update_match_puts_to_the_match_resource():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        return httpx.Response(200, json={"success": True, "data": {"_id": "m1"}})

    HttpMatchService(_build_client(handler)).update_match("m1", {"status": "Completed"})

    assert seen == {"method": "PUT", "path": "/api/matches/m1"}


def test_error_status_raises_api_exception():
    def handler(request):
        return httpx.Response(404, json={"success": False, "message": "Match not found"})

    with pytest.raises(APIException) as exc_info:
        HttpMatchService(_build_client(handler)).get_match("missing")

    assert exc_info.value.status_code == 404
    assert "Match not found" in str(exc_info.value)


def test_unsuccessful_envelope_raises_api_exception():
    def handler(request):
        return httpx.Response(200, json={"success": False, "message": "Invalid judge"})

    with pytest.raises(APIException):
        HttpScoreStorage(_build_client(handler)).submit_score({})


def test_malformed_scores_response_raises_api_exception():
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": {"not": "a list"}})

    with pytest.raises(APIException):
        HttpScoreStorage(_build_client(handler)).get_match_scores("m1")


def test_transport_error_raises_network_exception():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkException) as exc_info:
        HttpScoreStorage(_build_client(handler)).get_match_scores("m1")

    assert isinstance(exc_info.value, APIException)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_no_authorization_header_without_token(monkeypatch):
    monkeypatch.delenv("KUMITE_API_TOKEN", raising=False)
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"success": True, "data": []})

    HttpScoreStorage(_build_client(handler, token=None)).get_match_scores("m1")

    assert seen["auth"] is None


def test_session_over_http_reloads_stored_scores():
    stored = []

    def handler(request):
        if request.method == "POST":
            record = {"_id": f"s{len(stored) + 1}", **json.loads(request.content)}
            stored[:] = [
                r
                for r in stored
                if (r["judge_id"], r["participant_id"])
                != (record["judge_id"], record["participant_id"])
            ] + [record]
            return httpx.Response(201, json={"success": True, "data": record})
        if request.url.path == "/api/scores":
            return httpx.Response(200, json={"success": True, "data": stored})
        return httpx.Response(200, json={"success": True, "data": {}})

    client = _build_client(handler)
    match = Match("m1", [Participant("aka"), Participant("ao")], [Judge("j1")])
    session = ScoringSession(match, HttpScoreStorage(client), HttpMatchService(client))

    session.record("j1", "aka", "wazaAri")
    session.record("j1", "aka", "penalty:2:keikoku")
    session.load()

    entry = session.entry("j1", "aka")
    assert entry.waza_ari == 1
    assert entry.category_1.keikoku == 1
    assert entry.first_score_time is not None
    assert session.outcome.winner_id == "aka"
