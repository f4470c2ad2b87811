import base64
import json
from urllib.parse import urlparse, parse_qs

import httpx
import pytest

from app.core.config import settings
from app.models.calendar_connection import CalendarConnection
from app.models.program import Program
from app.services.calendar import (
    calendar_service,
    encode_state,
    decode_state,
    CalendarConnectError,
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
)


def google_stub(token_status=200, userinfo_status=200, calendar_id="clinic@brightsmile.com"):
    """Transport answering the three Google calls made during the code exchange."""
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url == GOOGLE_TOKEN_URL:
            return httpx.Response(token_status, json={
                "access_token": "ya29.access",
                "refresh_token": "1//refresh",
                "expires_in": 3599,
                "scope": "https://www.googleapis.com/auth/calendar",
            })
        if url == GOOGLE_USERINFO_URL:
            return httpx.Response(userinfo_status, json={"email": "calendar@brightsmile.com"})
        return httpx.Response(200, json={"id": calendar_id})

    return httpx.MockTransport(handler)


def redirect_target(response):
    parsed = urlparse(response.headers["location"])
    return parsed.path, {k: v[0] for k, v in parse_qs(parsed.query).items()}


def test_state_round_trip():
    state = encode_state("biz-1", "prog-9")

    decoded = decode_state(state)
    assert decoded.business_id == "biz-1"
    assert decoded.program_id == "prog-9"
    assert json.loads(base64.b64decode(state)) == {"business_id": "biz-1", "program_id": "prog-9"}


@pytest.mark.parametrize("state", ["not base64!", base64.b64encode(b"[1, 2]").decode(), ""])
def test_decode_state_rejects_garbage(state):
    with pytest.raises(CalendarConnectError) as exc_info:
        decode_state(state)
    assert exc_info.value.code == "invalid_state"


def test_connect_returns_consent_url(client, business):
    response = client.get("/api/calendar/connect", params={"business_id": business.id})

    assert response.status_code == 200
    parsed = urlparse(response.json()["auth_url"])
    params = parse_qs(parsed.query)
    assert parsed.netloc == "accounts.google.com"
    assert params["client_id"] == ["test-client-id"]
    assert params["redirect_uri"] == ["http://localhost:3000/api/calendar/callback"]
    assert params["access_type"] == ["offline"]
    assert params["prompt"] == ["consent"]
    assert decode_state(params["state"][0]).business_id == business.id


def test_connect_requires_business_id(client):
    response = client.get("/api/calendar/connect")
    assert response.status_code == 400


def test_connect_without_google_credentials(client, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_CLIENT_ID", None)

    response = client.get("/api/calendar/connect", params={"business_id": "biz-1"})
    assert response.status_code == 500


def test_callback_reports_provider_error(client):
    response = client.get("/api/calendar/callback", params={"error": "access_denied"}, follow_redirects=False)

    assert response.status_code == 307
    assert redirect_target(response) == ("/settings", {"calendar_error": "access_denied"})


def test_callback_missing_params(client):
    response = client.get("/api/calendar/callback", params={"code": "abc"}, follow_redirects=False)
    assert redirect_target(response) == ("/settings", {"calendar_error": "missing_params"})


def test_callback_invalid_state(client):
    response = client.get(
        "/api/calendar/callback", params={"code": "abc", "state": "%%%"}, follow_redirects=False
    )
    assert redirect_target(response) == ("/settings", {"calendar_error": "invalid_state"})


def test_callback_stores_connection(client, db, business, monkeypatch):
    monkeypatch.setattr(calendar_service, "transport", google_stub())

    response = client.get("/api/calendar/callback", params={
        "code": "4/auth-code",
        "state": encode_state(business.id),
    }, follow_redirects=False)

    assert response.status_code == 307
    assert redirect_target(response) == ("/settings", {"calendar_connected": "true"})

    connection = db.query(CalendarConnection).filter_by(business_id=business.id).one()
    assert connection.program_id is None
    assert connection.calendar_id == "clinic@brightsmile.com"
    assert connection.email == "calendar@brightsmile.com"
    assert connection.access_token == "ya29.access"
    assert connection.refresh_token == "1//refresh"
    assert connection.sync_status == "pending"
    assert connection.is_active is True


def test_callback_reconnect_updates_existing_row(client, db, business, monkeypatch):
    monkeypatch.setattr(calendar_service, "transport", google_stub())
    params = {"code": "4/auth-code", "state": encode_state(business.id)}

    client.get("/api/calendar/callback", params=params, follow_redirects=False)
    client.get("/api/calendar/callback", params=params, follow_redirects=False)

    assert db.query(CalendarConnection).filter_by(business_id=business.id).count() == 1


def test_callback_for_program_goes_to_programs_page(client, db, business, monkeypatch):
    program = Program(business_id=business.id, name="Orthodontics", extension="2")
    db.add(program)
    db.commit()
    monkeypatch.setattr(calendar_service, "transport", google_stub())

    response = client.get("/api/calendar/callback", params={
        "code": "4/auth-code",
        "state": encode_state(business.id, program.id),
    }, follow_redirects=False)

    assert redirect_target(response) == (
        "/programs", {"calendar_connected": "true", "program_id": program.id}
    )
    connection = db.query(CalendarConnection).filter_by(program_id=program.id).one()
    assert connection.business_id == business.id


def test_callback_falls_back_to_primary_calendar(client, db, business, monkeypatch):
    monkeypatch.setattr(calendar_service, "transport", google_stub(calendar_id=None))

    client.get("/api/calendar/callback", params={
        "code": "4/auth-code",
        "state": encode_state(business.id),
    }, follow_redirects=False)

    assert db.query(CalendarConnection).one().calendar_id == "primary"


def test_callback_token_exchange_failure(client, db, business, monkeypatch):
    monkeypatch.setattr(calendar_service, "transport", google_stub(token_status=400))

    response = client.get("/api/calendar/callback", params={
        "code": "bad-code",
        "state": encode_state(business.id),
    }, follow_redirects=False)

    assert redirect_target(response) == ("/settings", {"calendar_error": "token_exchange_failed"})
    assert db.query(CalendarConnection).count() == 0


def test_callback_user_info_failure(client, business, monkeypatch):
    monkeypatch.setattr(calendar_service, "transport", google_stub(userinfo_status=401))

    response = client.get("/api/calendar/callback", params={
        "code": "4/auth-code",
        "state": encode_state(business.id),
    }, follow_redirects=False)

    assert redirect_target(response) == ("/settings", {"calendar_error": "user_info_failed"})


def test_callback_network_failure(client, business, monkeypatch):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    monkeypatch.setattr(calendar_service, "transport", httpx.MockTransport(unreachable))

    response = client.get("/api/calendar/callback", params={
        "code": "4/auth-code",
        "state": encode_state(business.id),
    }, follow_redirects=False)

    assert redirect_target(response) == ("/settings", {"calendar_error": "unexpected_error"})


def html_stub(broken_url):
    """Transport that answers one Google call with an HTML page instead of JSON."""
    json_stub = google_stub()

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == broken_url:
            return httpx.Response(200, text="<html><body>Service Unavailable</body></html>")
        return json_stub.handle_request(request)

    return httpx.MockTransport(handler)


@pytest.mark.parametrize("broken_url, error", [
    (GOOGLE_TOKEN_URL, "token_exchange_failed"),
    (GOOGLE_USERINFO_URL, "user_info_failed"),
])
def test_callback_non_json_google_response(client, db, business, monkeypatch, broken_url, error):
    monkeypatch.setattr(calendar_service, "transport", html_stub(broken_url))

    response = client.get("/api/calendar/callback", params={
        "code": "4/auth-code",
        "state": encode_state(business.id),
    }, follow_redirects=False)

    assert redirect_target(response) == ("/settings", {"calendar_error": error})
    assert db.query(CalendarConnection).count() == 0
