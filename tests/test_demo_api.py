from datetime import datetime, timedelta, timezone

import pytest

from app.core.config import settings
from app.models.business import Business
from app.models.call import Call
from app.models.demo_session import DemoSession
from app.models.patient import Patient
from app.services.demo import demo_service, DemoUnavailable, as_utc


@pytest.fixture
def demo(client, demo_business):
    response = client.post("/api/demo/create", json={"email": "visitor@prospect.com"})
    assert response.status_code == 200
    return response.json()


def _expire(db, session_token):
    session = db.query(DemoSession).filter_by(session_token=session_token).one()
    session.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()
    return session


def test_create_session(demo, db):
    assert demo["success"] is True
    assert demo["demo_link"] == f"http://localhost:3000/demo/{demo['session_token']}"

    session = db.query(DemoSession).filter_by(session_token=demo["session_token"]).one()
    assert session.email == "visitor@prospect.com"
    assert session.is_active is True
    assert session.demo_business_id == settings.DEMO_BUSINESS_ID

    remaining = as_utc(session.expires_at) - datetime.now(timezone.utc)
    assert timedelta(minutes=59) < remaining <= timedelta(minutes=60)


def test_create_session_marks_demo_business(demo, db):
    business = db.get(Business, settings.DEMO_BUSINESS_ID)
    db.refresh(business)
    assert business.is_demo is True
    assert business.to_number == settings.DEMO_PHONE_NUMBER
    assert business.demo_phone_number == settings.DEMO_PHONE_NUMBER


def test_create_while_busy(client, demo):
    response = client.post("/api/demo/create", json={})

    assert response.status_code == 429
    body = response.json()
    assert body["available"] is False
    assert body["next_available_in"] == 60
    assert "60 minutes" in body["message"]


def test_create_after_previous_expired(client, db, demo):
    _expire(db, demo["session_token"])

    response = client.post("/api/demo/create", json={})
    assert response.status_code == 200
    assert response.json()["session_token"] != demo["session_token"]


def test_create_without_demo_business(client):
    response = client.post("/api/demo/create", json={})
    assert response.status_code == 500


def test_wait_time_rounds_up(db, demo_business):
    now = datetime.now(timezone.utc)
    demo_service.create_session(db, now=now)

    with pytest.raises(DemoUnavailable) as exc_info:
        demo_service.create_session(db, now=now + timedelta(minutes=58, seconds=30))
    assert exc_info.value.next_available_in == 2


def test_get_session(client, demo):
    response = client.get(f"/api/demo/{demo['session_token']}")

    assert response.status_code == 200
    session = response.json()["session"]
    assert session["id"] == demo["session_id"]
    assert session["is_expired"] is False
    assert 59 <= session["remaining_minutes"] <= 60
    assert session["remaining_seconds"] > 3500
    assert session["queue_position"] is None


def test_get_expired_session(client, db, demo):
    _expire(db, demo["session_token"])

    session = client.get(f"/api/demo/{demo['session_token']}").json()["session"]
    assert session["is_expired"] is True
    assert session["remaining_seconds"] == 0


def test_get_unknown_session(client):
    assert client.get("/api/demo/not-a-token").status_code == 404


def test_queued_session_reports_position(client, demo):
    response = client.put(f"/api/demo/{demo['session_token']}", json={"is_active": False})
    assert response.status_code == 200
    assert response.json()["session"]["is_active"] is False

    session = client.get(f"/api/demo/{demo['session_token']}").json()["session"]
    assert session["queue_position"] == 1
    assert session["active_session_expires_at"] is None


def test_update_session_contact(client, demo):
    response = client.put(f"/api/demo/{demo['session_token']}", json={"phone": "+12155550123"})

    body = response.json()
    assert body["success"] is True
    assert body["session"]["phone"] == "+12155550123"
    assert body["session"]["email"] == "visitor@prospect.com"


def test_save_demo_business(client, demo):
    response = client.post(f"/api/demo/{demo['session_token']}/business", json={
        "name": "Glow Aesthetics",
        "categories": ["Injectables", "Facials"],
        "hours": {"tue-sat": "10am-7pm"},
    })

    assert response.status_code == 200
    business = response.json()["business"]
    assert business["id"] == settings.DEMO_BUSINESS_ID
    assert business["name"] == "Glow Aesthetics"
    assert business["vertical"] == "medspa"
    assert business["categories"] == ["Injectables", "Facials"]
    assert business["hours"] == {"tue-sat": "10am-7pm"}
    assert business["is_active"] is True
    assert business["to_number"] == settings.DEMO_PHONE_NUMBER


def test_save_demo_business_unknown_session(client, demo_business):
    response = client.post("/api/demo/not-a-token/business", json={"name": "Nope"})
    assert response.status_code == 404


def _add_patients(db, business_id, count):
    now = datetime.now(timezone.utc)
    for i in range(count):
        db.add(Patient(
            business_id=business_id,
            name=f"Patient {i}",
            phone=f"+1215555000{i}",
            last_call_date=now - timedelta(hours=i),
        ))
    db.add(Patient(business_id=business_id, name="Never Called"))
    db.commit()


def test_demo_patients_latest_first(client, db, demo):
    _add_patients(db, settings.DEMO_BUSINESS_ID, 6)

    body = client.get(f"/api/demo/{demo['session_token']}/patients").json()

    assert body["count"] == 5
    assert [p["name"] for p in body["patients"]] == [f"Patient {i}" for i in range(5)]


def test_demo_patients_only_from_demo_business(client, db, demo, business):
    _add_patients(db, business.id, 2)

    body = client.get(f"/api/demo/{demo['session_token']}/patients").json()
    assert body == {"patients": [], "count": 0}


def test_cleanup_refused_while_running(client, demo):
    response = client.post(f"/api/demo/{demo['session_token']}/cleanup")
    assert response.status_code == 400


def test_cleanup_after_expiry(client, db, demo, business):
    _add_patients(db, settings.DEMO_BUSINESS_ID, 3)
    _add_patients(db, business.id, 1)
    db.add(Call(business_id=settings.DEMO_BUSINESS_ID, call_id="call_demo_1", status="ended"))
    db.commit()
    _expire(db, demo["session_token"])

    response = client.post(f"/api/demo/{demo['session_token']}/cleanup")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["deleted"] == {"calls": 1, "patients": 4}

    assert db.query(Patient).filter_by(business_id=settings.DEMO_BUSINESS_ID).count() == 0
    assert db.query(Patient).filter_by(business_id=business.id).count() == 2
    session = db.query(DemoSession).filter_by(session_token=demo["session_token"]).one()
    assert session.is_active is False


def test_cleanup_unknown_session(client):
    assert client.post("/api/demo/not-a-token/cleanup").status_code == 404
