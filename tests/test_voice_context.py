import pytest

from app.models.program import Program


@pytest.fixture
def programs(db, business):
    ortho = Program(
        business_id=business.id,
        name="Bright Smile Orthodontics",
        extension="2",
        address="14 Market St, Philadelphia, PA",
        services=["Braces", "Aligners"],
        insurances=["Delta Dental", "Aetna"],
        description="Orthodontic care for kids and adults",
        settings={"transfer_number": "+15551230002"},
    )
    pediatric = Program(
        business_id=business.id,
        name="Little Smiles",
        extension="3",
    )
    db.add_all([ortho, pediatric])
    db.commit()
    return {"ortho": ortho, "pediatric": pediatric}


@pytest.mark.parametrize("payload", [
    {"to_number": "+15551234567"},
    {"phoneNumber": {"number": "+15551234567"}},
    {"phoneNumber": "+15551234567"},
    {"number": "+15551234567"},
    {"arguments": {"to_number": "+15551234567"}},
    {"arguments": {"phoneNumber": {"number": "+15551234567"}}},
    {"to_number": "  +15551234567\n"},
])
def test_vapi_context_accepts_provider_shapes(client, business, payload):
    response = client.post("/api/vapi-context", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == business.id
    assert body["name"] == "Bright Smile Dental"
    assert body["to_number"] == "+15551234567"
    assert body["insurances"] is None
    assert response.headers["access-control-allow-origin"] == "*"


def test_vapi_context_raw_string_body(client, business):
    response = client.post(
        "/api/vapi-context",
        content="+15551234567",
        headers={"Content-Type": "text/plain"},
    )

    assert response.status_code == 200
    assert response.json()["id"] == business.id


def test_vapi_context_missing_number(client):
    response = client.post("/api/vapi-context", json={"call": {"id": "abc"}})

    assert response.status_code == 400
    assert response.json()["received"] == {"call": {"id": "abc"}}


def test_vapi_context_unknown_number(client, business):
    response = client.post("/api/vapi-context", json={"to_number": "+15550000000"})

    assert response.status_code == 404
    assert response.json()["to_number"] == "+15550000000"


def test_vapi_context_is_exact_match(client, business):
    response = client.post("/api/vapi-context", json={"to_number": "5551234567"})
    assert response.status_code == 404


def test_vapi_context_health_and_preflight(client):
    health = client.get("/api/vapi-context")
    assert health.json()["status"] == "ok"

    preflight = client.options("/api/vapi-context")
    assert preflight.status_code == 200
    assert "OPTIONS" in preflight.headers["access-control-allow-methods"]


def test_business_context_without_program(client, business, programs):
    response = client.get("/api/business-context", params={"to_number": "+15551234567"})

    assert response.status_code == 200
    assert response.headers["x-response-time"].endswith("ms")
    body = response.json()
    assert body["business_id"] == business.id
    assert body["business_name"] == "Bright Smile Dental"
    assert body["business_phone"] == "+15551234567"
    assert body["services"] == ["Cleaning", "Whitening", "Implants"]
    assert body["insurances"] is None
    assert "program_id" not in body
    assert "extension" not in body


@pytest.mark.parametrize("number", ["5551234567", "15551234567", "+1 (555) 123-4567"])
def test_business_context_tries_number_formats(client, business, number):
    response = client.get("/api/business-context", params={"to_number": number})

    assert response.status_code == 200
    assert response.json()["business_id"] == business.id


def test_business_context_program_by_extension(client, business, programs):
    response = client.get("/api/business-context", params={"to_number": "+15551234567", "extension": "2"})

    body = response.json()
    ortho = programs["ortho"]
    assert body["business_id"] == business.id
    assert body["business_name"] == "Bright Smile Orthodontics"
    assert body["program_id"] == ortho.id
    assert body["extension"] == "2"
    assert body["address"] == "14 Market St, Philadelphia, PA"
    assert body["services"] == ["Braces", "Aligners"]
    assert body["insurances"] == ["Delta Dental", "Aetna"]
    assert body["program_description"] == "Orthodontic care for kids and adults"
    assert body["program_settings"] == {"transfer_number": "+15551230002"}
    # not overridden by the program
    assert body["hours"] == {"mon-fri": "8am-5pm"}
    assert body["staff"] == [{"name": "Dr. Rivera", "role": "Dentist"}]


def test_business_context_program_inherits_business_fields(client, business, programs):
    body = client.get(
        "/api/business-context", params={"to_number": "+15551234567", "extension": "3"}
    ).json()

    assert body["business_name"] == "Little Smiles"
    assert body["services"] == ["Cleaning", "Whitening", "Implants"]
    assert body["insurances"] is None
    assert "program_description" not in body
    assert "program_settings" not in body


def test_business_context_program_id_wins_over_extension(client, business, programs):
    body = client.get("/api/business-context", params={
        "to_number": "+15551234567",
        "extension": "2",
        "program_id": programs["pediatric"].id,
    }).json()

    assert body["program_name"] == "Little Smiles"


def test_business_context_unknown_extension_uses_business(client, business, programs):
    body = client.get(
        "/api/business-context", params={"to_number": "+15551234567", "extension": "9"}
    ).json()

    assert body["business_name"] == "Bright Smile Dental"
    assert "program_id" not in body


def test_business_context_missing_number(client):
    response = client.get("/api/business-context")
    assert response.status_code == 400


def test_business_context_unknown_number(client, business):
    response = client.get("/api/business-context", params={"to_number": "+15550000000"})
    assert response.status_code == 404


def test_business_context_from_tool_call(client, business, programs):
    response = client.post("/api/business-context", json={
        "arguments": {"to_number": "+15551234567", "extension": "2"},
    })

    assert response.status_code == 200
    assert response.json()["program_id"] == programs["ortho"].id
    assert response.headers["access-control-allow-origin"] == "*"


def test_business_context_program_id_camel_case(client, business, programs):
    response = client.post("/api/business-context", json={
        "to_number": "+15551234567",
        "programId": programs["pediatric"].id,
    })
    assert response.json()["program_name"] == "Little Smiles"


def test_vapi_context_bare_digits_body(client, business):
    # exact match only, so the national form misses
    response = client.post("/api/vapi-context", content="15551234567")
    assert response.status_code == 404
    assert response.json()["to_number"] == "15551234567"


def test_business_context_empty_program_insurances_are_null(client, db, business):
    program = Program(business_id=business.id, name="Walk-in Clinic", extension="4", insurances=[])
    db.add(program)
    db.commit()

    body = client.get(
        "/api/business-context", params={"to_number": "+15551234567", "extension": "4"}
    ).json()

    assert body["program_id"] == program.id
    assert body["insurances"] is None
