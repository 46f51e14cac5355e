"""Tests for notes and speeches, which share one set of routes"""

import asyncio
import pytest
from sqlalchemy import select

from lexcase.database import Database
from lexcase.models import Note, Speech

ENTRY_KINDS = [
    pytest.param(("/notes", "Note", Note), id="notes"),
    pytest.param(("/speeches", "Speech", Speech), id="speeches"),
]


@pytest.fixture(params=ENTRY_KINDS)
def kind(request):
    prefix, label, model = request.param
    return prefix, label, model


def _create(client, prefix, headers, case_id, title="Opening", content="May it please the court"):
    return client.post(
        prefix,
        json={"case_id": case_id, "title": title, "content": content},
        headers=headers,
    )


def test_create_and_list(client, amy, create_case, kind):
    """Test creating an entry and listing it with its author"""
    prefix, label, _ = kind
    case = create_case(amy)

    response = _create(client, prefix, amy, case["id"])
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == f"{label} created successfully"
    entry = body["data"]
    assert entry["case_id"] == case["id"]
    assert entry["author"]["name"] == "Amy"
    assert entry["author"]["email"] == "amy@x.com"
    assert entry["created_by"] == entry["author"]["id"]

    response = client.get(f"{prefix}/case/{case['id']}", headers=amy)
    assert response.status_code == 200
    assert [e["id"] for e in response.json()["data"]] == [entry["id"]]


def test_list_most_recently_updated_first(client, amy, create_case, kind):
    prefix, _, _ = kind
    case = create_case(amy)
    first = _create(client, prefix, amy, case["id"], title="First").json()["data"]
    second = _create(client, prefix, amy, case["id"], title="Second").json()["data"]

    listed = client.get(f"{prefix}/case/{case['id']}", headers=amy).json()["data"]
    assert [e["id"] for e in listed] == [second["id"], first["id"]]

    # Touching the older entry moves it to the front
    client.put(f"{prefix}/{first['id']}", json={"content": "Revised"}, headers=amy)
    listed = client.get(f"{prefix}/case/{case['id']}", headers=amy).json()["data"]
    assert [e["id"] for e in listed] == [first["id"], second["id"]]


def test_get_and_update(client, amy, create_case, kind):
    prefix, label, _ = kind
    case = create_case(amy)
    entry = _create(client, prefix, amy, case["id"]).json()["data"]

    response = client.get(f"{prefix}/{entry['id']}", headers=amy)
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Opening"

    response = client.put(f"{prefix}/{entry['id']}", json={"title": "Closing"}, headers=amy)
    assert response.status_code == 200
    assert response.json()["message"] == f"{label} updated successfully"
    assert response.json()["data"]["title"] == "Closing"
    assert response.json()["data"]["content"] == "May it please the court"


@pytest.mark.parametrize(
    "payload,message",
    [
        ({"title": "T", "content": "C"}, "Case ID is required"),
        ({"case_id": " ", "title": "T", "content": "C"}, "Case ID is required"),
        ({"case_id": "x", "content": "C"}, "Title is required"),
        ({"case_id": "x", "title": "T", "content": ""}, "Content is required"),
    ],
)
def test_create_validation(client, amy, kind, payload, message):
    prefix, _, _ = kind

    response = client.post(prefix, json=payload, headers=amy)
    assert response.status_code == 400
    assert response.json()["message"] == message


def test_update_blank_title(client, amy, create_case, kind):
    prefix, _, _ = kind
    case = create_case(amy)
    entry = _create(client, prefix, amy, case["id"]).json()["data"]

    response = client.put(f"{prefix}/{entry['id']}", json={"title": ""}, headers=amy)
    assert response.status_code == 400
    assert response.json()["message"] == "Title cannot be empty"


def test_create_on_unknown_case(client, amy, kind):
    prefix, _, _ = kind

    response = _create(client, prefix, amy, "no-such-case")
    assert response.status_code == 404
    assert response.json()["message"] == "Case not found"


def test_cannot_move_or_reassign(client, amy, create_case, kind):
    """Test that an entry's case and author are fixed after creation"""
    prefix, label, _ = kind
    case = create_case(amy, case_number="C-1")
    other_case = create_case(amy, case_number="C-2")
    entry = _create(client, prefix, amy, case["id"]).json()["data"]

    response = client.put(f"{prefix}/{entry['id']}", json={"case_id": other_case["id"]}, headers=amy)
    assert response.status_code == 403
    assert response.json()["message"] == f"{label} cannot be moved to another case"

    response = client.put(f"{prefix}/{entry['id']}", json={"created_by": "someone-else"}, headers=amy)
    assert response.status_code == 403
    assert response.json()["message"] == f"{label} author cannot be changed"

    # Repeating the current values is allowed
    response = client.put(
        f"{prefix}/{entry['id']}",
        json={"case_id": case["id"], "created_by": entry["created_by"], "title": "Same owner"},
        headers=amy,
    )
    assert response.status_code == 200
    assert response.json()["data"]["case_id"] == case["id"]


def test_other_lawyer_cannot_touch_entries(client, amy, bob, create_case, kind):
    """Test that entries of another lawyer's case behave as if they did not exist"""
    prefix, label, _ = kind
    case = create_case(amy)
    entry = _create(client, prefix, amy, case["id"]).json()["data"]

    response = client.get(f"{prefix}/case/{case['id']}", headers=bob)
    assert response.status_code == 404
    assert response.json()["message"] == "Case not found"

    response = client.get(f"{prefix}/{entry['id']}", headers=bob)
    assert response.status_code == 404
    assert response.json()["message"] == f"{label} not found"

    assert client.put(f"{prefix}/{entry['id']}", json={"title": "X"}, headers=bob).status_code == 404
    assert client.delete(f"{prefix}/{entry['id']}", headers=bob).status_code == 404

    # Bob can't attach his own entries to Amy's case either
    assert _create(client, prefix, bob, case["id"]).status_code == 404

    response = client.get(f"{prefix}/{entry['id']}", headers=amy)
    assert response.json()["data"]["title"] == "Opening"


def test_delete_twice(client, amy, create_case, kind):
    prefix, label, _ = kind
    case = create_case(amy)
    entry = _create(client, prefix, amy, case["id"]).json()["data"]

    response = client.delete(f"{prefix}/{entry['id']}", headers=amy)
    assert response.status_code == 200
    assert response.json()["message"] == f"{label} deleted successfully"

    assert client.delete(f"{prefix}/{entry['id']}", headers=amy).status_code == 404


def test_entries_survive_case_delete(client, amy, create_case, test_settings, kind):
    """Test that deleting a case without cascade orphans its entries"""
    prefix, _, model = kind
    case = create_case(amy)
    entry = _create(client, prefix, amy, case["id"]).json()["data"]

    assert client.delete(f"/cases/{case['id']}", headers=amy).status_code == 200

    # Unreachable through the API once the owning case is gone
    assert client.get(f"{prefix}/{entry['id']}", headers=amy).status_code == 404
    assert client.get(f"{prefix}/case/{case['id']}", headers=amy).status_code == 404

    async def load_entry():
        database = Database(test_settings.DATABASE_URL)
        database.connect()
        try:
            async with database.session() as session:
                result = await session.execute(select(model).where(model.id == entry["id"]))
                return result.scalar_one_or_none()
        finally:
            await database.dispose()

    orphan = asyncio.run(load_entry())
    assert orphan is not None
    assert orphan.case_id == case["id"]
