"""
Tests for driver, vehicle and route catalogs.
"""
import pytest


@pytest.mark.parametrize("path, body, key", [
    ("/api/drivers", {"name": "Zeca", "phone": "555-0101"}, "name"),
    ("/api/vehicles", {"model": "Sprinter", "plate": "ABC1D23"}, "model"),
    ("/api/routes", {"name": "Capital - Coast"}, "name"),
])
def test_admin_creates_then_updates_entry(client, admin_headers, path, body, key):
    response = client.post(path, json=body, headers=admin_headers)
    assert response.status_code == 200
    created = response.json()["data"]
    assert created[key] == body[key]

    response = client.post(path, json={**body, "id": created["id"], key: "Renamed"}, headers=admin_headers)
    assert response.status_code == 200

    entries = client.get(path, headers=admin_headers).json()["data"]
    assert [e[key] for e in entries] == ["Renamed"]


def test_listing_is_sorted_and_open_to_members(client, admin_headers, member):
    for name in ("Rui", "Ana", "Beto"):
        client.post("/api/drivers", json={"name": name}, headers=admin_headers)
    alice = member("alice")
    response = client.get("/api/drivers", headers=alice)
    assert response.status_code == 200
    assert [d["name"] for d in response.json()["data"]] == ["Ana", "Beto", "Rui"]


def test_members_cannot_save_entries(client, member):
    alice = member("alice")
    assert client.post("/api/routes", json={"name": "Shortcut"}, headers=alice).status_code == 403


def test_update_missing_entry(client, admin_headers):
    response = client.post("/api/vehicles", json={"id": 404, "model": "Ghost"}, headers=admin_headers)
    assert response.status_code == 404


def test_catalog_requires_authentication(client):
    assert client.get("/api/routes").status_code == 401
