"""Tests for vehicle registration."""

from datetime import date

from conftest import API, register

CAMRY = {"make": "Toyota", "model": "Camry", "year": 2018, "license_plate": "UAX 123B", "mileage": 84000}


def test_vehicle_crud(client, owner_headers):
    response = client.post(f"{API}/vehicles/", json=CAMRY, headers=owner_headers)
    assert response.status_code == 201, response.text
    vehicle = response.json()
    assert vehicle["label"] == "2018 Toyota Camry (UAX 123B)"

    response = client.put(f"{API}/vehicles/{vehicle['id']}", json={"mileage": 90000, "color": ""},
                          headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["mileage"] == 90000
    assert response.json()["color"] is None

    assert client.delete(f"{API}/vehicles/{vehicle['id']}", headers=owner_headers).status_code == 204
    assert client.get(f"{API}/vehicles/{vehicle['id']}", headers=owner_headers).status_code == 404


def test_vehicles_are_listed_newest_first(client, owner_headers):
    first = client.post(f"{API}/vehicles/", json=CAMRY, headers=owner_headers).json()
    second = client.post(f"{API}/vehicles/", json={"make": "Honda", "model": "Civic", "year": 2020},
                         headers=owner_headers).json()

    listed = client.get(f"{API}/vehicles/", headers=owner_headers).json()
    assert [v["id"] for v in listed] == [second["id"], first["id"]]


def test_blank_optional_fields_become_null(client, owner_headers):
    vehicle = client.post(f"{API}/vehicles/", json={**CAMRY, "vin": "  ", "license_plate": ""},
                          headers=owner_headers).json()
    assert vehicle["vin"] is None
    assert vehicle["license_plate"] is None


def test_year_must_be_plausible(client, owner_headers):
    for year in (1899, date.today().year + 2):
        response = client.post(f"{API}/vehicles/", json={**CAMRY, "year": year}, headers=owner_headers)
        assert response.status_code == 400


def test_plate_is_unique_per_customer(client, owner_headers):
    client.post(f"{API}/vehicles/", json=CAMRY, headers=owner_headers)
    response = client.post(f"{API}/vehicles/", json=CAMRY, headers=owner_headers)
    assert response.status_code == 400

    other = register(client, "neighbour")
    assert client.post(f"{API}/vehicles/", json=CAMRY, headers=other).status_code == 201


def test_other_customers_vehicles_are_hidden(client, owner_headers):
    vehicle = client.post(f"{API}/vehicles/", json=CAMRY, headers=owner_headers).json()
    other = register(client, "neighbour")

    assert client.get(f"{API}/vehicles/", headers=other).json() == []
    assert client.get(f"{API}/vehicles/{vehicle['id']}", headers=other).status_code == 404
    assert client.delete(f"{API}/vehicles/{vehicle['id']}", headers=other).status_code == 404
