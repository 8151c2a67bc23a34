"""Tests for vehicle document uploads."""

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from conftest import API, MEDIA_DIR, register

from autoparts.routers import documents as documents_router

PDF = ("policy.pdf", b"%PDF-1.4 test policy", "application/pdf")


def add_vehicle(client, headers, plate="UAX 123B"):
    response = client.post(f"{API}/vehicles/", json={"make": "Toyota", "model": "Camry", "year": 2018,
                                                     "license_plate": plate}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def upload(client, headers, vehicle_id, file=PDF, **form):
    data = {"vehicle_id": str(vehicle_id), **form}
    return client.post(f"{API}/documents/", files={"file": file}, data=data, headers=headers)


def stored_files():
    return [p for p in MEDIA_DIR.rglob("*") if p.is_file()]


def test_upload_stores_file(client, owner_headers):
    vehicle = add_vehicle(client, owner_headers)
    expiry = (date.today() + timedelta(days=200)).isoformat()

    response = upload(client, owner_headers, vehicle["id"], type="insurance", expiry_date=expiry)
    assert response.status_code == 201, response.text
    document = response.json()

    assert document["name"] == "policy"
    assert document["type_label"] == "Motor Insurance"
    assert document["expiry_status"] == "valid"
    assert document["size"] == len(PDF[1])
    assert document["file_url"].startswith("/media/")
    assert len(stored_files()) == 1

    # the public url serves the stored bytes
    assert client.get(document["file_url"]).content == PDF[1]


def test_upload_with_explicit_name(client, owner_headers):
    vehicle = add_vehicle(client, owner_headers)
    response = upload(client, owner_headers, vehicle["id"], type="logbook", name="Logbook scan",
                      file=("scan.png", b"\x89PNG", "image/png"))
    assert response.status_code == 201
    assert response.json()["name"] == "Logbook scan"
    assert response.json()["expiry_status"] == "none"


def test_upload_rejects_bad_files(client, owner_headers, monkeypatch):
    vehicle = add_vehicle(client, owner_headers)

    response = upload(client, owner_headers, vehicle["id"], file=("run.sh", b"echo hi", "text/x-sh"))
    assert response.status_code == 400
    assert response.json()["error_type"] == "validation_error"

    response = upload(client, owner_headers, vehicle["id"], file=("empty.pdf", b"", "application/pdf"))
    assert response.status_code == 400

    monkeypatch.setattr(documents_router.settings, "max_upload_size", 4)
    response = upload(client, owner_headers, vehicle["id"])
    assert response.status_code == 400
    assert stored_files() == []


def test_upload_to_someone_elses_vehicle(client, owner_headers):
    vehicle = add_vehicle(client, owner_headers)
    other = register(client, "neighbour")

    assert upload(client, other, vehicle["id"]).status_code == 404
    assert stored_files() == []


def test_listing_and_vehicle_filter(client, owner_headers):
    camry = add_vehicle(client, owner_headers)
    civic = add_vehicle(client, owner_headers, plate="UBB 456C")
    first = upload(client, owner_headers, camry["id"]).json()
    second = upload(client, owner_headers, civic["id"], type="driving_permit").json()

    listed = client.get(f"{API}/documents/", headers=owner_headers).json()
    assert [d["id"] for d in listed] == [second["id"], first["id"]]

    listed = client.get(f"{API}/documents/", params={"vehicle_id": camry["id"]}, headers=owner_headers).json()
    assert [d["id"] for d in listed] == [first["id"]]

    assert client.get(f"{API}/documents/", headers=register(client, "neighbour")).json() == []


def test_expiring_documents(client, owner_headers):
    vehicle = add_vehicle(client, owner_headers)
    today = date.today()
    upload(client, owner_headers, vehicle["id"], name="Valid", expiry_date=(today + timedelta(days=90)).isoformat())
    upload(client, owner_headers, vehicle["id"], name="Soon", expiry_date=(today + timedelta(days=10)).isoformat())
    upload(client, owner_headers, vehicle["id"], name="Lapsed", expiry_date=(today - timedelta(days=1)).isoformat())
    upload(client, owner_headers, vehicle["id"], name="Forever")

    expiring = client.get(f"{API}/documents/expiring", headers=owner_headers).json()
    assert [(d["name"], d["expiry_status"]) for d in expiring] == [
        ("Lapsed", "expired"),
        ("Soon", "expiring_soon"),
    ]


def test_delete_removes_file(client, owner_headers):
    vehicle = add_vehicle(client, owner_headers)
    document = upload(client, owner_headers, vehicle["id"]).json()

    other = register(client, "neighbour")
    assert client.delete(f"{API}/documents/{document['id']}", headers=other).status_code == 404

    assert client.delete(f"{API}/documents/{document['id']}", headers=owner_headers).status_code == 204
    assert stored_files() == []
    assert client.get(f"{API}/documents/", headers=owner_headers).json() == []


def test_deleting_vehicle_removes_its_documents(client, owner_headers):
    vehicle = add_vehicle(client, owner_headers)
    upload(client, owner_headers, vehicle["id"])
    upload(client, owner_headers, vehicle["id"], type="inspection_report")

    assert client.delete(f"{API}/vehicles/{vehicle['id']}", headers=owner_headers).status_code == 204
    assert stored_files() == []
    assert client.get(f"{API}/documents/", headers=owner_headers).json() == []


def test_upload_reads_at_most_one_byte_over_the_limit(client, owner_headers, monkeypatch):
    vehicle = add_vehicle(client, owner_headers)
    sizes = []
    original_read = UploadFile.read

    async def read(self, size=-1):
        sizes.append(size)
        return await original_read(self, size)

    monkeypatch.setattr(UploadFile, "read", read)
    monkeypatch.setattr(documents_router.settings, "max_upload_size", 16)

    response = upload(client, owner_headers, vehicle["id"], file=("big.pdf", b"x" * 1000, "application/pdf"))
    assert response.status_code == 400
    assert sizes == [17]
    assert stored_files() == []


def test_failed_insert_removes_stored_file(client, owner_headers, monkeypatch):
    vehicle = add_vehicle(client, owner_headers)

    async def commit(self):
        raise OperationalError("INSERT INTO documents", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", commit)

    with pytest.raises(OperationalError):
        upload(client, owner_headers, vehicle["id"])
    assert stored_files() == []
