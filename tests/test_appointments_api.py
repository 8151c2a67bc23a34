"""Tests for appointment booking and service history."""

from datetime import date, timedelta

from conftest import API, register

from autoparts.models.appointment import Appointment, AppointmentStatus


def future(days):
    return (date.today() + timedelta(days=days)).isoformat()


def booking(**fields):
    return {
        "shop_name": "City Auto Repair",
        "mechanic_name": "John Smith",
        "appointment_date": future(3),
        "appointment_time": "10:00",
        "vehicle": "2018 Toyota Camry",
        "services": ["Oil Change", "Tire Rotation"],
        **fields,
    }


def book(client, headers, **fields):
    response = client.post(f"{API}/appointments/", json=booking(**fields), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_booking_starts_pending(client, owner_headers):
    appointment = book(client, owner_headers, services=["Oil Change", " Oil Change ", "Tire Rotation"])
    assert appointment["status"] == "pending"
    assert appointment["service_type"] == "Oil Change"
    assert appointment["services"] == ["Oil Change", "Tire Rotation"]


def test_booking_needs_a_service(client, owner_headers):
    response = client.post(f"{API}/appointments/", json=booking(services=[]), headers=owner_headers)
    assert response.status_code == 400


def test_booking_in_the_past_is_rejected(client, owner_headers):
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    response = client.post(f"{API}/appointments/", json=booking(appointment_date=yesterday),
                           headers=owner_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Appointment date cannot be in the past"


def test_booking_time_format(client, owner_headers):
    response = client.post(f"{API}/appointments/", json=booking(appointment_time="25:00"),
                           headers=owner_headers)
    assert response.status_code == 422


def test_list_filters_sorts_and_paginates(client, owner_headers):
    book(client, owner_headers, shop_name="City Auto Repair", appointment_date=future(5))
    book(client, owner_headers, shop_name="Metro Car Care", mechanic_name="Sarah Johnson",
         appointment_date=future(2))
    book(client, owner_headers, shop_name="Quick Lube", appointment_date=future(5), appointment_time="09:00")

    page = client.get(f"{API}/appointments/", headers=owner_headers).json()
    assert [a["shop_name"] for a in page["items"]] == ["City Auto Repair", "Quick Lube", "Metro Car Care"]
    assert page["page_size"] == 5

    page = client.get(f"{API}/appointments/", params={"search": "sarah"}, headers=owner_headers).json()
    assert [a["shop_name"] for a in page["items"]] == ["Metro Car Care"]

    page = client.get(f"{API}/appointments/", params={"sort": "shop_name", "direction": "asc"},
                      headers=owner_headers).json()
    assert [a["shop_name"] for a in page["items"]] == ["City Auto Repair", "Metro Car Care", "Quick Lube"]

    page = client.get(f"{API}/appointments/", params={"date": future(5)}, headers=owner_headers).json()
    assert page["total"] == 2

    page = client.get(f"{API}/appointments/", params={"page_size": 2, "page": 2}, headers=owner_headers).json()
    assert [a["shop_name"] for a in page["items"]] == ["Metro Car Care"]
    assert page["pages"] == 2


def test_status_filter(client, owner_headers):
    first = book(client, owner_headers)
    book(client, owner_headers)
    client.post(f"{API}/appointments/{first['id']}/cancel", headers=owner_headers)

    def statuses(params):
        page = client.get(f"{API}/appointments/", params=params, headers=owner_headers).json()
        return sorted(a["status"] for a in page["items"])

    assert statuses({"status": ["cancelled"]}) == ["cancelled"]
    assert statuses({"status": ["pending", "cancelled"]}) == ["cancelled", "pending"]
    assert statuses({"status": ["all"]}) == ["cancelled", "pending"]
    response = client.get(f"{API}/appointments/", params={"status": ["lost"]}, headers=owner_headers)
    assert response.status_code == 400


def test_reschedule_and_cancel(client, owner_headers):
    appointment = book(client, owner_headers)

    response = client.put(f"{API}/appointments/{appointment['id']}",
                          json={"appointment_date": future(10), "notes": "Bring spare key"},
                          headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["appointment_date"] == future(10)
    assert response.json()["notes"] == "Bring spare key"

    response = client.post(f"{API}/appointments/{appointment['id']}/cancel", headers=owner_headers)
    assert response.json()["status"] == "cancelled"
    # cancelling again is a no-op
    response = client.post(f"{API}/appointments/{appointment['id']}/cancel", headers=owner_headers)
    assert response.status_code == 200

    response = client.put(f"{API}/appointments/{appointment['id']}", json={"notes": "x"},
                          headers=owner_headers)
    assert response.status_code == 409


def test_completed_appointment_cannot_be_cancelled(client, owner_headers, admin_headers):
    appointment = book(client, owner_headers)

    response = client.patch(f"{API}/appointments/{appointment['id']}/status", json={"status": "completed"},
                            headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["completed_date"] is not None

    response = client.post(f"{API}/appointments/{appointment['id']}/cancel", headers=owner_headers)
    assert response.status_code == 409


def test_appointments_are_private(client, owner_headers):
    appointment = book(client, owner_headers)
    other = register(client, "neighbour")

    assert client.get(f"{API}/appointments/{appointment['id']}", headers=other).status_code == 404
    assert client.get(f"{API}/appointments/", headers=other).json()["total"] == 0


def test_admin_sees_all_appointments(client, owner_headers, admin_headers):
    book(client, owner_headers)
    book(client, register(client, "neighbour"))

    response = client.get(f"{API}/appointments/all", headers=admin_headers)
    assert response.status_code == 200
    assert len(response.json()) == 2
    assert client.get(f"{API}/appointments/all", headers=owner_headers).status_code == 403

def test_declined_appointment_can_be_rebooked(client, owner_headers, admin_headers):
    appointment = book(client, owner_headers)
    client.patch(f"{API}/appointments/{appointment['id']}/status", json={"status": "declined"},
                 headers=admin_headers)

    response = client.put(f"{API}/appointments/{appointment['id']}",
                          json={"appointment_date": future(6), "notes": "Another shop"},
                          headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["appointment_date"] == future(6)


def test_update_normalizes_service_type(client, owner_headers):
    appointment = book(client, owner_headers)
    url = f"{API}/appointments/{appointment['id']}"

    response = client.put(url, json={"service_type": "  Wheel Alignment  "}, headers=owner_headers)
    assert response.json()["service_type"] == "Wheel Alignment"

    response = client.put(url, json={"service_type": "  ", "services": ["Brakes"]}, headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["service_type"] == "Brakes"

    # falls back to the stored services when the update lists none
    response = client.put(url, json={"service_type": ""}, headers=owner_headers)
    assert response.json()["service_type"] == "Brakes"

    response = client.put(url, json={"service_type": " ", "services": []}, headers=owner_headers)
    assert response.status_code == 400



class TestServiceHistory:
    def _seed(self, client, headers, db_session):
        customer_id = client.get(f"{API}/customers/me", headers=headers).json()["id"]
        today = date.today()
        rows = [
            (today - timedelta(days=3), AppointmentStatus.COMPLETED, "Brake Service"),
            (today - timedelta(days=100), AppointmentStatus.CANCELLED, "Oil Change"),
            (today - timedelta(days=400), AppointmentStatus.COMPLETED, "Oil Change"),
        ]
        for day, status, service in rows:
            db_session.add(Appointment(
                customer_id=customer_id,
                shop_name="City Auto Repair",
                mechanic_name="John Smith",
                appointment_date=day,
                appointment_time="10:00",
                vehicle="2018 Toyota Camry",
                service_type=service,
                services=[service],
                status=status,
            ))
        db_session.commit()

    def test_bookings_newest_first_with_period(self, client, owner_headers, db_session):
        self._seed(client, owner_headers, db_session)

        def services(params):
            response = client.get(f"{API}/service-history/bookings", params=params, headers=owner_headers)
            assert response.status_code == 200
            return [a["service_type"] for a in response.json()["items"]]

        assert services({}) == ["Brake Service", "Oil Change", "Oil Change"]
        assert services({"period": "30days"}) == ["Brake Service"]
        assert services({"period": "6months"}) == ["Brake Service", "Oil Change"]
        assert services({"status": "cancelled"}) == ["Oil Change"]
        assert services({"search": "brake"}) == ["Brake Service"]

    def test_records_are_completed_services(self, client, owner_headers, db_session):
        self._seed(client, owner_headers, db_session)

        response = client.get(f"{API}/service-history/records", headers=owner_headers)
        page = response.json()
        assert page["total"] == 2
        assert {a["status"] for a in page["items"]} == {"completed"}
        assert page["page_size"] == 10

    def test_unknown_status_is_rejected(self, client, owner_headers):
        response = client.get(f"{API}/service-history/bookings", params={"status": "lost"},
                              headers=owner_headers)
        assert response.status_code == 400
