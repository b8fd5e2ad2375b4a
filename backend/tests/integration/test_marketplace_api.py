"""Marketplace endpoints: vehicles, hires, payments, messages, locations, contact."""

from __future__ import annotations

from datetime import timedelta

from rentaride.models.base import utcnow
from rentaride.repositories import VehicleRepository
from tests.factories.user import UserFactory
from tests.factories.vehicle import VehicleFactory, VehicleHireFactory
from tests.helpers.auth import API, bearer, login


def _hire_window() -> dict[str, str]:
    start = utcnow() + timedelta(hours=1)
    return {
        "release_at": start.isoformat(),
        "due_back_at": (start + timedelta(days=3)).isoformat(),
    }


# --------------------------------- Vehicles --------------------------------- #
def test_vehicle_listing_lifecycle(client):
    owner, admin = UserFactory(), UserFactory(admin=True)
    body = {"brand": "Toyota", "model": "Hilux", "plate_number": "KAA-001"}

    resp = client.post(f"{API}/vehicles", json=body, headers=bearer(owner))
    assert resp.status_code == 201
    vehicle = resp.get_json()["data"]
    assert vehicle["status"] == "available"
    assert vehicle["verified"] is False
    assert vehicle["added_by_id"] == owner.id

    # Unverified listings stay out of the public search
    assert client.get(f"{API}/vehicles/search/hilux").get_json()["meta"]["total"] == 0

    resp = client.patch(
        f"{API}/vehicles/{vehicle['id']}", json={"verified": True}, headers=bearer(admin)
    )
    assert resp.status_code == 200

    found = client.get(f"{API}/vehicles/search/hilux").get_json()
    assert found["meta"] == {"total": 1, "page": 1, "limit": 20}
    assert found["data"][0]["plate_number"] == "KAA-001"

    resp = client.put(
        f"{API}/vehicles/{vehicle['id']}", json={"model": "Land Cruiser"}, headers=bearer(owner)
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"]["model"] == "Land Cruiser"


def test_duplicate_plate_is_a_conflict(client):
    owner = UserFactory()
    existing = VehicleFactory()
    body = {"brand": "Ford", "model": "Ranger", "plate_number": existing.plate_number}

    resp = client.post(f"{API}/vehicles", json=body, headers=bearer(owner))

    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"


def test_vehicles_are_private_to_their_owner(client):
    vehicle = VehicleFactory()
    stranger = UserFactory()

    assert client.get(f"{API}/vehicles/{vehicle.id}", headers=bearer(stranger)).status_code == 401
    resp = client.put(
        f"{API}/vehicles/{vehicle.id}", json={"model": "X"}, headers=bearer(stranger)
    )
    assert resp.status_code == 401
    owner_view = client.get(f"{API}/vehicles/{vehicle.id}", headers=bearer(vehicle.added_by))
    assert owner_view.status_code == 200


def test_deactivated_vehicle_leaves_owner_listing(client):
    vehicle = VehicleFactory()
    VehicleFactory(added_by=vehicle.added_by)
    headers = bearer(vehicle.added_by)

    resp = client.patch(f"{API}/vehicles/{vehicle.id}/deactivate", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["active"] is False

    mine = client.get(f"{API}/vehicles/mine", headers=headers).get_json()
    assert mine["meta"]["total"] == 1
    assert vehicle.id not in [v["id"] for v in mine["data"]]


def test_unknown_vehicle_is_not_found(client):
    admin = UserFactory(admin=True)
    resp = client.get(f"{API}/vehicles/9999", headers=bearer(admin))
    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"


# ----------------------------- Hires & payments ----------------------------- #
def test_hire_return_and_payment_flow(client):
    vehicle = VehicleFactory()
    owner, hirer, admin = vehicle.added_by, UserFactory(), UserFactory(admin=True)

    resp = client.post(
        f"{API}/vehicle-hires", json={"vehicle_id": vehicle.id, **_hire_window()},
        headers=bearer(hirer),
    )
    assert resp.status_code == 201
    hire = resp.get_json()["data"]
    assert (hire["hirer_id"], hire["owner_id"]) == (hirer.id, owner.id)

    status = client.get(f"{API}/vehicles/{vehicle.id}", headers=bearer(owner)).get_json()
    assert status["data"]["status"] == "rented"

    # A rented vehicle cannot be booked twice
    again = client.post(
        f"{API}/vehicle-hires", json={"vehicle_id": vehicle.id, **_hire_window()},
        headers=bearer(UserFactory()),
    )
    assert again.status_code == 409

    mine = client.get(f"{API}/vehicle-hires/mine", headers=bearer(owner)).get_json()
    assert [h["id"] for h in mine["data"]] == [hire["id"]]

    resp = client.post(
        f"{API}/payments", json={"vehicle_hire_id": hire["id"], "method": "paypal"},
        headers=bearer(owner),
    )
    assert resp.status_code == 401

    resp = client.post(
        f"{API}/payments", json={"vehicle_hire_id": hire["id"], "method": "paypal"},
        headers=bearer(hirer),
    )
    assert resp.status_code == 201
    payment = resp.get_json()["data"]
    assert payment["status"] == "pending"

    resp = client.patch(
        f"{API}/payments/{payment['id']}", json={"status": "successful"}, headers=bearer(admin)
    )
    assert resp.status_code == 200
    paid = client.get(f"{API}/vehicle-hires/{hire['id']}", headers=bearer(hirer)).get_json()
    assert paid["data"]["paid"] is True

    resp = client.put(f"{API}/vehicle-hires/{hire['id']}/return", headers=bearer(hirer))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["returned_at"] is not None
    status = client.get(f"{API}/vehicles/{vehicle.id}", headers=bearer(owner)).get_json()
    assert status["data"]["status"] == "available"

    again = client.put(f"{API}/vehicle-hires/{hire['id']}/return", headers=bearer(hirer))
    assert again.status_code == 409


def test_owner_cannot_hire_own_vehicle(client):
    vehicle = VehicleFactory()
    resp = client.post(
        f"{API}/vehicle-hires", json={"vehicle_id": vehicle.id, **_hire_window()},
        headers=bearer(vehicle.added_by),
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "You cannot hire your own vehicle"


def test_hire_window_must_be_ordered(client):
    vehicle = VehicleFactory()
    window = _hire_window()
    window["due_back_at"] = window["release_at"]
    resp = client.post(
        f"{API}/vehicle-hires", json={"vehicle_id": vehicle.id, **window},
        headers=bearer(UserFactory()),
    )
    assert resp.status_code == 400
    assert "due_back_at" in resp.get_json()["details"]["errors"]


def test_outsiders_cannot_see_a_hire(client):
    hire = VehicleHireFactory()
    resp = client.get(f"{API}/vehicle-hires/{hire.id}", headers=bearer(UserFactory()))
    assert resp.status_code == 401


def test_admin_corrects_a_hire(client):
    hire = VehicleHireFactory()
    admin = UserFactory(admin=True)
    url = f"{API}/vehicle-hires/{hire.id}"
    new_due = utcnow() + timedelta(days=10)

    resp = client.patch(
        url, json={"due_back_at": new_due.isoformat(), "paid": True}, headers=bearer(admin)
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["paid"] is True
    vehicle = VehicleRepository().get(hire.vehicle_id)
    assert vehicle.due_back_at.replace(tzinfo=None) == new_due.replace(tzinfo=None)

    assert client.patch(url, json={"paid": False}, headers=bearer(hire.hirer)).status_code == 401
    early = (utcnow() - timedelta(days=30)).isoformat()
    resp = client.patch(url, json={"due_back_at": early}, headers=bearer(admin))
    assert resp.status_code == 400
    resp = client.patch(url, json={}, headers=bearer(admin))
    assert resp.get_json()["code"] == "validation_error"


def test_admin_reactivates_a_hire(client):
    hire = VehicleHireFactory()
    admin = UserFactory(admin=True)
    url = f"{API}/vehicle-hires/{hire.id}"

    assert client.patch(f"{url}/deactivate", headers=bearer(admin)).status_code == 200
    assert VehicleRepository().get(hire.vehicle_id).status == "available"
    assert client.patch(f"{url}/reactivate", headers=bearer(hire.hirer)).status_code == 401

    resp = client.patch(f"{url}/reactivate", headers=bearer(admin))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["active"] is True
    assert VehicleRepository().get(hire.vehicle_id).status == "rented"


def test_reactivating_a_hire_needs_its_vehicle_free(client):
    hire = VehicleHireFactory()
    admin = UserFactory(admin=True)
    url = f"{API}/vehicle-hires/{hire.id}"
    client.patch(f"{url}/deactivate", headers=bearer(admin))

    rebooked = client.post(
        f"{API}/vehicle-hires",
        json={"vehicle_id": hire.vehicle_id, **_hire_window()},
        headers=bearer(UserFactory()),
    )
    assert rebooked.status_code == 201

    resp = client.patch(f"{url}/reactivate", headers=bearer(admin))
    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"


# --------------------------------- Messages --------------------------------- #
def test_hire_messages_between_parties(client):
    hire = VehicleHireFactory()

    resp = client.post(
        f"{API}/interactions/vehicle-hires/{hire.id}",
        json={"message": "Where do I pick it up?"},
        headers=bearer(hire.hirer),
    )
    assert resp.status_code == 201

    thread = client.get(
        f"{API}/interactions/vehicle-hires/{hire.id}", headers=bearer(hire.owner)
    ).get_json()["data"]
    assert [m["message"] for m in thread] == ["Where do I pick it up?"]

    outsider = client.get(
        f"{API}/interactions/vehicle-hires/{hire.id}", headers=bearer(UserFactory())
    )
    assert outsider.status_code == 401


def test_vehicle_questions_are_visible_to_owner_and_author(client):
    vehicle = VehicleFactory()
    asker, other = UserFactory(), UserFactory()
    client.post(
        f"{API}/interactions/vehicles/{vehicle.id}",
        json={"message": "Is it automatic?"},
        headers=bearer(asker),
    )

    def _messages(user):
        resp = client.get(f"{API}/interactions/vehicles/{vehicle.id}", headers=bearer(user))
        return [m["message"] for m in resp.get_json()["data"]]

    assert _messages(vehicle.added_by) == ["Is it automatic?"]
    assert _messages(asker) == ["Is it automatic?"]
    assert _messages(other) == []


def test_only_author_edits_a_message(client):
    vehicle = VehicleFactory()
    author = UserFactory()
    created = client.post(
        f"{API}/interactions/vehicles/{vehicle.id}", json={"message": "Hi"}, headers=bearer(author)
    ).get_json()["data"]

    url = f"{API}/interactions/{created['id']}"
    by_owner = client.put(url, json={"message": "Hello"}, headers=bearer(vehicle.added_by))
    assert by_owner.status_code == 401
    resp = client.put(url, json={"message": "Hello"}, headers=bearer(author))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["message"] == "Hello"


def test_admin_reactivates_a_message(client):
    hire = VehicleHireFactory()
    admin = UserFactory(admin=True)
    thread_url = f"{API}/interactions/vehicle-hires/{hire.id}"
    created = client.post(
        thread_url, json={"message": "Running late"}, headers=bearer(hire.hirer)
    ).get_json()["data"]
    url = f"{API}/interactions/{created['id']}"

    assert client.patch(f"{url}/deactivate", headers=bearer(hire.hirer)).status_code == 200
    assert client.get(thread_url, headers=bearer(hire.owner)).get_json()["data"] == []
    assert client.patch(f"{url}/reactivate", headers=bearer(hire.hirer)).status_code == 401

    resp = client.patch(f"{url}/reactivate", headers=bearer(admin))

    assert resp.status_code == 200
    thread = client.get(thread_url, headers=bearer(hire.owner)).get_json()["data"]
    assert [m["message"] for m in thread] == ["Running late"]


# --------------------------------- Locations -------------------------------- #
def test_user_location_is_replaced_on_report(client):
    user = UserFactory()
    headers = bearer(user)
    client.put(
        f"{API}/user-locations/me", json={"latitude": 1.5, "longitude": 2.5}, headers=headers
    )
    resp = client.put(
        f"{API}/user-locations/me",
        json={"latitude": -1.28, "longitude": 36.82, "address": "Nairobi"},
        headers=headers,
    )
    assert resp.status_code == 200

    mine = client.get(f"{API}/user-locations/me", headers=headers).get_json()["data"]
    assert (mine["latitude"], mine["longitude"], mine["address"]) == (-1.28, 36.82, "Nairobi")

    other = client.get(f"{API}/user-locations/users/{user.id}", headers=bearer(UserFactory()))
    assert other.status_code == 401


def test_user_location_rejects_out_of_range_coordinates(client):
    resp = client.put(
        f"{API}/user-locations/me",
        json={"latitude": 120, "longitude": 0},
        headers=bearer(UserFactory()),
    )
    assert resp.status_code == 400


def test_vehicle_location_visible_to_current_hirer(client):
    hire = VehicleHireFactory()
    url = f"{API}/vehicle-locations/vehicles/{hire.vehicle_id}"

    resp = client.put(url, json={"latitude": 0.5, "longitude": 0.5}, headers=bearer(hire.owner))
    assert resp.status_code == 200
    assert client.put(
        url, json={"latitude": 0, "longitude": 0}, headers=bearer(hire.hirer)
    ).status_code == 401

    assert client.get(url, headers=bearer(hire.hirer)).status_code == 200
    assert client.get(url, headers=bearer(UserFactory())).status_code == 401


# --------------------------------- Contact us ------------------------------- #
def test_contact_messages_are_public_to_send_and_admin_to_read(client):
    message = {"name": "Ann", "email": "ann@example.com", "title": "Hi", "body": "Question"}
    assert client.post(f"{API}/contact-us", json=message).status_code == 201

    admin = UserFactory(admin=True)
    assert client.get(f"{API}/contact-us", headers=bearer(UserFactory())).status_code == 401
    listing = client.get(f"{API}/contact-us", headers=bearer(admin)).get_json()
    assert listing["meta"]["total"] == 1
    assert listing["data"][0]["title"] == "Hi"

    message_id = listing["data"][0]["id"]
    resp = client.delete(f"{API}/contact-us/{message_id}", headers=bearer(admin))
    assert resp.status_code == 204


# ----------------------------------- Users ---------------------------------- #
def test_admin_creates_and_searches_users(client):
    admin = UserFactory(admin=True)
    body = {"username": "carol", "email": "carol@example.com", "password": "Passw0rd!"}

    resp = client.post(f"{API}/users", json=body, headers=bearer(admin))
    assert resp.status_code == 201
    assert resp.get_json()["data"]["roles"] == ["standard"]
    assert "password" not in resp.get_json()["data"]

    assert client.post(f"{API}/users", json=body, headers=bearer(admin)).status_code == 409

    found = client.get(f"{API}/users?search=carol", headers=bearer(admin)).get_json()
    assert [u["username"] for u in found["data"]] == ["carol"]


def test_users_edit_their_own_profile_only(client):
    user, other = UserFactory(), UserFactory()

    resp = client.put(
        f"{API}/users/{user.id}", json={"first_name": "Grace"}, headers=bearer(user)
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"]["first_name"] == "Grace"

    assert client.get(f"{API}/users/{other.id}", headers=bearer(user)).status_code == 401


def test_deactivated_user_cannot_log_in(client):
    user = UserFactory()

    resp = client.patch(f"{API}/users/{user.id}/deactivate", headers=bearer(user))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["active"] is False

    assert login(client, user.username).status_code == 401
