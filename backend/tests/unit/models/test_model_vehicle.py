"""Unit tests for vehicle, hire and payment models."""

from __future__ import annotations

import pytest
from rentaride.models.vehicle import Vehicle
from rentaride.models.vehicle_hire import VehicleHire

from tests.factories.vehicle import PaymentFactory, VehicleHireFactory


def test_vehicle_required_strings_are_stripped():
    vehicle = Vehicle(brand=" Toyota ", model="Corolla ", plate_number=" ABC-123")
    assert (vehicle.brand, vehicle.model, vehicle.plate_number) == ("Toyota", "Corolla", "ABC-123")
    with pytest.raises(ValueError):
        vehicle.brand = "   "


@pytest.mark.parametrize(
    "status,active,expected",
    [("available", True, True), ("rented", True, False), ("available", False, False)],
)
def test_vehicle_is_hireable(status, active, expected):
    vehicle = Vehicle(brand="Ford", model="Focus", plate_number="X-1", status=status, active=active)
    assert vehicle.is_hireable is expected


def test_hire_parties_and_return_state(db):
    hire = VehicleHireFactory()
    assert hire.involves(hire.hirer_id)
    assert hire.involves(hire.owner_id)
    assert not hire.involves(hire.hirer_id + hire.owner_id + 100)
    assert not hire.is_returned


def test_payment_involves_both_parties(db):
    payment = PaymentFactory()
    assert payment.involves(payment.hirer_id)
    assert payment.involves(payment.owner_id)
    assert payment.status == "pending"


def test_hire_owner_defaults_to_vehicle_owner(db):
    hire = VehicleHireFactory()
    assert isinstance(hire, VehicleHire)
    assert hire.owner_id == hire.vehicle.added_by_id
