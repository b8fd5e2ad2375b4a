"""Factories for vehicles, hires and payments."""

from __future__ import annotations

from datetime import timedelta

import factory
from rentaride.models.base import utcnow
from rentaride.models.payment import Payment
from rentaride.models.vehicle import Vehicle
from rentaride.models.vehicle_hire import VehicleHire

from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class VehicleFactory(BaseFactory):
    """Verified, available vehicle owned by a fresh user."""

    class Meta:
        model = Vehicle

    added_by = factory.SubFactory(UserFactory)
    brand = factory.Iterator(["Toyota", "Honda", "Nissan", "Ford"])
    model = factory.Iterator(["Corolla", "Civic", "Leaf", "Focus"])
    plate_number = factory.Sequence(lambda n: f"PLT-{n:04d}")
    status = "available"
    verified = True
    active = True


class VehicleHireFactory(BaseFactory):
    """Open hire of a vehicle by another user, released now and due in two days."""

    class Meta:
        model = VehicleHire

    vehicle = factory.SubFactory(VehicleFactory, status="rented")
    hirer = factory.SubFactory(UserFactory)
    owner = factory.SelfAttribute("vehicle.added_by")
    release_at = factory.LazyFunction(utcnow)
    due_back_at = factory.LazyAttribute(lambda o: o.release_at + timedelta(days=2))
    paid = False
    active = True


class PaymentFactory(BaseFactory):
    class Meta:
        model = Payment

    vehicle_hire = factory.SubFactory(VehicleHireFactory)
    vehicle_id = factory.LazyAttribute(lambda o: o.vehicle_hire.vehicle_id)
    hirer_id = factory.LazyAttribute(lambda o: o.vehicle_hire.hirer_id)
    owner_id = factory.LazyAttribute(lambda o: o.vehicle_hire.owner_id)
    method = "paypal"
    status = "pending"
