from rentaride.models.contact_message import ContactMessage
from rentaride.models.interaction import Interaction
from rentaride.models.location import UserLocation, VehicleLocation
from rentaride.models.payment import Payment
from rentaride.models.refresh_session import RefreshSession
from rentaride.models.user import User
from rentaride.models.vehicle import Vehicle
from rentaride.models.vehicle_hire import VehicleHire

__all__ = [
    "ContactMessage",
    "Interaction",
    "Payment",
    "RefreshSession",
    "User",
    "UserLocation",
    "Vehicle",
    "VehicleHire",
    "VehicleLocation",
]
