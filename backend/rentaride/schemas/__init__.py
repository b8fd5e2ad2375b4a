"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginSchema,
    PasswordResetConfirmSchema,
    PasswordResetRequestSchema,
    ProfileSchema,
    RegisterSchema,
    TokenResponseSchema,
)
from .common import PaginationQuerySchema, build_meta, split_csv
from .contact import ContactMessageCreateSchema, ContactMessageSchema
from .hire import VehicleHireCreateSchema, VehicleHireSchema, VehicleHireUpdateSchema
from .interaction import InteractionInSchema, InteractionSchema
from .location import LocationInSchema, UserLocationSchema, VehicleLocationSchema
from .payment import PaymentCreateSchema, PaymentSchema, PaymentUpdateSchema
from .user import (
    UserAdminUpdateSchema,
    UserCreateSchema,
    UserFilterSchema,
    UserSchema,
    UserUpdateSchema,
)
from .vehicle import (
    VehicleAdminUpdateSchema,
    VehicleCreateSchema,
    VehicleFilterSchema,
    VehicleSchema,
    VehicleUpdateSchema,
)

__all__ = [
    "LoginSchema",
    "PasswordResetConfirmSchema",
    "PasswordResetRequestSchema",
    "ProfileSchema",
    "RegisterSchema",
    "TokenResponseSchema",
    "PaginationQuerySchema",
    "build_meta",
    "split_csv",
    "ContactMessageCreateSchema",
    "ContactMessageSchema",
    "VehicleHireCreateSchema",
    "VehicleHireSchema",
    "VehicleHireUpdateSchema",
    "InteractionInSchema",
    "InteractionSchema",
    "LocationInSchema",
    "UserLocationSchema",
    "VehicleLocationSchema",
    "PaymentCreateSchema",
    "PaymentSchema",
    "PaymentUpdateSchema",
    "UserAdminUpdateSchema",
    "UserCreateSchema",
    "UserFilterSchema",
    "UserSchema",
    "UserUpdateSchema",
    "VehicleAdminUpdateSchema",
    "VehicleCreateSchema",
    "VehicleFilterSchema",
    "VehicleSchema",
    "VehicleUpdateSchema",
]
