"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .contact_us import bp as contact_us_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .interactions import bp as interactions_bp  # noqa: E402
from .payments import bp as payments_bp  # noqa: E402
from .user_locations import bp as user_locations_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402
from .vehicle_hires import bp as vehicle_hires_bp  # noqa: E402
from .vehicle_locations import bp as vehicle_locations_bp  # noqa: E402
from .vehicles import bp as vehicles_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1
    (auth_bp, "/auth"),  # -> /api/v1/auth
    (users_bp, "/users"),
    (vehicles_bp, "/vehicles"),
    (vehicle_hires_bp, "/vehicle-hires"),
    (payments_bp, "/payments"),
    (user_locations_bp, "/user-locations"),
    (vehicle_locations_bp, "/vehicle-locations"),
    (interactions_bp, "/interactions"),
    (contact_us_bp, "/contact-us"),
]
