"""Query-string and envelope helpers shared by list endpoints."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


def split_csv(raw: str | None) -> list[str]:
    """Split ``"-created_at,brand"`` into ``["-created_at", "brand"]``."""
    return [token.strip() for token in (raw or "").split(",") if token.strip()]


class PaginationQuerySchema(Schema):
    """
    Parse ``?page=&limit=&sort=`` for paginated endpoints.

    Other query keys are ignored here; resource filter schemas load them
    separately. ``limit`` falls back to ``default_limit`` and is capped at
    ``max_limit``.
    """

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=None, validate=validate.Range(min=1))
    sort = fields.String(load_default="")

    def __init__(self, *, default_limit: int = 20, max_limit: int = 200, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.default_limit = default_limit
        self.max_limit = max_limit

    @post_load
    def normalize(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data["sort"] = split_csv(data.get("sort"))
        data["limit"] = min(data.get("limit") or self.default_limit, self.max_limit)
        return data


def build_meta(*, total: int, page: int, limit: int) -> dict[str, int]:
    """Return the ``meta`` block of a paginated ``{"data", "meta"}`` envelope."""
    return {"total": int(total), "page": int(page), "limit": int(limit)}
