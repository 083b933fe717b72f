"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


class PaginationQuerySchema(Schema):
    """Validate ``page``/``limit``/``sort`` query parameters.

    ``sort`` is a comma-separated list such as ``-created_at,username``; it is
    returned as a list of tokens. ``limit`` is clamped to ``max_limit``.
    """

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_limit: int = 20, max_limit: int = 200, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))
    sort = fields.String(load_default="")

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.get("sort") or ""
        data["sort"] = [segment.strip() for segment in raw.split(",") if segment.strip()]
        data["limit"] = min(data.get("limit", self._default_limit), self._max_limit)
        return data


def build_meta(*, page: int, limit: int, count: int) -> dict[str, int]:
    """Return a ``meta`` mapping for paginated responses."""
    return {"page": int(page), "limit": int(limit), "count": int(count)}
