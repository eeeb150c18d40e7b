"""Base model and shared validators for listing records.

Every record inherits from :class:`AutoConnexModel` which provides:

* ``alias_generator=to_camel`` so records persist with camelCase keys
  (``vehicleDetails``, ``askingPrice``) while Python code uses snake_case.
* ``frozen=True``: records are replaced wholesale, never edited in place.
* :meth:`AutoConnexModel.to_storage` / :meth:`AutoConnexModel.from_storage`
  for the JSON blobs written through a storage adapter.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Self

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
"""Datetime normalised to UTC; serialised as ISO-8601."""


def utcnow() -> datetime:
    return datetime.now(UTC)


class AutoConnexModel(BaseModel):
    """Base for all persisted listing records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_storage(self) -> dict[str, Any]:
        """JSON-compatible dict using the camelCase storage keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage(cls, data: Any) -> Self:
        """Validate a dict previously produced by :meth:`to_storage`."""
        return cls.model_validate(data)

    @classmethod
    def field_name_for(cls, key: str) -> str | None:
        """Resolve a field name or its camelCase alias to the field name."""
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None
