"""Shared field types for the schemas."""

from datetime import date, datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def parse_iso_date(value: Any) -> date:
    """Accept an ISO-8601 date or datetime (string or object) and return the date.

    Aware datetimes are converted to UTC first so ``2025-04-08T01:00:00+05:00``
    lands on 2025-04-07.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return parse_iso_date(datetime.fromisoformat(text))
        except ValueError:
            pass
    raise ValueError("must be an ISO-8601 date")


IsoDate = Annotated[date, BeforeValidator(parse_iso_date)]


class CamelModel(BaseModel):
    """Base model for payloads exchanged with camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class MessageResponse(BaseModel):
    message: str
