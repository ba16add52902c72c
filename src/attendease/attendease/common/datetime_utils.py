from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Union

from ..core.constants import WEEKDAYS
from ..core.exceptions import ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: Union[str, date], field_name: str = "Date") -> date:
    """Parse a strict YYYY-MM-DD string into date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid calendar date") from None


def parse_optional_date(value: Optional[str], field_name: str = "Date") -> Optional[date]:
    if value is None or value == "":
        return None
    return parse_iso_date(value, field_name)


def weekday_name(value: date) -> str:
    return WEEKDAYS[value.weekday()]


def now_local() -> datetime:
    """Current local time.

    Services take a ``clock`` callable defaulting to this one.
    """
    return datetime.now()
