"""Client-side form checks run before anything is sent to the backend."""

from __future__ import annotations

import datetime
from typing import Any

from flask_babel import _

from schooldesk.lib.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def safe_number(value: Any) -> int | float:
    """Parse a number, falling back to 0 for blank or malformed input."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0
    # nan/inf are not amounts
    return number if number == number and abs(number) != float("inf") else 0


def parse_date(value: Any, field: str) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    try:
        return datetime.date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(_("Please enter a valid date for %s") % field.replace("_", " "), field)


def require(values: dict[str, Any], field: str, message: str | None = None) -> Any:
    value = values.get(field)
    if is_blank(value):
        raise ValidationError(
            message or _("Please fill in the %s") % field.replace("_", " "),
            field,
        )
    return value.strip() if isinstance(value, str) else value


def require_min_length(values: dict[str, Any], field: str, length: int) -> str:
    value = str(values.get(field) or "").strip()
    if len(value) < length:
        raise ValidationError(
            _("%(field)s must be at least %(length)s characters")
            % {"field": field.replace("_", " ").capitalize(), "length": length},
            field,
        )
    return value


def require_positive(values: dict[str, Any], field: str, message: str | None = None) -> int | float:
    """Require a number greater than zero. Blank and malformed input count as zero."""
    number = safe_number(values.get(field))
    if number <= 0:
        raise ValidationError(
            message or _("%s must be greater than zero") % field.replace("_", " ").capitalize(),
            field,
        )
    return number


def check_date_range(values: dict[str, Any], start_field: str, end_field: str) -> None:
    """Require ``start < end`` when both dates are present."""
    start, end = values.get(start_field), values.get(end_field)
    if is_blank(start) or is_blank(end):
        return
    if parse_date(start, start_field) >= parse_date(end, end_field):
        raise ValidationError(_("End date must be after start date"), end_field)


def to_flag(value: Any) -> int:
    """Coerce checkbox/switch input to the backend's 0/1 convention."""
    if isinstance(value, str):
        return 1 if value.strip().lower() in ("1", "true", "yes", "on") else 0
    return 1 if value else 0
