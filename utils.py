import math
from datetime import date, datetime

from flask import request

from errors import ValidationError


def json_body() -> dict:
    """Request JSON as a dict; anything unparsable counts as an empty body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def clean_str(value):
    """Trimmed string, or None for missing/blank values."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_id(value, label: str = "ID") -> int:
    """Positive integer identifier from a path or body value."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label}")
    if isinstance(value, int):
        ident = value
    else:
        text = str(value).strip() if value is not None else ""
        if not text.isdigit():
            raise ValidationError(f"Invalid {label}")
        ident = int(text)
    if ident <= 0:
        raise ValidationError(f"Invalid {label}")
    return ident


def parse_number(value):
    """Finite float from a JSON number or numeric string, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_int(value):
    """Integral value from an int, integral float or digit string, else None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_date(value) -> date:
    if isinstance(value, date):
        return value
    text = clean_str(value)
    if text is None:
        raise ValidationError("Invalid publication date")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid publication date") from None
