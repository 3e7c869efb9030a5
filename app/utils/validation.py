from typing import TypeVar
from app.exceptions import AppException, ValidationError

T = TypeVar("T")


def ensure_id(id_value: T | None, resource_name: str = "Resource") -> T:
    """
    Ensure that an ID value is not None.

    Raises:
        AppException: If the ID value is None.
    """
    if id_value is None:
        raise AppException(f"{resource_name} ID is missing")
    return id_value


def require_text(value: str | None, field: str, label: str | None = None) -> str:
    """
    Return `value` stripped of surrounding whitespace, refusing blank input.

    Raises:
        ValidationError: If the value is None or only whitespace.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label or field} is required", field=field)
    return cleaned


def split_comma_separated(value: str | None) -> list[str]:
    """
    Split a comma separated text input into trimmed, non-empty items.

    Example: ' first aid, ,cooking ' -> ['first aid', 'cooking']
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def mask_email(email: str) -> str:
    """
    Mask an email address for safe logging.
    Example: 'user@example.com' -> 'u***r@example.com'
    """
    try:
        user_part, domain = email.split("@")
        if len(user_part) <= 2:
            return f"{user_part[0]}***@{domain}"
        return f"{user_part[0]}***{user_part[-1]}@{domain}"
    except Exception:
        return "***@***.***"
