from typing import Any, Mapping, Optional
from ..exceptions import ValidationError


def required_text(data: Mapping[str, Any], field: str, *, max_length: Optional[int] = None) -> str:
    """
    Stripped string value of ``field``; missing counts as empty.
    Non-string values and values longer than ``max_length`` are rejected.
    """
    value = data.get(field)
    if value is None:
        return ""

    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")

    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")

    return value
