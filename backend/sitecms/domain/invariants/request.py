import re
from typing import Any, Dict, Iterable
from ..exceptions import ValidationError
from .text import required_text

# Field name -> column length (None for unbounded text)
REQUIRED_REQUEST_FIELDS = {
    "requester_name": 200,
    "requester_email": 254,
    "service_type": 50,
    "description": None,
}

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_request_input(data: Dict[str, Any], service_types: Iterable[str]) -> Dict[str, str]:
    values = {
        field: required_text(data, field, max_length=max_length)
        for field, max_length in REQUIRED_REQUEST_FIELDS.items()
    }

    missing = [field for field, value in values.items() if not value]
    if missing:
        raise ValidationError(
            f"Please fill in all required fields: {', '.join(missing)}"
        )

    if not _EMAIL_PATTERN.match(values["requester_email"]):
        raise ValidationError("requester_email is not a valid email address")

    allowed = tuple(service_types)
    if values["service_type"] not in allowed:
        raise ValidationError(
            f"Unknown service type '{values['service_type']}'. Expected one of: {', '.join(allowed)}"
        )

    return values
