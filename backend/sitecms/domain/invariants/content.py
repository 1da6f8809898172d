import math
from typing import Any, Dict, Optional
from ..exceptions import ValidationError
from .text import required_text

CONTENT_KINDS = ("page", "news", "project")

PROGRESS_MIN = 0
PROGRESS_MAX = 100

TITLE_MAX_LENGTH = 200


def assert_content_kind(kind: str) -> None:
    if kind not in CONTENT_KINDS:
        raise ValidationError(
            f"Unknown content kind '{kind}'. Expected one of: {', '.join(CONTENT_KINDS)}"
        )


def clamp_progress(value: Any) -> int:
    """
    Coerce a progress percentage to an int within [0, 100].

    Empty values count as 0 and infinities clamp to the nearest bound.
    Anything else that is not a whole number is rejected.
    """
    if value is None or value == "":
        return PROGRESS_MIN

    if isinstance(value, bool):
        raise ValidationError("Progress must be a whole number")

    if isinstance(value, float):
        if math.isnan(value):
            raise ValidationError("Progress must be a whole number")
        if math.isinf(value):
            return PROGRESS_MAX if value > 0 else PROGRESS_MIN

    try:
        progress = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Progress must be a whole number") from None

    if isinstance(value, float) and value != progress:
        raise ValidationError("Progress must be a whole number")

    return max(PROGRESS_MIN, min(PROGRESS_MAX, progress))


def normalize_content_input(kind: str, data: Dict[str, Any]) -> Dict[str, Optional[Any]]:
    assert_content_kind(kind)

    title = required_text(data, "title", max_length=TITLE_MAX_LENGTH)
    body = required_text(data, "body")

    if not title or not body:
        raise ValidationError("Title and body cannot be empty")

    return {
        "kind": kind,
        "title": title,
        "body": body,
        "progress": clamp_progress(data.get("progress")) if kind == "project" else None,
    }
