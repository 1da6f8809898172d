from typing import Any, Dict
from flask import request
from sitecms.domain.exceptions import ValidationError


def json_object() -> Dict[str, Any]:
    """
    The request's JSON body as a dict. A missing or unparsable body counts
    as empty; any other JSON value (array, string, number) is rejected.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    return data
