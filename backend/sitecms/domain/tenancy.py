import re

_SITE_ID_DISALLOWED = re.compile(r"[^a-z0-9-]")


def sanitize_site_id(raw, default=None):
    """
    Reduce a user supplied site id to a lowercase [a-z0-9-] token.

    Falls back to ``default`` when nothing usable is left.
    """
    if raw is None:
        return default

    cleaned = _SITE_ID_DISALLOWED.sub("", str(raw).lower())
    return cleaned or default
