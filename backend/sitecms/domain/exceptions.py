class CmsError(Exception):
    """Base class for every error surfaced to an API caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CmsError):
    """Missing required field or out-of-range value. Nothing was written."""

    status_code = 400


class BackendUnavailable(CmsError):
    """Identity or store handle not ready yet."""

    status_code = 503


class AccessDenied(CmsError):
    status_code = 403


class NotFound(CmsError):
    status_code = 404


class IllegalTransition(CmsError):
    status_code = 409


class StoreError(CmsError):
    """A write or query against the document store failed."""

    status_code = 502
