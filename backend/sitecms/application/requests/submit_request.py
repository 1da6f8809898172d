import logging
from typing import Any, Dict, Iterable, Optional
from sitecms.auth.identity import ANONYMOUS_MARKER, Actor
from sitecms.domain.exceptions import BackendUnavailable
from sitecms.domain.invariants.request import normalize_request_input
from sitecms.domain.lifecycle.request import STATUS_NEW
from sitecms.models.service_request import ServiceRequest
from sitecms.store.documents import DocumentStore

logger = logging.getLogger(__name__)


def submit_request(
    store: Optional[DocumentStore],
    *,
    tenant_id: str,
    actor: Optional[Actor],
    data: Dict[str, Any],
    service_types: Iterable[str],
) -> ServiceRequest:
    """
    Record a visitor's service request with status New.

    Visitors do not need an identity; requests sent without one are
    attributed to the public marker.
    """

    if store is None:
        raise BackendUnavailable("Document store is not ready yet")

    fields = normalize_request_input(data, service_types)

    request = store.create(
        "requests",
        tenant_id,
        {
            **fields,
            "status": STATUS_NEW,
            "created_by": actor.user_id if actor else ANONYMOUS_MARKER,
        },
    )

    logger.info(
        "Service request %s (%s) received for site %s",
        request.id, request.service_type, tenant_id,
    )
    return request
