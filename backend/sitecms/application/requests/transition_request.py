import logging
from datetime import datetime
from typing import Optional
from sitecms.auth.identity import Actor
from sitecms.domain.exceptions import BackendUnavailable
from sitecms.domain.lifecycle.request import resolve_transition
from sitecms.models.base import utc_now
from sitecms.models.service_request import ServiceRequest
from sitecms.store.documents import DocumentStore

logger = logging.getLogger(__name__)


def transition_request(
    store: Optional[DocumentStore],
    *,
    tenant_id: str,
    actor: Optional[Actor],
    request_id: str,
    action: str,
    now: Optional[datetime] = None,
) -> ServiceRequest:
    """
    Move a service request one step forward and stamp who did it and when.

    Responsibilities:
    - lifecycle enforcement (New → InProgress → Done)
    - handled_by / handled_at stamping on every transition

    There is no compare-and-swap: two admins applying the same action both
    succeed and the later stamp wins.
    """

    if store is None:
        raise BackendUnavailable("Document store is not ready yet")

    store.policy.authorize_admin_write(actor, tenant_id)

    request = store.get("requests", tenant_id, request_id)
    from_status = request.status
    to_status = resolve_transition(from_status=from_status, action=action)

    request = store.update(
        "requests",
        tenant_id,
        request_id,
        {
            "status": to_status,
            "handled_by": actor.user_id,
            "handled_at": now or utc_now(),
        },
    )

    logger.info(
        "Service request %s: %s → %s by %s", request_id, from_status, to_status, actor.user_id
    )
    return request
