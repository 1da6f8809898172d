import logging
from typing import Optional
from sitecms.auth.identity import Actor
from sitecms.domain.exceptions import AccessDenied, BackendUnavailable, NotFound

logger = logging.getLogger(__name__)


class AccessPolicy:
    """
    Checks applied at the document store boundary.

    Tenant isolation is always enforced. Admin write authorization is only
    enforced when ``require_admin_role`` is set; otherwise any identified
    actor may manage content and triage requests.
    """

    def __init__(self, *, require_admin_role: bool = False):
        self.require_admin_role = require_admin_role

    def authorize_admin_write(self, actor: Optional[Actor], tenant_id: str) -> Actor:
        if actor is None:
            raise BackendUnavailable("Identity is not ready yet. Sign in before making changes.")

        if not self.require_admin_role:
            return actor

        if not actor.is_admin:
            logger.warning("Rejected admin write by %s on site %s", actor.user_id, tenant_id)
            raise AccessDenied("Administrator role required")

        if actor.site_id is not None and actor.site_id != tenant_id:
            logger.warning(
                "Rejected cross-site write by %s (site %s) on site %s",
                actor.user_id, actor.site_id, tenant_id,
            )
            raise AccessDenied("Administrator is not allowed to manage this site")

        return actor

    def assert_same_tenant(self, document, tenant_id: str, collection: str):
        # Other tenants' documents are reported as missing, not forbidden
        if document is None or document.tenant_id != tenant_id:
            raise NotFound(f"No such document in {collection}")
        return document
