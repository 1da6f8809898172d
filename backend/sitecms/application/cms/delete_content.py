import logging
from typing import Optional
from sitecms.auth.identity import Actor
from sitecms.domain.exceptions import BackendUnavailable, ValidationError
from sitecms.store.documents import CONTENT_COLLECTIONS, DocumentStore

logger = logging.getLogger(__name__)


def delete_content(
    store: Optional[DocumentStore],
    *,
    tenant_id: str,
    actor: Optional[Actor],
    collection: str,
    content_id: str,
    confirmed: bool,
) -> None:
    """
    Hard-delete one content item.

    Notes:
    - The caller must pass ``confirmed=True``; otherwise nothing is deleted
    - Items of another site are reported as not found
    - Subscribers of the collection get the shrunk list right after the commit
    """

    if store is None:
        raise BackendUnavailable("Document store is not ready yet")

    if collection not in CONTENT_COLLECTIONS:
        raise ValidationError(f"{collection} is not a content collection")

    if not confirmed:
        raise ValidationError("Deletion must be confirmed")

    store.policy.authorize_admin_write(actor, tenant_id)
    store.delete(collection, tenant_id, content_id)

    logger.info("Content %s/%s deleted by %s", collection, content_id, actor.user_id)
