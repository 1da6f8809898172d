import logging
from typing import Any, Dict, Optional
from sitecms.auth.identity import Actor
from sitecms.domain.exceptions import BackendUnavailable
from sitecms.domain.invariants.content import normalize_content_input
from sitecms.models.content_item import ContentItem
from sitecms.store.documents import COLLECTION_BY_KIND, DocumentStore

logger = logging.getLogger(__name__)


def create_content(
    store: Optional[DocumentStore],
    *,
    tenant_id: str,
    actor: Optional[Actor],
    kind: str,
    data: Dict[str, Any],
) -> ContentItem:
    """
    Publish a new page, news item or project for a site.

    Edge cases handled:
    - Identity or store not ready yet: rejected, nothing written
    - Empty title or body: rejected, nothing written
    - Project progress outside 0-100: clamped before the write
    - Store failure: StoreError bubbles up, no retry
    """

    if store is None:
        raise BackendUnavailable("Document store is not ready yet")
    if actor is None:
        raise BackendUnavailable("Identity is not ready yet. Sign in before publishing.")

    fields = normalize_content_input(kind, data)
    store.policy.authorize_admin_write(actor, tenant_id)

    item = store.create(
        COLLECTION_BY_KIND[kind],
        tenant_id,
        {
            "title": fields["title"],
            "body": fields["body"],
            "progress": fields["progress"],
            "author_id": actor.user_id,
        },
    )

    logger.info("%s '%s' published on site %s by %s", kind, item.title, tenant_id, actor.user_id)
    return item
