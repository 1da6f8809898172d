from typing import Any, Dict, List
from sitecms.domain.invariants.content import assert_content_kind
from sitecms.store.documents import COLLECTION_BY_KIND, DocumentStore


def list_content(store: DocumentStore, *, tenant_id: str, kind: str) -> List[Dict[str, Any]]:
    """All items of one kind for the site, newest first."""
    assert_content_kind(kind)
    return store.snapshot(COLLECTION_BY_KIND[kind], tenant_id)


def projects_by_progress(projects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # Public front office shows the most advanced projects first
    return sorted(projects, key=lambda project: project.get("progress") or 0, reverse=True)
