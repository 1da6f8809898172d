import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sitecms.extensions import db
from sitecms.domain.exceptions import BackendUnavailable, NotFound, StoreError
from sitecms.models.content_item import ContentItem
from sitecms.models.service_request import ServiceRequest
from sitecms.normalizers.content import normalize_content
from sitecms.normalizers.request import normalize_request
from sitecms.utils.transaction import transactional
from .live import LiveQueryHub
from .policy import AccessPolicy

logger = logging.getLogger(__name__)

EXTENSION_KEY = "sitecms.store"


@dataclass(frozen=True)
class CollectionSpec:
    """
    One logical collection: the model backing it, the fixed field values
    that partition it out of that model, and how a document is rendered.
    """

    name: str
    model: Type[Any]
    normalizer: Callable[[Any], Dict[str, Any]]
    fixed_fields: Dict[str, Any] = field(default_factory=dict)


COLLECTIONS: Dict[str, CollectionSpec] = {
    "pages": CollectionSpec("pages", ContentItem, normalize_content, {"kind": "page"}),
    "news": CollectionSpec("news", ContentItem, normalize_content, {"kind": "news"}),
    "projects": CollectionSpec("projects", ContentItem, normalize_content, {"kind": "project"}),
    "requests": CollectionSpec("requests", ServiceRequest, normalize_request),
}

CONTENT_COLLECTIONS = ("pages", "news", "projects")

COLLECTION_BY_KIND = {
    spec.fixed_fields["kind"]: name
    for name, spec in COLLECTIONS.items()
    if "kind" in spec.fixed_fields
}


class DocumentStore:
    """
    Tenant scoped create / query / update / delete over the logical
    collections, namespaced under one application id.

    Every committed write is followed by a publish on ``self.live`` so
    open subscriptions receive the new result set.
    """

    def __init__(self, *, app_id: str, policy: AccessPolicy):
        self.app_id = app_id
        self.policy = policy
        self.live = LiveQueryHub(self.snapshot)

    def collection(self, name: str) -> CollectionSpec:
        spec = COLLECTIONS.get(name)
        if spec is None:
            raise NotFound(f"Unknown collection: {name}")
        return spec

    def path(self, name: str) -> str:
        return f"/artifacts/{self.app_id}/public/data/{self.collection(name).name}"

    def _scoped(self, spec: CollectionSpec, tenant_id: str):
        return spec.model.query.filter_by(
            app_id=self.app_id,
            tenant_id=tenant_id,
            **spec.fixed_fields,
        )

    def query(self, name: str, tenant_id: str) -> List[Any]:
        """All documents of the collection for one tenant, newest first."""
        spec = self.collection(name)
        try:
            return (
                self._scoped(spec, tenant_id)
                .order_by(spec.model.created_at.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("Query on %s for site %s failed", self.path(name), tenant_id)
            raise StoreError(f"Could not load {name}") from exc

    def snapshot(self, name: str, tenant_id: str) -> List[Dict[str, Any]]:
        spec = self.collection(name)
        return [spec.normalizer(document) for document in self.query(name, tenant_id)]

    def get(self, name: str, tenant_id: str, document_id: str):
        spec = self.collection(name)
        try:
            document = self._scoped(spec, tenant_id).filter_by(id=document_id).first()
        except SQLAlchemyError as exc:
            logger.exception("Lookup of %s/%s failed", self.path(name), document_id)
            raise StoreError(f"Could not load {name} document") from exc

        return self.policy.assert_same_tenant(document, tenant_id, name)

    def create(self, name: str, tenant_id: str, fields: Dict[str, Any]):
        spec = self.collection(name)

        document = spec.model()
        document.app_id = self.app_id
        document.tenant_id = tenant_id
        for key, value in {**fields, **spec.fixed_fields}.items():
            setattr(document, key, value)

        with transactional(f"create in {name}"):
            db.session.add(document)
            db.session.flush()  # ensures document.id is available

        logger.info("Created %s/%s for site %s", self.path(name), document.id, tenant_id)
        self.live.publish(name, tenant_id)
        return document

    def update(self, name: str, tenant_id: str, document_id: str, fields: Dict[str, Any]):
        document = self.get(name, tenant_id, document_id)

        with transactional(f"update in {name}"):
            for key, value in fields.items():
                setattr(document, key, value)

        logger.info(
            "Updated %s/%s fields=%s", self.path(name), document_id, sorted(fields)
        )
        self.live.publish(name, tenant_id)
        return document

    def delete(self, name: str, tenant_id: str, document_id: str) -> None:
        document = self.get(name, tenant_id, document_id)

        with transactional(f"delete in {name}"):
            db.session.delete(document)

        logger.info("Deleted %s/%s for site %s", self.path(name), document_id, tenant_id)
        self.live.publish(name, tenant_id)


def init_store(app) -> DocumentStore:
    store = DocumentStore(
        app_id=app.config["APP_ID"],
        policy=AccessPolicy(require_admin_role=app.config["REQUIRE_ADMIN_ROLE"]),
    )
    app.extensions[EXTENSION_KEY] = store
    return store


def get_store(app=None) -> DocumentStore:
    store: Optional[DocumentStore] = (app or current_app).extensions.get(EXTENSION_KEY)
    if store is None:
        raise BackendUnavailable("Document store is not ready yet")
    return store
