from sitecms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class ContentItem(BaseModel, TenantMixin):
    __tablename__ = "cms_content"

    kind = db.Column(db.String(20), nullable=False, index=True)  # page, news, project
    title = db.Column(db.String(200), nullable=False)
    body = db.Column(db.Text, nullable=False)
    progress = db.Column(db.Integer, nullable=True)  # projects only
    author_id = db.Column(db.String(36), nullable=False)

    __table_args__ = (
        db.Index("ix_content_scope", "app_id", "tenant_id", "kind", "created_at"),
        db.CheckConstraint(
            "progress IS NULL OR (progress >= 0 AND progress <= 100)",
            name="ck_content_progress_range",
        ),
    )
