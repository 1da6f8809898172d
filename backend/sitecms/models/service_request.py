from sitecms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class ServiceRequest(BaseModel, TenantMixin):
    __tablename__ = "service_requests"

    requester_name = db.Column(db.String(200), nullable=False)
    requester_email = db.Column(db.String(254), nullable=False)
    service_type = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=False)

    status = db.Column(db.String(20), nullable=False, default="New", index=True)
    created_by = db.Column(db.String(36), nullable=False)

    handled_by = db.Column(db.String(36), nullable=True)
    handled_at = db.Column(db.DateTime(timezone=True), nullable=True)

    __table_args__ = (
        db.Index("ix_request_scope", "app_id", "tenant_id", "created_at"),
    )
