from sitecms.extensions import db


class TenantMixin:
    # Collection namespace (one per deployed application)
    app_id = db.Column(db.String(100), nullable=False, index=True)

    # Site the document belongs to; every read filters on it
    tenant_id = db.Column(db.String(100), nullable=False, index=True)
