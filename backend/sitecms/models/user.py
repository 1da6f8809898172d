from werkzeug.security import generate_password_hash, check_password_hash
from sitecms.extensions import db
from .base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "email", name="uq_user_email_per_tenant"),
    )

    tenant_id = db.Column(db.String(100), nullable=False, index=True)
    email = db.Column(db.String(120), nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(50), nullable=False, default='user')
    is_active = db.Column(db.Boolean, default=True)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
