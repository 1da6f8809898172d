from .content_item import ContentItem
from .service_request import ServiceRequest
from .user import User

__all__ = ["ContentItem", "ServiceRequest", "User"]
