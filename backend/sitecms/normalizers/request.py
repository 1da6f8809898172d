from typing import Any, Dict
from sitecms.domain.lifecycle.request import available_action
from sitecms.models.service_request import ServiceRequest
from sitecms.utils.timestamps import isoformat_or_none


def normalize_request(request: ServiceRequest) -> Dict[str, Any]:
    """
    Service requests are only ever listed to admins, so contact details
    and handling stamps are always included.
    """
    return {
        "id": request.id,
        "site_id": request.tenant_id,
        "requester_name": request.requester_name,
        "requester_email": request.requester_email,
        "service_type": request.service_type,
        "description": request.description,
        "status": request.status,
        "available_action": available_action(request.status),
        "created_at": isoformat_or_none(request.created_at),
        "created_by": request.created_by,
        "handled_by": request.handled_by,
        "handled_at": isoformat_or_none(request.handled_at),
    }
