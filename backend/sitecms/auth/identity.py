import uuid
from dataclasses import dataclass
from typing import Optional
from flask_jwt_extended import create_access_token, get_jwt, verify_jwt_in_request

# Recorded as the creator of service requests submitted without an identity
ANONYMOUS_MARKER = "public"


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: str = "visitor"
    anonymous: bool = True
    site_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return not self.anonymous and self.role == "admin"

    @classmethod
    def new_anonymous(cls) -> "Actor":
        return cls(user_id=str(uuid.uuid4()))


def issue_access_token(actor: Actor) -> str:
    return create_access_token(
        identity=actor.user_id,
        additional_claims={
            "role": actor.role,
            "anonymous": actor.anonymous,
            "site_id": actor.site_id,
        },
    )


def current_actor() -> Optional[Actor]:
    """
    The identity behind the current request, or None when no valid
    access token was sent.
    """
    if verify_jwt_in_request(optional=True) is None:
        return None

    claims = get_jwt()
    return Actor(
        user_id=claims["sub"],
        role=claims.get("role", "visitor"),
        anonymous=claims.get("anonymous", True),
        site_id=claims.get("site_id"),
    )
