from .identity import Actor, ANONYMOUS_MARKER, current_actor, issue_access_token

__all__ = ["Actor", "ANONYMOUS_MARKER", "current_actor", "issue_access_token"]
