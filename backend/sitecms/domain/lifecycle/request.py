from typing import Dict, Optional
from ..exceptions import IllegalTransition

STATUS_NEW = "New"
STATUS_IN_PROGRESS = "InProgress"
STATUS_DONE = "Done"

REQUEST_STATUSES = (STATUS_NEW, STATUS_IN_PROGRESS, STATUS_DONE)

# The single forward action offered for each status
ACTIONS_BY_STATUS: Dict[str, Optional[str]] = {
    STATUS_NEW: "take_in_charge",
    STATUS_IN_PROGRESS: "mark_done",
    STATUS_DONE: None,
}

TARGET_BY_ACTION: Dict[str, str] = {
    "take_in_charge": STATUS_IN_PROGRESS,
    "mark_done": STATUS_DONE,
}


def available_action(status: str) -> Optional[str]:
    if status not in ACTIONS_BY_STATUS:
        raise IllegalTransition(f"Unknown request status: {status}")
    return ACTIONS_BY_STATUS[status]


def resolve_transition(*, from_status: str, action: str) -> str:
    """
    Guards service request transitions: New → InProgress → Done.

    Re-applying the action that produced ``from_status`` is accepted and
    yields the same status, so two admins racing on one request both succeed.
    """
    to_status = TARGET_BY_ACTION.get(action)
    if to_status is None:
        raise IllegalTransition(f"Unknown action: {action}")

    if from_status == to_status:
        return to_status

    if available_action(from_status) != action:
        raise IllegalTransition(
            f"Illegal request transition: {from_status} → {to_status}"
        )

    return to_status
