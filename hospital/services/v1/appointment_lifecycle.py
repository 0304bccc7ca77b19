# hospital/services/v1/appointment_lifecycle.py
"""
Appointment status state machine, enforced on every write.

    pending   --confirm-->  confirmed
    pending   --cancel--->  cancelled
    confirmed --complete--> completed
    cancelled --reopen--->  pending

completed is terminal.
"""

from typing import Any, Optional, Sequence

from common import get_app_logger
from common.api_error import InvalidTransitionError
from hospital.db.models import AppointmentStatus, LifecycleAction
from .list_filters import filter_records
from .record_store import RecordStore

logger = get_app_logger(__name__)

TRANSITIONS: dict[tuple[AppointmentStatus, LifecycleAction], AppointmentStatus] = {
    (AppointmentStatus.PENDING, LifecycleAction.CONFIRM): AppointmentStatus.CONFIRMED,
    (AppointmentStatus.PENDING, LifecycleAction.CANCEL): AppointmentStatus.CANCELLED,
    (AppointmentStatus.CONFIRMED, LifecycleAction.COMPLETE): AppointmentStatus.COMPLETED,
    (AppointmentStatus.CANCELLED, LifecycleAction.REOPEN): AppointmentStatus.PENDING,
}


def allowed_actions(status: AppointmentStatus) -> list[LifecycleAction]:
    return [action for (source, action) in TRANSITIONS if source == status]


def is_terminal(status: AppointmentStatus) -> bool:
    return not allowed_actions(status)


def next_status(current: AppointmentStatus, action: LifecycleAction) -> AppointmentStatus:
    try:
        return TRANSITIONS[(current, action)]
    except KeyError:
        raise InvalidTransitionError(
            f"Cannot {action.value} an appointment that is {current.value}"
        ) from None


def action_for(current: AppointmentStatus, target: AppointmentStatus) -> LifecycleAction:
    """The single action that moves `current` to `target`."""
    for (source, action), destination in TRANSITIONS.items():
        if source == current and destination == target:
            return action
    raise InvalidTransitionError(
        f"No transition from {current.value} to {target.value}"
    )


class AppointmentLifecycleService:
    """Admin view of appointments: listing, filtering and status changes."""

    SEARCH_FIELDS = ("patient_name", "doctor_name", "department")

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_appointments(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Any]:
        """Newest first, then search AND status."""
        records: Sequence[Any] = await self.store.list(
            "appointments", order_by="created_at", descending=True
        )
        return filter_records(
            records,
            search=search,
            search_fields=self.SEARCH_FIELDS,
            category_field="status",
            category=status,
        )

    async def transition(self, appointment_id: str, action: LifecycleAction) -> Any:
        appointment = await self.store.get("appointments", appointment_id)
        current = AppointmentStatus(appointment.status)
        target = next_status(current, action)

        # status is the only field a transition writes
        updated = await self.store.update(
            "appointments", appointment_id, {"status": target}
        )
        logger.info(
            "Appointment status changed",
            appointment_id=appointment_id,
            action=action.value,
            from_status=current.value,
            to_status=target.value,
        )
        return updated

    async def set_status(self, appointment_id: str, target: AppointmentStatus) -> Any:
        appointment = await self.store.get("appointments", appointment_id)
        action = action_for(AppointmentStatus(appointment.status), target)
        return await self.transition(appointment_id, action)


__all__ = [
    "TRANSITIONS",
    "allowed_actions",
    "is_terminal",
    "next_status",
    "action_for",
    "AppointmentLifecycleService",
]
