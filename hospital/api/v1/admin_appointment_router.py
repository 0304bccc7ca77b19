# hospital/api/v1/admin_appointment_router.py
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from hospital.auth import require_admin
from hospital.db import get_db
from hospital.db.schemas import AdminAppointmentResponse, StatusUpdate, TransitionRequest
from hospital.services.v1 import AppointmentLifecycleService, RecordStore, allowed_actions

admin_appointment_router = APIRouter(
    prefix="/admin/appointments",
    tags=["Admin: Appointments"],
    dependencies=[Depends(require_admin)],
)

_TRANSITION_ERRORS = {
    404: {"description": "Appointment not found"},
    409: {"description": "Not an edge of the appointment lifecycle"},
}


def _admin_view(appointment: Any) -> AdminAppointmentResponse:
    view = AdminAppointmentResponse.model_validate(appointment)
    view.allowed_actions = allowed_actions(view.status)
    return view


@admin_appointment_router.get(
    "",
    response_model=list[AdminAppointmentResponse],
    summary="List appointments, newest first",
    description="""
    - `search`: substring of patient name, doctor name or department
    - `status`: pending | confirmed | cancelled | completed | all
    """,
)
async def list_appointments(
    search: Optional[str] = Query(None, max_length=100),
    status: Optional[str] = Query(None, max_length=20),
    db: AsyncSession = Depends(get_db),
):
    appointments = await AppointmentLifecycleService(RecordStore(db)).list_appointments(
        search, status
    )
    return [_admin_view(appointment) for appointment in appointments]


@admin_appointment_router.post(
    "/{appointment_id}/transitions",
    response_model=AdminAppointmentResponse,
    summary="Apply a lifecycle action",
    responses=_TRANSITION_ERRORS,
)
async def apply_transition(
    appointment_id: str,
    payload: TransitionRequest,
    db: AsyncSession = Depends(get_db),
):
    service = AppointmentLifecycleService(RecordStore(db))
    return _admin_view(await service.transition(appointment_id, payload.action))


@admin_appointment_router.patch(
    "/{appointment_id}",
    response_model=AdminAppointmentResponse,
    summary="Set status directly",
    description="Accepted only when the new status is one lifecycle step away.",
    responses=_TRANSITION_ERRORS,
)
async def update_status(
    appointment_id: str,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = AppointmentLifecycleService(RecordStore(db))
    return _admin_view(await service.set_status(appointment_id, payload.status))


__all__ = ["admin_appointment_router"]
