# hospital/api/v1/appointment_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from hospital.db import get_db
from hospital.db.schemas import AppointmentCreate, AppointmentResponse, BookingFormState
from hospital.services.v1 import BookingService, RecordStore

appointment_router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
)


def _booking_service(request: Request, db: AsyncSession) -> BookingService:
    return BookingService(RecordStore(db), request.app.state.config.booking)


@appointment_router.get(
    "/form",
    response_model=BookingFormState,
    summary="Booking form state",
    description="""
    Doctor and active service options, the bookable time slots and the
    earliest date, with `doctor`/`service` pre-selected when given.
    """,
)
async def get_booking_form(
    request: Request,
    doctor: Optional[str] = Query(None, description="Doctor id to pre-select"),
    service: Optional[str] = Query(None, description="Service id to pre-select"),
    db: AsyncSession = Depends(get_db),
):
    form = await _booking_service(request, db).load_form(doctor_id=doctor, service_id=service)
    return form.state()


@appointment_router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    description="""
    Creates one `pending` appointment. Doctor and service names are copied
    into the record. Same doctor/date/time may be booked twice unless
    BOOKING_ENFORCE_UNIQUE_SLOT is on.
    """,
    responses={
        409: {"description": "Slot taken (BOOKING_ENFORCE_UNIQUE_SLOT on)"},
        503: {"description": "Record store unavailable"},
    },
)
async def book_appointment(
    payload: AppointmentCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    return await _booking_service(request, db).book(payload)


__all__ = ["appointment_router"]
