# hospital/db/schemas/appointment_schemas.py
from pydantic import Field, field_validator
from datetime import date, datetime
from typing import Optional, List
from ..models import AppointmentStatus, LifecycleAction, TimeSlot
from .base_schema import CamelModel
from .doctor_schema import DoctorOption
from .service_schema import ServiceOption


class AppointmentCreate(CamelModel):
    """Booking request as submitted by the public appointment form."""

    patient_name: str = Field(..., min_length=1, max_length=100)
    patient_email: str = Field(..., min_length=1, max_length=200)
    patient_phone: str = Field(..., min_length=1, max_length=50)
    # Record ids are uuid strings
    doctor_id: Optional[str] = Field(None, max_length=36)
    service_id: Optional[str] = Field(None, max_length=36)
    # Omitted: derived from the selected doctor/service
    department: Optional[str] = Field(None, max_length=100)
    date: date
    time: TimeSlot
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("doctor_id", "service_id", "department", "notes", mode="before")
    @classmethod
    def blank_as_none(cls, v: Optional[str]) -> Optional[str]:
        # Unselected <select> and empty textarea arrive as ""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AppointmentResponse(CamelModel):
    id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    doctor_id: Optional[str] = None
    doctor_name: str
    service_id: Optional[str] = None
    service_name: str
    department: str
    date: date
    time: TimeSlot
    notes: Optional[str] = None
    status: AppointmentStatus
    created_at: datetime


class AdminAppointmentResponse(AppointmentResponse):
    # Actions the dashboard may offer for the current status
    allowed_actions: List[LifecycleAction] = Field(default_factory=list)


class TransitionRequest(CamelModel):
    action: LifecycleAction


class StatusUpdate(CamelModel):
    status: AppointmentStatus


class BookingFormState(CamelModel):
    """Pre-filled booking form: selections plus the options to choose from."""

    doctor_id: Optional[str] = None
    service_id: Optional[str] = None
    department: str = ""
    min_date: date
    time_slots: List[TimeSlot]
    doctors: List[DoctorOption]
    services: List[ServiceOption]


__all__ = [
    "AppointmentCreate",
    "AppointmentResponse",
    "AdminAppointmentResponse",
    "TransitionRequest",
    "StatusUpdate",
    "BookingFormState",
]
