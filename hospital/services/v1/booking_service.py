# hospital/services/v1/booking_service.py
"""
Appointment booking flow.

A BookingForm holds the patient's input plus the doctor and service lists
loaded for it. Selecting a doctor or a service copies its department into
the form (last selection wins). Submitting resolves the display names from
those same lists, so a stale id books with an empty name rather than
failing, and writes exactly one pending appointment.
"""

from datetime import date
from typing import Any, Optional, Sequence

from common import BookingConfig, get_app_logger
from common.api_error import AppError, BookingInProgressError, SlotUnavailableError
from hospital.db.models import AppointmentStatus, TimeSlot, utcnow
from hospital.db.schemas import (
    AppointmentCreate,
    BookingFormState,
    DoctorOption,
    ServiceOption,
)
from .record_store import RecordStore

logger = get_app_logger(__name__)


def _find(records: Sequence[Any], record_id: Optional[str]) -> Optional[Any]:
    if not record_id:
        return None
    return next((record for record in records if record.id == record_id), None)


class BookingForm:
    def __init__(self, doctors: Sequence[Any], services: Sequence[Any]):
        self.doctors = list(doctors)
        self.services = list(services)
        self.is_submitting = False
        self.reset()

    def reset(self) -> None:
        self.patient_name = ""
        self.patient_email = ""
        self.patient_phone = ""
        self.doctor_id: Optional[str] = None
        self.service_id: Optional[str] = None
        self.department = ""
        self.date: Optional[date] = None
        self.time: Optional[TimeSlot] = None
        self.notes: Optional[str] = None

    @property
    def min_date(self) -> date:
        # Advertised to the date picker only; not checked on submit
        return date.today()

    def select_doctor(self, doctor_id: Optional[str]) -> None:
        self.doctor_id = doctor_id or None
        doctor = _find(self.doctors, self.doctor_id)
        if doctor is not None:
            self.department = doctor.department

    def select_service(self, service_id: Optional[str]) -> None:
        self.service_id = service_id or None
        service = _find(self.services, self.service_id)
        if service is not None:
            self.department = service.department

    def prefill(self, doctor_id: Optional[str] = None, service_id: Optional[str] = None) -> None:
        """Pre-select ids handed over by another page (?doctor=...&service=...)."""
        if doctor_id:
            self.select_doctor(doctor_id)
        if service_id:
            self.select_service(service_id)

    def fill(self, payload: AppointmentCreate) -> None:
        """
        Copy a submitted booking into the form. The doctor is selected
        before the service; an explicit department overrides both.
        """
        self.patient_name = payload.patient_name
        self.patient_email = payload.patient_email
        self.patient_phone = payload.patient_phone
        self.select_doctor(payload.doctor_id)
        self.select_service(payload.service_id)
        if payload.department:
            self.department = payload.department
        self.date = payload.date
        self.time = payload.time
        self.notes = payload.notes

    def missing_fields(self) -> list[str]:
        required = {
            "patientName": self.patient_name,
            "patientEmail": self.patient_email,
            "patientPhone": self.patient_phone,
            "date": self.date,
            "time": self.time,
        }
        return [name for name, value in required.items() if not value]

    def resolve_names(self) -> tuple[str, str]:
        doctor = _find(self.doctors, self.doctor_id)
        service = _find(self.services, self.service_id)
        return (
            doctor.name if doctor is not None else "",
            service.name if service is not None else "",
        )

    def to_record(self) -> dict[str, Any]:
        doctor_name, service_name = self.resolve_names()
        return {
            "patient_name": self.patient_name,
            "patient_email": self.patient_email,
            "patient_phone": self.patient_phone,
            "doctor_id": self.doctor_id,
            "doctor_name": doctor_name,
            "service_id": self.service_id,
            "service_name": service_name,
            "department": self.department,
            "date": self.date,
            "time": self.time,
            "notes": self.notes,
            "status": AppointmentStatus.PENDING,
            "created_at": utcnow(),
        }

    def state(self) -> BookingFormState:
        return BookingFormState(
            doctor_id=self.doctor_id,
            service_id=self.service_id,
            department=self.department,
            min_date=self.min_date,
            time_slots=list(TimeSlot),
            doctors=[DoctorOption.model_validate(doctor) for doctor in self.doctors],
            services=[ServiceOption.model_validate(service) for service in self.services],
        )


class BookingService:
    def __init__(self, store: RecordStore, config: Optional[BookingConfig] = None):
        self.store = store
        self.config = config or BookingConfig()

    async def load_form(
        self,
        doctor_id: Optional[str] = None,
        service_id: Optional[str] = None,
    ) -> BookingForm:
        """Fetch the doctor and active service lists once and pre-fill selections."""
        doctors = await self.store.list("doctors")
        services = [service for service in await self.store.list("services") if service.is_active]
        form = BookingForm(doctors, services)
        form.prefill(doctor_id=doctor_id, service_id=service_id)
        return form

    async def submit(self, form: BookingForm) -> Any:
        """
        Write one pending appointment from the form.

        The form is cleared on success and left untouched on failure.
        """
        if form.is_submitting:
            raise BookingInProgressError()

        missing = form.missing_fields()
        if missing:
            raise AppError(
                f"Missing required fields: {', '.join(missing)}",
                status_code=422,
                code="INCOMPLETE_BOOKING",
            )

        form.is_submitting = True
        try:
            if self.config.enforce_unique_slot:
                await self._ensure_slot_free(form)
            appointment = await self.store.create("appointments", form.to_record())
        finally:
            form.is_submitting = False

        logger.info(
            "Appointment booked",
            appointment_id=appointment.id,
            doctor_id=appointment.doctor_id,
            department=appointment.department,
            date=str(appointment.date),
            time=appointment.time.value,
        )
        form.reset()
        return appointment

    async def book(self, payload: AppointmentCreate) -> Any:
        form = await self.load_form()
        form.fill(payload)
        return await self.submit(form)

    async def _ensure_slot_free(self, form: BookingForm) -> None:
        if not form.doctor_id:
            return
        for appointment in await self.store.list("appointments"):
            if (
                appointment.doctor_id == form.doctor_id
                and appointment.date == form.date
                and appointment.time == form.time
                and appointment.status != AppointmentStatus.CANCELLED
            ):
                raise SlotUnavailableError(
                    f"Doctor already has an appointment on {form.date} at {form.time.value}"  # type: ignore[union-attr]
                )


__all__ = ["BookingForm", "BookingService"]
