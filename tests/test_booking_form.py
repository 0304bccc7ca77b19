import asyncio
import datetime as dt
from types import SimpleNamespace

import pytest

from common.api_error import AppError, BookingInProgressError
from hospital.db.models import AppointmentStatus, TimeSlot
from hospital.db.schemas import AppointmentCreate
from hospital.services.v1 import BookingForm, BookingService

DOCTORS = [
    SimpleNamespace(id="d1", name="Dr. Sarah Johnson", specialty="Cardiologist", department="Cardiology"),
    SimpleNamespace(id="d2", name="Dr. Michael Chen", specialty="Neurologist", department="Neurology"),
]
SERVICES = [
    SimpleNamespace(id="s1", name="Heart Surgery", department="Surgery", is_active=True),
]


class FakeStore:
    """Records what the booking service writes."""

    def __init__(self, fail: bool = False):
        self.created = []
        self.fail = fail

    async def list(self, collection, **kwargs):
        return {"doctors": DOCTORS, "services": SERVICES, "appointments": []}[collection]

    async def create(self, collection, data):
        if self.fail:
            raise AppError("Record store unavailable", status_code=503, code="DATABASE_ERROR")
        record = SimpleNamespace(id=f"a{len(self.created) + 1}", **data)
        self.created.append((collection, data))
        return record


def payload(**overrides) -> AppointmentCreate:
    data = {
        "patientName": "Jane Doe",
        "patientEmail": "jane@example.com",
        "patientPhone": "555-1234",
        "doctorId": "d1",
        "serviceId": "",
        "date": "2025-06-01",
        "time": "10:00",
        "notes": "",
    }
    data.update(overrides)
    return AppointmentCreate.model_validate(data)


def filled_form(**overrides) -> BookingForm:
    form = BookingForm(DOCTORS, SERVICES)
    form.fill(payload(**overrides))
    return form


def test_selecting_a_doctor_sets_the_department():
    form = BookingForm(DOCTORS, SERVICES)
    form.select_doctor("d1")
    assert form.department == "Cardiology"


def test_last_selection_wins_for_department():
    form = BookingForm(DOCTORS, SERVICES)
    form.select_doctor("d1")
    form.select_service("s1")
    assert form.department == "Surgery"

    form.select_doctor("d2")
    assert form.department == "Neurology"


def test_unknown_selection_keeps_previous_department():
    form = BookingForm(DOCTORS, SERVICES)
    form.select_doctor("d1")
    form.select_service("gone")
    assert form.department == "Cardiology"
    assert form.service_id == "gone"


def test_prefill_applies_doctor_then_service():
    form = BookingForm(DOCTORS, SERVICES)
    form.prefill(doctor_id="d1", service_id="s1")
    state = form.state()
    assert (state.doctor_id, state.service_id, state.department) == ("d1", "s1", "Surgery")
    assert state.time_slots == list(TimeSlot)
    assert state.min_date == dt.date.today()


def test_explicit_department_overrides_selection():
    form = filled_form(department="Emergency")
    assert form.department == "Emergency"


def test_stale_ids_resolve_to_empty_names():
    form = filled_form(doctorId="deleted-doctor", serviceId="deleted-service")
    assert form.resolve_names() == ("", "")

    record = form.to_record()
    assert record["doctor_id"] == "deleted-doctor"
    assert record["doctor_name"] == ""
    assert record["service_name"] == ""


def test_record_is_pending_with_copied_names():
    record = filled_form().to_record()
    assert record["status"] is AppointmentStatus.PENDING
    assert record["doctor_name"] == "Dr. Sarah Johnson"
    assert record["service_id"] is None
    assert record["service_name"] == ""
    assert record["department"] == "Cardiology"
    assert record["notes"] is None
    assert record["created_at"].tzinfo is not None


def test_missing_fields_lists_required_inputs():
    form = BookingForm(DOCTORS, SERVICES)
    assert form.missing_fields() == [
        "patientName",
        "patientEmail",
        "patientPhone",
        "date",
        "time",
    ]


def test_submit_writes_once_and_clears_the_form():
    store = FakeStore()
    form = filled_form()

    appointment = asyncio.run(BookingService(store).submit(form))

    assert len(store.created) == 1
    assert store.created[0][0] == "appointments"
    assert appointment.status is AppointmentStatus.PENDING
    assert form.patient_name == ""
    assert form.doctor_id is None
    assert form.is_submitting is False


def test_failed_submit_keeps_the_input():
    form = filled_form()
    with pytest.raises(AppError):
        asyncio.run(BookingService(FakeStore(fail=True)).submit(form))

    assert form.patient_name == "Jane Doe"
    assert form.doctor_id == "d1"
    assert form.is_submitting is False


def test_submit_while_in_flight_is_rejected():
    store = FakeStore()
    form = filled_form()
    form.is_submitting = True

    with pytest.raises(BookingInProgressError):
        asyncio.run(BookingService(store).submit(form))
    assert store.created == []


def test_incomplete_form_is_not_written():
    store = FakeStore()
    form = BookingForm(DOCTORS, SERVICES)

    with pytest.raises(AppError) as exc:
        asyncio.run(BookingService(store).submit(form))
    assert exc.value.status_code == 422
    assert store.created == []


def test_load_form_uses_active_services_only():
    global SERVICES
    original = SERVICES
    SERVICES = original + [
        SimpleNamespace(id="s2", name="Retired", department="Surgery", is_active=False)
    ]
    try:
        form = asyncio.run(BookingService(FakeStore()).load_form(service_id="s1"))
    finally:
        SERVICES = original

    assert [service.id for service in form.services] == ["s1"]
    assert form.department == "Surgery"
