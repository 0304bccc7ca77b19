import asyncio
import datetime as dt

import pytest

from common.api_error import RecordNotFoundError
from hospital.db import DbManager
from hospital.db.models import AppointmentStatus, TimeSlot
from hospital.services.v1 import RecordStore, build_overview


def run_with_store(url, scenario):
    """Run `scenario(store)` against a fresh database."""

    async def main():
        manager = DbManager(url)
        await manager.create_all()
        try:
            async with manager.session() as session:
                return await scenario(RecordStore(session))
        finally:
            await manager.dispose()

    return asyncio.run(main())


def appointment_data(**overrides):
    data = {
        "patient_name": "Jane Doe",
        "patient_email": "jane@example.com",
        "patient_phone": "555-1234",
        "doctor_id": None,
        "doctor_name": "",
        "service_id": None,
        "service_name": "",
        "department": "Cardiology",
        "date": dt.date(2025, 6, 1),
        "time": TimeSlot.SLOT_1000,
        "notes": None,
        "status": AppointmentStatus.PENDING,
    }
    data.update(overrides)
    return data


def test_create_assigns_id_and_created_at(sqlite_url):
    async def scenario(store):
        doctor = await store.create(
            "doctors",
            {"name": "Dr. A", "specialty": "Cardiologist", "department": "Cardiology"},
        )
        fetched = await store.get("doctors", doctor.id)
        return doctor, fetched

    doctor, fetched = run_with_store(sqlite_url, scenario)
    assert doctor.id
    assert doctor.created_at is not None
    assert fetched.name == "Dr. A"
    assert fetched.rating == 5.0


def test_update_writes_only_given_fields(sqlite_url):
    async def scenario(store):
        appointment = await store.create("appointments", appointment_data())
        created_at = appointment.created_at
        updated = await store.update(
            "appointments",
            appointment.id,
            {"status": AppointmentStatus.CONFIRMED, "created_at": dt.datetime(2000, 1, 1)},
        )
        return created_at, updated

    created_at, updated = run_with_store(sqlite_url, scenario)
    assert updated.status is AppointmentStatus.CONFIRMED
    assert updated.created_at == created_at
    assert updated.patient_name == "Jane Doe"


def test_update_rejects_unknown_fields(sqlite_url):
    async def scenario(store):
        patient = await store.create(
            "patients",
            {"name": "P", "email": "p@example.com", "phone": "1"},
        )
        await store.update("patients", patient.id, {"favourite_colour": "blue"})

    with pytest.raises(ValueError):
        run_with_store(sqlite_url, scenario)


def test_missing_record_is_not_found(sqlite_url):
    async def scenario(store):
        await store.delete("services", "nope")

    with pytest.raises(RecordNotFoundError) as exc:
        run_with_store(sqlite_url, scenario)
    assert exc.value.status_code == 404


def test_list_orders_by_column(sqlite_url):
    async def scenario(store):
        first = await store.create("appointments", appointment_data(patient_name="First"))
        second = await store.create(
            "appointments",
            appointment_data(
                patient_name="Second",
                created_at=first.created_at + dt.timedelta(seconds=5),
            ),
        )
        newest_first = await store.list("appointments", order_by="created_at", descending=True)
        return [record.patient_name for record in newest_first], second

    order, _ = run_with_store(sqlite_url, scenario)
    assert order == ["Second", "First"]


def test_unknown_collection_is_a_programming_error():
    with pytest.raises(ValueError):
        RecordStore.model_for("invoices")


def test_overview_counts(sqlite_url):
    today = dt.date(2025, 6, 1)

    async def scenario(store):
        await store.create("patients", {"name": "P", "email": "p@example.com", "phone": "1"})
        await store.create(
            "doctors", {"name": "Dr. A", "specialty": "Cardiologist", "department": "Cardiology"}
        )
        await store.create("services", {"name": "Old", "department": "Surgery", "is_active": False})
        await store.create("services", {"name": "New", "department": "Surgery"})
        await store.create("appointments", appointment_data())
        await store.create(
            "appointments", appointment_data(status=AppointmentStatus.CANCELLED)
        )
        await store.create(
            "appointments",
            appointment_data(date=dt.date(2025, 6, 2), status=AppointmentStatus.CONFIRMED),
        )
        return await build_overview(store, today=today)

    stats = run_with_store(sqlite_url, scenario)
    assert stats.total_patients == 1
    assert stats.doctors == 1
    assert stats.active_services == 1
    assert stats.appointments_today == 1
    assert stats.pending_appointments == 1
