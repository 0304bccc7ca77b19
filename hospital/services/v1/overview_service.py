# hospital/services/v1/overview_service.py
from datetime import date
from typing import Optional

from hospital.db.models import AppointmentStatus
from hospital.db.schemas import OverviewStats
from .record_store import RecordStore


async def build_overview(store: RecordStore, today: Optional[date] = None) -> OverviewStats:
    today = today or date.today()
    appointments = await store.list("appointments")
    services = await store.list("services")

    return OverviewStats(
        total_patients=len(await store.list("patients")),
        appointments_today=sum(
            1
            for appointment in appointments
            if appointment.date == today
            and appointment.status != AppointmentStatus.CANCELLED
        ),
        doctors=len(await store.list("doctors")),
        active_services=sum(1 for service in services if service.is_active),
        pending_appointments=sum(
            1 for appointment in appointments if appointment.status == AppointmentStatus.PENDING
        ),
    )


__all__ = ["build_overview"]
