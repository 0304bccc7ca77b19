# hospital/db/schemas/dashboard_schema.py
from pydantic import Field
from .base_schema import CamelModel


class DepartmentSummary(CamelModel):
    name: str
    doctor_count: int = Field(0, ge=0)
    service_count: int = Field(0, ge=0)


class OverviewStats(CamelModel):
    """Figures on the admin dashboard landing page."""

    total_patients: int
    appointments_today: int
    doctors: int
    active_services: int
    pending_appointments: int


class UploadResponse(CamelModel):
    url: str


__all__ = ["DepartmentSummary", "OverviewStats", "UploadResponse"]
