# hospital/services/v1/catalog_service.py
from typing import Any, Optional

from common import get_app_logger
from hospital.db.schemas import DepartmentSummary, DoctorCreate, ServiceCreate
from .list_filters import distinct_values, filter_records
from .record_store import RecordStore

logger = get_app_logger(__name__)


class DoctorService:
    SEARCH_FIELDS = ("name", "specialty", "department")

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_doctors(
        self,
        search: Optional[str] = None,
        department: Optional[str] = None,
    ) -> list[Any]:
        return filter_records(
            await self.store.list("doctors"),
            search=search,
            search_fields=self.SEARCH_FIELDS,
            category_field="department",
            category=department,
        )

    async def get_doctor(self, doctor_id: str) -> Any:
        return await self.store.get("doctors", doctor_id)

    async def create_doctor(self, data: DoctorCreate) -> Any:
        doctor = await self.store.create("doctors", data.model_dump())
        logger.info("Doctor added", doctor_id=doctor.id, department=doctor.department)
        return doctor

    async def update_doctor(self, doctor_id: str, data: DoctorCreate) -> Any:
        doctor = await self.store.update("doctors", doctor_id, data.model_dump())
        logger.info("Doctor updated", doctor_id=doctor_id)
        return doctor

    async def delete_doctor(self, doctor_id: str) -> None:
        # Appointments keep their copied doctorName; nothing cascades
        await self.store.delete("doctors", doctor_id)
        logger.info("Doctor removed", doctor_id=doctor_id)


class HospitalServiceCatalog:
    """
    Medical services offered by the hospital.

    Public listings only ever contain active services; the admin listing
    contains all of them.
    """

    SEARCH_FIELDS = ("name", "description", "department")

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_services(
        self,
        search: Optional[str] = None,
        department: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[Any]:
        services = await self.store.list("services")
        if not include_inactive:
            services = [service for service in services if service.is_active]
        return filter_records(
            services,
            search=search,
            search_fields=self.SEARCH_FIELDS,
            category_field="department",
            category=department,
        )

    async def create_service(self, data: ServiceCreate) -> Any:
        service = await self.store.create("services", data.model_dump())
        logger.info("Service added", service_id=service.id, active=service.is_active)
        return service

    async def update_service(self, service_id: str, data: ServiceCreate) -> Any:
        service = await self.store.update("services", service_id, data.model_dump())
        logger.info("Service updated", service_id=service_id, active=service.is_active)
        return service

    async def delete_service(self, service_id: str) -> None:
        await self.store.delete("services", service_id)
        logger.info("Service removed", service_id=service_id)


async def list_departments(store: RecordStore) -> list[DepartmentSummary]:
    """Departments that have at least one doctor or active service."""
    doctors = await store.list("doctors")
    services = [service for service in await store.list("services") if service.is_active]

    names = distinct_values([*doctors, *services], "department")
    return [
        DepartmentSummary(
            name=name,
            doctor_count=sum(1 for doctor in doctors if doctor.department == name),
            service_count=sum(1 for service in services if service.department == name),
        )
        for name in sorted(names)
    ]


__all__ = ["DoctorService", "HospitalServiceCatalog", "list_departments"]
