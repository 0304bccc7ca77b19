# hospital/services/v1/patient_service.py
from typing import Any, Optional

from hospital.db.schemas import PatientCreate
from .list_filters import filter_records
from .record_store import RecordStore


class PatientService:
    SEARCH_FIELDS = ("name", "email", "phone")

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_patients(self, search: Optional[str] = None) -> list[Any]:
        return filter_records(
            await self.store.list("patients"),
            search=search,
            search_fields=self.SEARCH_FIELDS,
        )

    async def get_patient_profile(self, patient_id: str) -> Any:
        return await self.store.get("patients", patient_id)

    async def register_patient(self, data: PatientCreate) -> Any:
        return await self.store.create("patients", data.model_dump())

    async def delete_patient(self, patient_id: str) -> None:
        await self.store.delete("patients", patient_id)


__all__ = ["PatientService"]
