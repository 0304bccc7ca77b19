# hospital/api/v1/admin_patient_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from hospital.auth import require_admin
from hospital.db import get_db
from hospital.db.schemas import PatientCreate, PatientResponse
from hospital.services.v1 import PatientService, RecordStore

admin_patient_router = APIRouter(
    prefix="/admin/patients",
    tags=["Admin: Patients"],
    dependencies=[Depends(require_admin)],
)


@admin_patient_router.get(
    "",
    response_model=list[PatientResponse],
    summary="List patients",
    description="`search` matches name, email or phone, case-insensitively.",
)
async def list_patients(
    search: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    return await PatientService(RecordStore(db)).list_patients(search)


@admin_patient_router.post(
    "",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new patient",
)
async def register_patient(payload: PatientCreate, db: AsyncSession = Depends(get_db)):
    return await PatientService(RecordStore(db)).register_patient(payload)


@admin_patient_router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    summary="Get patient profile",
    responses={404: {"description": "Patient not found"}},
)
async def get_patient_profile(patient_id: str, db: AsyncSession = Depends(get_db)):
    return await PatientService(RecordStore(db)).get_patient_profile(patient_id)


@admin_patient_router.delete(
    "/{patient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a patient",
    responses={404: {"description": "Patient not found"}},
)
async def delete_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    await PatientService(RecordStore(db)).delete_patient(patient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["admin_patient_router"]
