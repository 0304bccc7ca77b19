# hospital/api/v1/admin_catalog_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from hospital.auth import require_admin
from hospital.db import get_db
from hospital.db.schemas import DoctorCreate, DoctorResponse, ServiceCreate, ServiceResponse
from hospital.services.v1 import DoctorService, HospitalServiceCatalog, RecordStore

admin_doctor_router = APIRouter(
    prefix="/admin/doctors",
    tags=["Admin: Doctors"],
    dependencies=[Depends(require_admin)],
)

admin_service_router = APIRouter(
    prefix="/admin/services",
    tags=["Admin: Services"],
    dependencies=[Depends(require_admin)],
)

_NOT_FOUND = {404: {"description": "Record not found"}}


@admin_doctor_router.get("", response_model=list[DoctorResponse], summary="List doctors")
async def admin_list_doctors(
    search: Optional[str] = Query(None, max_length=100),
    department: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    return await DoctorService(RecordStore(db)).list_doctors(search, department)


@admin_doctor_router.post(
    "",
    response_model=DoctorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a doctor",
)
async def admin_create_doctor(payload: DoctorCreate, db: AsyncSession = Depends(get_db)):
    return await DoctorService(RecordStore(db)).create_doctor(payload)


@admin_doctor_router.put(
    "/{doctor_id}",
    response_model=DoctorResponse,
    summary="Overwrite a doctor's editable fields",
    responses=_NOT_FOUND,
)
async def admin_update_doctor(
    doctor_id: str,
    payload: DoctorCreate,
    db: AsyncSession = Depends(get_db),
):
    return await DoctorService(RecordStore(db)).update_doctor(doctor_id, payload)


@admin_doctor_router.delete(
    "/{doctor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a doctor",
    description="Existing appointments keep the copied doctor name.",
    responses=_NOT_FOUND,
)
async def admin_delete_doctor(doctor_id: str, db: AsyncSession = Depends(get_db)):
    await DoctorService(RecordStore(db)).delete_doctor(doctor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_service_router.get(
    "",
    response_model=list[ServiceResponse],
    summary="List services, inactive ones included",
)
async def admin_list_services(
    search: Optional[str] = Query(None, max_length=100),
    department: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    return await HospitalServiceCatalog(RecordStore(db)).list_services(
        search, department, include_inactive=True
    )


@admin_service_router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a service",
)
async def admin_create_service(payload: ServiceCreate, db: AsyncSession = Depends(get_db)):
    return await HospitalServiceCatalog(RecordStore(db)).create_service(payload)


@admin_service_router.put(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Overwrite a service's editable fields",
    responses=_NOT_FOUND,
)
async def admin_update_service(
    service_id: str,
    payload: ServiceCreate,
    db: AsyncSession = Depends(get_db),
):
    return await HospitalServiceCatalog(RecordStore(db)).update_service(service_id, payload)


@admin_service_router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a service",
    responses=_NOT_FOUND,
)
async def admin_delete_service(service_id: str, db: AsyncSession = Depends(get_db)):
    await HospitalServiceCatalog(RecordStore(db)).delete_service(service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["admin_doctor_router", "admin_service_router"]
