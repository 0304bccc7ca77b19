# hospital/api/v1/service_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from hospital.db import get_db
from hospital.db.schemas import DepartmentSummary, ServiceResponse
from hospital.services.v1 import HospitalServiceCatalog, RecordStore, list_departments

service_router = APIRouter(
    prefix="/services",
    tags=["Services"],
)

department_router = APIRouter(
    prefix="/departments",
    tags=["Departments"],
)


@service_router.get(
    "",
    response_model=list[ServiceResponse],
    summary="List active services",
    description="Inactive services are never part of this listing.",
)
async def list_services(
    search: Optional[str] = Query(None, max_length=100),
    department: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    return await HospitalServiceCatalog(RecordStore(db)).list_services(search, department)


@department_router.get(
    "",
    response_model=list[DepartmentSummary],
    summary="List departments with doctor and active service counts",
)
async def get_departments(db: AsyncSession = Depends(get_db)):
    return await list_departments(RecordStore(db))


__all__ = ["service_router", "department_router"]
