# hospital/api/v1/doctor_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from hospital.db import get_db
from hospital.db.schemas import DoctorResponse
from hospital.services.v1 import DoctorService, RecordStore

doctor_router = APIRouter(
    prefix="/doctors",
    tags=["Doctors"],
)


@doctor_router.get(
    "",
    response_model=list[DoctorResponse],
    status_code=status.HTTP_200_OK,
    summary="List doctors",
    description="""
    Whole doctor collection, filtered in memory.

    - `search`: case-insensitive substring of name, specialty or department
    - `department`: exact department name, or `all`
    """,
)
async def list_doctors(
    search: Optional[str] = Query(None, max_length=100),
    department: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    return await DoctorService(RecordStore(db)).list_doctors(search, department)


@doctor_router.get(
    "/{doctor_id}",
    response_model=DoctorResponse,
    summary="Get doctor details",
    responses={404: {"description": "Doctor not found"}},
)
async def get_doctor(doctor_id: str, db: AsyncSession = Depends(get_db)):
    return await DoctorService(RecordStore(db)).get_doctor(doctor_id)


__all__ = ["doctor_router"]
