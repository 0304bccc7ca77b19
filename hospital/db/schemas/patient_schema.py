# hospital/db/schemas/patient_schema.py
from pydantic import Field
from datetime import date, datetime
from typing import Optional, List
from .base_schema import CamelModel


class PatientBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=50)
    date_of_birth: Optional[date] = None
    gender: str = Field("", max_length=20)
    address: str = Field("", max_length=500)
    emergency_contact: str = Field("", max_length=200)
    medical_history: List[str] = Field(default_factory=list)


class PatientCreate(PatientBase):
    pass


class PatientResponse(PatientBase):
    id: str
    created_at: datetime


__all__ = ["PatientBase", "PatientCreate", "PatientResponse"]
