# hospital/db/schemas/doctor_schema.py
from pydantic import Field
from datetime import datetime
from typing import Any, List
from .base_schema import CamelModel


class DoctorBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    specialty: str = Field(..., min_length=1, max_length=100)
    department: str = Field(..., min_length=1, max_length=100)
    experience: int = Field(0, ge=0, description="Years of practice")
    rating: float = Field(5.0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    bio: str = Field("", max_length=5000)
    education: str = Field("", max_length=2000)
    email: str = Field("", max_length=200)
    phone: str = Field("", max_length=50)
    image: str = Field("", max_length=500, description="Public image URL")


class DoctorCreate(DoctorBase):
    @classmethod
    def seed_records(
        cls,
        template: dict[str, Any],
        records: int,
        start_index: int = 0,
    ) -> List["DoctorCreate"]:
        return [
            cls(**{**template, "name": f"{template['name']} {i}"})
            for i in range(start_index, start_index + records)
        ]


class DoctorResponse(DoctorBase):
    id: str
    created_at: datetime


class DoctorOption(CamelModel):
    """Doctor entry in the booking form's picker."""

    id: str
    name: str
    specialty: str
    department: str


__all__ = ["DoctorBase", "DoctorCreate", "DoctorResponse", "DoctorOption"]
