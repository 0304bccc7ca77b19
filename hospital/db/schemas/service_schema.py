# hospital/db/schemas/service_schema.py
from pydantic import Field, field_validator
from datetime import datetime
from typing import Any, List
from .base_schema import CamelModel


class ServiceBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field("", max_length=5000)
    department: str = Field(..., min_length=1, max_length=100)
    price: float = Field(0.0, ge=0)
    duration: str = Field("", max_length=50, description="Free text, e.g. '30 mins'")
    image: str = Field("", max_length=500)
    features: List[str] = Field(default_factory=list)
    is_active: bool = True

    @field_validator("features")
    @classmethod
    def drop_blank_features(cls, v: List[str]) -> List[str]:
        # The admin form submits one feature per line, blank lines included
        return [feature.strip() for feature in v if feature and feature.strip()]


class ServiceCreate(ServiceBase):
    @classmethod
    def seed_records(
        cls,
        template: dict[str, Any],
        records: int,
        start_index: int = 0,
    ) -> List["ServiceCreate"]:
        return [
            cls(**{**template, "name": f"{template['name']} {i}"})
            for i in range(start_index, start_index + records)
        ]


class ServiceResponse(ServiceBase):
    id: str
    created_at: datetime


class ServiceOption(CamelModel):
    id: str
    name: str
    department: str


__all__ = ["ServiceBase", "ServiceCreate", "ServiceResponse", "ServiceOption"]
