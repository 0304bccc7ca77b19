# hospital/db/models/patient_table.py
from typing import Optional
from datetime import date
from sqlalchemy import Date, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel


class Patient(DbBaseModel):
    __tablename__ = "patients"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    emergency_contact: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    medical_history: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)


__all__ = ["Patient"]
