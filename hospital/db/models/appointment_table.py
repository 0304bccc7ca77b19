# hospital/db/models/appointment_table.py
from typing import Optional
from enum import Enum
import datetime as dt
from sqlalchemy import Date, String, Text, Enum as sqlalchemy_Enum
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel


class AppointmentStatus(str, Enum):
    PENDING = "pending"  # Requested by the patient, awaiting an admin
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"  # Terminal


class LifecycleAction(str, Enum):
    """Admin actions that move an appointment between statuses."""

    CONFIRM = "confirm"
    CANCEL = "cancel"
    COMPLETE = "complete"
    REOPEN = "reopen"


class TimeSlot(str, Enum):
    """Bookable start times."""

    SLOT_0900 = "09:00"
    SLOT_1000 = "10:00"
    SLOT_1100 = "11:00"
    SLOT_1400 = "14:00"
    SLOT_1500 = "15:00"
    SLOT_1600 = "16:00"
    SLOT_1700 = "17:00"


class Appointment(DbBaseModel):
    __tablename__ = "appointments"

    patient_name: Mapped[str] = mapped_column(String(100), nullable=False)
    patient_email: Mapped[str] = mapped_column(String(200), nullable=False)
    patient_phone: Mapped[str] = mapped_column(String(50), nullable=False)

    # Soft references: no foreign keys, names are copied at booking time
    doctor_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    doctor_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    service_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    service_name: Mapped[str] = mapped_column(String(150), nullable=False, default="")
    department: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[TimeSlot] = mapped_column(
        sqlalchemy_Enum(
            TimeSlot,
            name="time_slot",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[AppointmentStatus] = mapped_column(
        sqlalchemy_Enum(
            AppointmentStatus,
            name="appointment_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=AppointmentStatus.PENDING,
    )


__all__ = ["Appointment", "AppointmentStatus", "LifecycleAction", "TimeSlot"]
