# hospital/db/models/doctor_table.py
from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel


class Doctor(DbBaseModel):
    __tablename__ = "doctors"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    specialty: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # years
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=5.0)  # 0..5
    reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    education: Mapped[str] = mapped_column(Text, nullable=False, default="")
    email: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    image: Mapped[str] = mapped_column(String(500), nullable=False, default="")


__all__ = ["Doctor"]
