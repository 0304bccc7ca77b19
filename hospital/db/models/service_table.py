# hospital/db/models/service_table.py
from sqlalchemy import Boolean, Float, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel


class Service(DbBaseModel):
    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    department: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    duration: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    image: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    # Ordered bullet points shown on the service card
    features: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Inactive services are hidden from public listings
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


__all__ = ["Service"]
