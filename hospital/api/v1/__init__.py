# hospital/api/v1/__init__.py
from fastapi import APIRouter

from .doctor_router import *
from .service_router import *
from .appointment_router import *
from .session_router import *
from .admin_catalog_router import *
from .admin_patient_router import *
from .admin_appointment_router import *
from .admin_dashboard_router import *
from .deps import *

api_router = APIRouter(prefix="/api/v1")

for _router in (
    doctor_router,
    service_router,
    department_router,
    appointment_router,
    session_router,
    admin_doctor_router,
    admin_service_router,
    admin_patient_router,
    admin_appointment_router,
    admin_dashboard_router,
):
    api_router.include_router(_router)
