# hospital/db/schemas/__init__.py
from .base_schema import *
from .doctor_schema import *
from .service_schema import *
from .patient_schema import *
from .appointment_schemas import *
from .dashboard_schema import *
from .session_schema import *
