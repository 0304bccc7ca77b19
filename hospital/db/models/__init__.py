# hospital/db/models/__init__.py
from .db_base_model import *
from .doctor_table import *
from .service_table import *
from .patient_table import *
from .appointment_table import *
