# hospital/services/v1/__init__.py
from .record_store import *
from .list_filters import *
from .appointment_lifecycle import *
from .booking_service import *
from .catalog_service import *
from .patient_service import *
from .overview_service import *
from .asset_upload import *
