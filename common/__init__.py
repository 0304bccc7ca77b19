# common/__init__.py
from .config import *
from .logger import logger, get_app_logger, AppLogger
