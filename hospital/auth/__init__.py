# hospital/auth/__init__.py
from .identity import *
from .deps import *
