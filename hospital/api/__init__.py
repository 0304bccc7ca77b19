# hospital/api/__init__.py
