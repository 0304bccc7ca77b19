# hospital/__init__.py
"""Hospital website backend: public catalog, appointment booking, admin dashboard."""
