"""TimeConnect attendance backend.

This package is organized by feature modules (employees, auth, attendance, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""

__version__ = "1.0.0"
