"""
cep_weather.domain

Domain package.

Responsibilities:
- Postal code (CEP) validation.
- Temperature result model and unit conversion.
- The error taxonomy shared by both services.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O; clients and services build on top of it.
