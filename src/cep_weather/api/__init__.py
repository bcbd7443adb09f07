"""
cep_weather.api

API package for both services.

Responsibilities:
- FastAPI app factories and router modules.
- API-layer dependency wiring and the error-to-response mapping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request extraction + delegation to services.
