"""
cep_weather.services

Request pipelines for both services.

Responsibilities:
- Front service: parse, validate, forward, translate.
- Back service: validate, resolve city, resolve temperature, convert.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Each pipeline owns its root span; routers stay thin.
