"""
cep_weather.clients

Outbound HTTP client package.

Responsibilities:
- Call the back service (from the front service).
- Call the City Resolver (ViaCEP) and Temperature Resolver (WeatherAPI) from the back service.
- Classify every collaborator failure into the shared error taxonomy at the call site.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on these boundaries, not on httpx directly.
