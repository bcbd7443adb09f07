"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- OpenTelemetry tracing: provider setup, context propagation, scoped spans.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on `observability.tracing.traced_step`, never on the SDK directly.
