"""
cep_weather.observability.tracing

OpenTelemetry wiring for both services.

Responsibilities:
- Build a `TracerProvider` tagged with the service name and export spans to the collector.
- Extract/inject W3C trace context from/into HTTP headers.
- Open spans as scoped steps that always end exactly once with a terminal status.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from typing import Any

from opentelemetry import propagate, trace
from opentelemetry.context import Context
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

from cep_weather.domain.errors import ErrorOutcome
from cep_weather.settings import ServiceSettings


def configure_tracing(settings: ServiceSettings) -> TracerProvider:
    resource = Resource.create(
        {
            "service.name": settings.service_name,
            "deployment.environment": settings.env,
        }
    )
    provider = TracerProvider(resource=resource)

    if settings.trace_exporter == "otlp":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint))
        )
    elif settings.trace_exporter == "console":
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    return provider


def extract_context(carrier: Mapping[str, str]) -> Context:
    """
    Context carried by inbound request headers. When no `traceparent` is present the
    returned context has no parent span, so the next span starts a fresh trace.
    """
    return propagate.extract(carrier)


def inject_context(headers: MutableMapping[str, str] | None = None) -> MutableMapping[str, str]:
    """
    Serialize the active span's context into outgoing request headers.
    """
    carrier: MutableMapping[str, str] = {} if headers is None else headers
    propagate.inject(carrier)
    return carrier


@contextmanager
def traced_step(
    tracer: Tracer,
    name: str,
    *,
    context: Context | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Mapping[str, Any] | None = None,
) -> Iterator[Span]:
    """
    Open `name` as the current span for the duration of the block.

    - Normal exit: status OK.
    - `ErrorOutcome`: exception event, `error.kind`, status ERROR; SERVER spans also get
      the response status code.
    - Any other exception: exception event, status ERROR.

    The span ends exactly once on every path; the exception is always re-raised.
    """
    with tracer.start_as_current_span(
        name,
        context=context,
        kind=kind,
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except ErrorOutcome as exc:
            span.record_exception(exc)
            span.set_attribute("error.kind", exc.kind.value)
            if kind is SpanKind.SERVER:
                # The status this service answers with; client spans keep the downstream one.
                span.set_attribute("http.response.status_code", exc.status_code)
            span.set_status(Status(StatusCode.ERROR, exc.detail))
            raise
        except BaseException as exc:
            # Includes cancellation from the request timeout.
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
            raise
        else:
            span.set_status(Status(StatusCode.OK))


def get_tracer(provider: trace.TracerProvider, name: str) -> Tracer:
    return provider.get_tracer(name)


# --- Module Notes -----------------------------------------------------------
# Propagation uses the global text-map propagator (W3C tracecontext + baggage by default),
# which is independent of which TracerProvider produced the spans.
