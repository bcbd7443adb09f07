"""
tests.test_end_to_end

Full chain: client -> service-a -> service-b -> fake resolvers, in-process.

Responsibilities:
- Check the client-facing status table across the hop.
- Check that both services' spans land in one trace, joined by the propagated headers.
"""

from __future__ import annotations

import httpx
import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from conftest import FakeResolvers


@pytest.mark.asyncio
async def test_resolves_postal_code_to_temperatures(front_client: httpx.AsyncClient) -> None:
    r = await front_client.post("/service-a", json={"cep": "87043480"})

    assert r.status_code == 200
    body = r.json()
    assert body["city"] == "Maringá"
    assert body["temp_C"] == 28.5
    assert body["temp_F"] == pytest.approx(83.3)
    assert body["temp_K"] == pytest.approx(301.65)
    # Unrounded: the exact float computed by the back service survives both hops.
    assert body["temp_F"] == 28.5 * 1.8 + 32
    assert body["temp_K"] == 28.5 + 273.15


@pytest.mark.asyncio
async def test_same_inputs_give_byte_identical_bodies(front_client: httpx.AsyncClient) -> None:
    first = await front_client.post("/service-a", json={"cep": "87043480"})
    second = await front_client.post("/service-a", json={"cep": "87043480"})

    assert first.status_code == second.status_code == 200
    assert first.content == second.content


@pytest.mark.asyncio
async def test_short_cep_is_rejected_before_the_hop(
    front_client: httpx.AsyncClient,
    resolvers: FakeResolvers,
    span_exporter: InMemorySpanExporter,
) -> None:
    r = await front_client.post("/service-a", json={"cep": "123"})

    assert r.status_code == 422
    assert r.json() == {"message": "invalid zipcode"}
    assert resolvers.requests == []
    assert "handle-weather" not in {s.name for s in span_exporter.get_finished_spans()}


@pytest.mark.asyncio
async def test_unknown_cep_is_not_found(
    front_client: httpx.AsyncClient, resolvers: FakeResolvers
) -> None:
    r = await front_client.post("/service-a", json={"cep": "00000000"})

    assert r.status_code == 404
    assert r.json() == {"message": "can not find zipcode"}
    assert resolvers.weather_requests == []


@pytest.mark.asyncio
async def test_temperature_resolver_failure_surfaces_as_500(
    front_client: httpx.AsyncClient,
    back_client: httpx.AsyncClient,
    resolvers: FakeResolvers,
) -> None:
    resolvers.weather_status = 500

    back = await back_client.get("/weather", params={"cep": "87043480"})
    front = await front_client.post("/service-a", json={"cep": "87043480"})

    assert back.status_code == 500
    assert back.json() == {"message": "internal error"}
    assert front.status_code == 500
    assert front.json() == {"message": "failed to get weather data"}


@pytest.mark.asyncio
async def test_one_trace_spans_both_services(
    front_client: httpx.AsyncClient, span_exporter: InMemorySpanExporter
) -> None:
    r = await front_client.post("/service-a", json={"cep": "87043480"})
    assert r.status_code == 200

    spans = span_exporter.get_finished_spans()
    by_name = {s.name: s for s in spans}
    scopes = {s.name: s.instrumentation_scope.name for s in spans}

    assert scopes["handle-cep"] == "service-a"
    assert scopes["handle-weather"] == "service-b"
    assert len({s.context.trace_id for s in spans}) == 1

    front_root = by_name["handle-cep"]
    call = by_name["call-downstream"]
    back_root = by_name["handle-weather"]

    assert front_root.parent is None
    assert call.parent.span_id == front_root.context.span_id
    # Joined only through the traceparent header, not an in-process call stack.
    assert back_root.parent.span_id == call.context.span_id
    assert back_root.parent.is_remote

    assert all(s.status.status_code == StatusCode.OK for s in spans)


@pytest.mark.asyncio
async def test_error_statuses_are_recorded_on_both_sides(
    front_client: httpx.AsyncClient,
    resolvers: FakeResolvers,
    span_exporter: InMemorySpanExporter,
) -> None:
    r = await front_client.post("/service-a", json={"cep": "00000000"})
    assert r.status_code == 404

    by_name = {s.name: s for s in span_exporter.get_finished_spans()}
    back_root = by_name["handle-weather"]
    front_root = by_name["handle-cep"]

    assert back_root.status.status_code == StatusCode.ERROR
    assert back_root.attributes["http.response.status_code"] == 404
    assert by_name["call-downstream"].attributes["http.response.status_code"] == 404
    assert front_root.status.status_code == StatusCode.ERROR
    assert front_root.attributes["error.kind"] == "NOT_FOUND"
    assert front_root.attributes["http.response.status_code"] == 404
    assert all(s.end_time is not None for s in by_name.values())
