from httpx import ASGITransport

from showcase.client import DemoClient, SSEDecoder, parse_sse


def test_decoder_joins_data_lines_and_ignores_comments() -> None:
    decoder = SSEDecoder()
    assert decoder.feed(": keep-alive") is None
    assert decoder.feed("event: update") is None
    assert decoder.feed("id: 7") is None
    assert decoder.feed("data: line one") is None
    assert decoder.feed("data:line two") is None
    event = decoder.feed("")

    assert event is not None
    assert event.event == "update"
    assert event.id == "7"
    assert event.data == "line one\nline two"


def test_decoder_defaults_event_name_and_skips_empty_dispatch() -> None:
    decoder = SSEDecoder()
    assert decoder.feed("") is None
    decoder.feed('data: {"n": 1}')
    event = decoder.feed("")
    assert event.event == "message"
    assert event.json() == {"n": 1}


def test_parse_sse_flushes_trailing_event() -> None:
    events = list(parse_sse(["data: a", "", "event: done", "data: b"]))
    assert [(e.event, e.data) for e in events] == [("message", "a"), ("done", "b")]


async def test_call_captures_status_timing_and_headers(app) -> None:
    async with DemoClient("http://test", transport=ASGITransport(app=app)) as client:
        result = await client.call("GET", "/api/showcase/routing/v2/42")

    assert result.ok
    assert result.elapsed_ms >= 0
    assert result.headers["x-request-id"].startswith("showcase-")
    assert "x-response-time" in result.headers
    assert result.body["params"] == {"version": "v2", "id": "42"}


async def test_call_reports_validation_failures(app) -> None:
    async with DemoClient("http://test", transport=ASGITransport(app=app)) as client:
        malformed = await client.call("POST", "/api/showcase/validation", content="{ nope")
        invalid = await client.call("POST", "/api/showcase/validation", json={"name": "J"})

    assert malformed.status_code == 400
    assert [err["field"] for err in malformed.body["errors"]] == ["body"]
    assert not invalid.ok
    assert [err["field"] for err in invalid.body["errors"]] == ["name", "email"]


async def test_token_is_sent_but_never_required(app) -> None:
    async with DemoClient("http://test", transport=ASGITransport(app=app), token="abc") as client:
        with_token = await client.call("GET", "/api/showcase/context")
    async with DemoClient("http://test", transport=ASGITransport(app=app)) as client:
        without_token = await client.call("GET", "/api/showcase/context")

    assert with_token.body["authorization_present"] is True
    assert without_token.status_code == 200
    assert without_token.body["authorization_present"] is False
