FRONTEND_ORIGIN = "http://localhost:5173"


async def test_allowed_origin_gets_cors_and_exposed_headers(api_client) -> None:
    resp = await api_client.get("/api/showcase/cors", headers={"Origin": FRONTEND_ORIGIN})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
    exposed = resp.headers["access-control-expose-headers"]
    assert "X-Request-Id" in exposed
    assert "X-Response-Time" in exposed


async def test_cors_demo_reports_config_in_use(api_client) -> None:
    resp = await api_client.get("/api/showcase/cors")
    payload = resp.json()
    assert payload["feature"] == "cors"
    assert payload["config_used"]["allowOrigins"] == [FRONTEND_ORIGIN, "http://example.test"]
    assert "Authorization" in payload["config_used"]["allowHeaders"]


async def test_unknown_origin_gets_no_allow_origin_header(api_client) -> None:
    resp = await api_client.get("/api/showcase/cors", headers={"Origin": "http://evil.test"})
    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers


async def test_preflight_is_answered_by_cors_middleware(api_client) -> None:
    resp = await api_client.options(
        "/api/showcase/validation",
        headers={
            "Origin": FRONTEND_ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
    assert "POST" in resp.headers["access-control-allow-methods"]


async def test_preflight_from_unknown_origin_is_rejected(api_client) -> None:
    resp = await api_client.options(
        "/api/showcase/cors",
        headers={"Origin": "http://evil.test", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 400


async def test_plain_options_request_reaches_cors_demo(api_client) -> None:
    resp = await api_client.options("/api/showcase/cors")
    assert resp.status_code == 200
    assert resp.json()["feature"] == "cors"
    assert resp.headers.get("x-request-id")
