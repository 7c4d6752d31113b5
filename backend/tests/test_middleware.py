"""
Review Board Backend — Middleware Tests
========================================

What we test:
    ✅ OPTIONS on either path → 200, empty body, CORS headers
    ✅ CORS headers on success, client-error and 405 responses
    ✅ Unrouted verbs → 405 with an Allow header
    ✅ X-Request-ID generated, or echoed from the request
    ✅ One access-log line per request, bodies never logged
"""

import logging

import pytest

CORS_EXPECTED = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, DELETE, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


def assert_cors(response):
    for name, value in CORS_EXPECTED.items():
        assert response.headers.get(name) == value


class TestPreflight:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/reviews", "/delete-review"])
    async def test_options(self, test_client, path):
        response = await test_client.options(path)

        assert response.status_code == 200
        assert response.content == b""
        assert_cors(response)

    @pytest.mark.asyncio
    async def test_browser_preflight(self, test_client):
        response = await test_client.options(
            "/reviews",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert response.status_code == 200
        assert_cors(response)


class TestCORSHeadersEverywhere:

    @pytest.mark.asyncio
    async def test_on_success(self, test_client):
        assert_cors(await test_client.get("/reviews"))

    @pytest.mark.asyncio
    async def test_on_client_error(self, test_client):
        response = await test_client.post("/reviews", json={"rating": 9})
        assert response.status_code == 400
        assert_cors(response)

    @pytest.mark.asyncio
    async def test_on_not_found(self, test_client):
        response = await test_client.request("DELETE", "/delete-review", json={"id": 5})
        assert_cors(response)


class TestMethodNotAllowed:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("PUT", "/reviews"),
            ("PATCH", "/reviews"),
            ("DELETE", "/reviews"),
            ("GET", "/delete-review"),
            ("POST", "/delete-review"),
        ],
    )
    async def test_unrouted_verbs(self, test_client, method, path):
        response = await test_client.request(method, path)

        assert response.status_code == 405
        assert response.json()["error"] == "method_not_allowed"
        assert_cors(response)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path,allowed",
        [
            ("PUT", "/reviews", "GET, OPTIONS, POST"),
            ("GET", "/delete-review", "DELETE, OPTIONS"),
        ],
    )
    async def test_allow_header_lists_every_routed_method(self, test_client, method, path, allowed):
        response = await test_client.request(method, path)

        assert response.status_code == 405
        assert response.headers["Allow"] == allowed


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/reviews")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_echoed(self, test_client):
        response = await test_client.get("/reviews", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_in_error_body(self, test_client):
        response = await test_client.post(
            "/reviews", json={"rating": 0}, headers={"X-Request-ID": "abc"}
        )
        assert response.json()["request_id"] == "abc"


class _Collector(logging.Handler):

    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


class TestAccessLog:

    @pytest.fixture
    def access_log(self, test_client):
        # Attached after the lifespan has reconfigured logging
        collector = _Collector()
        access_logger = logging.getLogger("reviewboard.access")
        access_logger.addHandler(collector)
        access_logger.setLevel(logging.INFO)
        yield collector.messages
        access_logger.removeHandler(collector)
        access_logger.setLevel(logging.NOTSET)

    @pytest.mark.asyncio
    async def test_one_line_per_request(self, test_client, access_log):
        await test_client.get("/reviews", headers={"X-Request-ID": "log-1"})

        assert len(access_log) == 1
        assert access_log[0].startswith("GET /reviews 200 ")
        assert "[log-1]" in access_log[0]

    @pytest.mark.asyncio
    async def test_body_not_logged(self, test_client, access_log):
        await test_client.post("/reviews", json={"name": "secret-name", "review": "b", "rating": 3})

        assert access_log[0].startswith("POST /reviews 200 ")
        assert "secret-name" not in access_log[0]

    @pytest.mark.asyncio
    async def test_health_skipped(self, test_client, access_log):
        await test_client.get("/health")
        assert access_log == []
