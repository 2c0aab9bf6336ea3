"""
Tests for the edge router
"""

import pytest
import httpx
from unittest.mock import patch
from fastapi.testclient import TestClient

from edge_router.main import app
from edge_router.utils.config import EdgeRouterConfig
from edge_router.utils.upstream_client import UpstreamClient


class RecordingTransport(httpx.MockTransport):
    """Mock backend that keeps every request it receives"""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


def api_backend(payload: bytes) -> RecordingTransport:
    return RecordingTransport(
        lambda request: httpx.Response(200, content=payload, headers={"content-type": "application/json"})
    )


def render_backend() -> RecordingTransport:
    return RecordingTransport(
        lambda request: httpx.Response(
            200,
            content=b'<ul class="records">\n</ul>\n',
            headers={"content-type": "text/html; charset=utf-8"}
        )
    )


@pytest.fixture
def static_root(tmp_path):
    root = tmp_path / "static"
    (root / "content").mkdir(parents=True)
    (root / "content" / "apple.svg").write_bytes(b"<svg>apple</svg>")
    (root / "index.html").write_text("<html>static page</html>")
    return root


@pytest.fixture
def edge(static_root):
    """Edge app wired to recording mock backends"""
    patchers = []

    def factory(api_transport, render_transport):
        config = EdgeRouterConfig(static_root=str(static_root))
        api_upstream = UpstreamClient("api-service", "http://api-service:5000", timeout=1.0, transport=api_transport)
        render_upstream = UpstreamClient("render-service", "http://render-service:3000", timeout=1.0, transport=render_transport)

        patchers.extend([
            patch("edge_router.routes.proxy.get_edge_config", return_value=config),
            patch("edge_router.routes.proxy.get_api_upstream", return_value=api_upstream),
            patch("edge_router.routes.proxy.get_render_upstream", return_value=render_upstream),
        ])
        for p in patchers:
            p.start()
        return TestClient(app)

    yield factory

    for p in patchers:
        p.stop()


class TestApiStage:
    """Test API prefix proxying"""

    def test_api_is_proxied_and_normalized(self, edge, sample_payload):
        api, render = api_backend(sample_payload), render_backend()
        client = edge(api, render)

        response = client.get("/api")

        assert response.status_code == 200
        assert response.content == sample_payload
        assert response.headers["content-type"] == "application/json"
        assert api.requests[0].url.path == "/api/"
        assert render.requests == []

    def test_file_like_api_path_is_not_normalized(self, edge, sample_payload):
        api = api_backend(sample_payload)
        client = edge(api, render_backend())

        client.get("/api/data.json")
        assert api.requests[0].url.path == "/api/data.json"

    def test_method_body_and_query_are_forwarded(self, edge, sample_payload):
        api = api_backend(sample_payload)
        client = edge(api, render_backend())

        client.post("/api/items?limit=2", content=b'{"x": 1}', headers={"content-type": "application/json"})

        forwarded = api.requests[0]
        assert forwarded.method == "POST"
        assert forwarded.url.path == "/api/items/"
        assert forwarded.url.query == b"limit=2"
        assert forwarded.content == b'{"x": 1}'
        assert forwarded.headers["content-type"] == "application/json"

    @pytest.mark.parametrize("sent,forwarded", [
        ("/api/foo%3Fbar", b"/api/foo%3Fbar/"),
        ("/api/a%2Fb", b"/api/a%2Fb/"),
        ("/api/%2E%2E/health", b"/api/%2E%2E/health/"),
    ])
    def test_percent_escapes_are_forwarded_unchanged(self, edge, sample_payload, sent, forwarded):
        api, render = api_backend(sample_payload), render_backend()
        client = edge(api, render)

        response = client.get(sent)

        assert response.status_code == 200
        assert api.requests[0].url.raw_path == forwarded
        assert api.requests[0].url.query == b""
        assert render.requests == []

    def test_repeated_headers_are_forwarded(self, edge, sample_payload):
        api = api_backend(sample_payload)
        client = edge(api, render_backend())

        client.get("/api/", headers=[("x-dup", "a"), ("x-dup", "b"), ("accept", "text/html"), ("accept", "application/json")])

        headers = api.requests[0].headers
        assert headers.get_list("x-dup") == ["a", "b"]
        assert headers.get_list("accept") == ["text/html", "application/json"]

    def test_repeated_forwarded_for_chain_is_kept(self, edge, sample_payload):
        api = api_backend(sample_payload)
        client = edge(api, render_backend())

        client.get("/api/", headers=[("x-forwarded-for", "10.0.0.1"), ("x-forwarded-for", "10.0.0.2")])

        headers = api.requests[0].headers
        assert headers.get_list("x-forwarded-for") == ["10.0.0.1, 10.0.0.2, testclient"]
        assert headers.get_list("host") == ["testserver"]

    def test_forwarding_headers(self, edge, sample_payload):
        api = api_backend(sample_payload)
        client = edge(api, render_backend())

        client.get("/api/", headers={"x-forwarded-for": "203.0.113.7"})

        headers = api.requests[0].headers
        assert headers["host"] == "testserver"
        assert headers["x-forwarded-host"] == "testserver"
        assert headers["x-real-ip"] == "testclient"
        assert headers["x-forwarded-for"] == "203.0.113.7, testclient"
        assert headers["x-forwarded-proto"] == "http"

    def test_upstream_status_and_headers_are_relayed(self, edge):
        api = RecordingTransport(
            lambda request: httpx.Response(418, content=b"teapot", headers={"x-upstream": "yes", "content-type": "text/plain"})
        )
        client = edge(api, render_backend())

        response = client.get("/api/")

        assert response.status_code == 418
        assert response.content == b"teapot"
        assert response.headers["x-upstream"] == "yes"
        assert response.headers["content-length"] == "6"


class TestStaticStage:
    """Test static asset serving"""

    def test_existing_asset_is_served_without_render(self, edge, sample_payload):
        api, render = api_backend(sample_payload), render_backend()
        client = edge(api, render)

        response = client.get("/content/apple.svg")

        assert response.status_code == 200
        assert response.content == b"<svg>apple</svg>"
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert render.requests == []
        assert api.requests == []

    def test_missing_asset_falls_through_to_render(self, edge, sample_payload):
        render = render_backend()
        client = edge(api_backend(sample_payload), render)

        response = client.get("/content/banana.svg")

        assert response.status_code == 200
        assert response.text.startswith('<ul class="records">')
        assert render.requests[0].url.path == "/content/banana.svg"

    def test_nul_byte_path_falls_through_to_render(self, edge, sample_payload):
        render = render_backend()
        client = edge(api_backend(sample_payload), render)

        response = client.get("/x%00y")

        assert response.status_code == 200
        assert response.text.startswith('<ul class="records">')
        assert render.requests[0].url.raw_path == b"/x%00y"


class TestRenderStage:
    """Test the render fallback"""

    def test_root_is_rendered(self, edge, sample_payload):
        render = render_backend()
        client = edge(api_backend(sample_payload), render)

        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert response.content == b'<ul class="records">\n</ul>\n'
        assert len(render.requests) == 1


class TestBackendFailures:
    """Test gateway errors"""

    def test_unreachable_api_is_502(self, edge, refusing_transport):
        client = edge(refusing_transport, render_backend())
        assert client.get("/api/").status_code == 502

    def test_unreachable_render_is_502(self, edge, sample_payload, refusing_transport):
        client = edge(api_backend(sample_payload), refusing_transport)
        assert client.get("/").status_code == 502

    def test_timeout_is_504(self, edge, sample_payload, slow_transport):
        client = edge(api_backend(sample_payload), slow_transport)
        assert client.get("/").status_code == 504
