"""Unit tests for HttpxReleaseRegistry adapter."""

from __future__ import annotations

import httpx
import pytest

from weaviate_embedded.adapters.httpx_release_registry import HttpxReleaseRegistry
from weaviate_embedded.adapters.ports import ReleaseInfo, ReleaseRegistryPort
from weaviate_embedded.domain.exceptions import VersionFetchError


def make_registry(handler, token: str | None = None) -> HttpxReleaseRegistry:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpxReleaseRegistry("weaviate", "weaviate", client=client, token=token)


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.HttpxReleaseRegistry")
class TestHttpxReleaseRegistry:
    """Test HttpxReleaseRegistry against a mocked GitHub API."""

    def test_satisfies_protocol(self) -> None:
        """Test that HttpxReleaseRegistry satisfies ReleaseRegistryPort."""
        assert isinstance(HttpxReleaseRegistry("weaviate", "weaviate"), ReleaseRegistryPort)

    def test_fetch_latest(self) -> None:
        """Test fetch_latest() reads the tag of the latest release."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "tag_name": "v1.22.0",
                    "name": "v1.22.0",
                    "published_at": "2023-10-01T12:00:00Z",
                },
            )

        result = make_registry(handler).fetch_latest()

        assert result == ReleaseInfo(
            tag="v1.22.0", name="v1.22.0", published_at="2023-10-01T12:00:00Z"
        )
        assert len(requests) == 1
        assert str(requests[0].url) == (
            "https://api.github.com/repos/weaviate/weaviate/releases/latest"
        )
        assert requests[0].headers["Accept"] == "application/vnd.github+json"
        assert "Authorization" not in requests[0].headers

    def test_fetch_release_by_tag(self) -> None:
        """Test fetch_release() requests the tag endpoint."""
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"tag_name": "v1.21.1"})

        assert make_registry(handler).fetch_release("v1.21.1").tag == "v1.21.1"
        assert seen == ["/repos/weaviate/weaviate/releases/tags/v1.21.1"]

    def test_token_is_sent(self) -> None:
        """Test a token becomes a bearer Authorization header."""
        headers: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            headers.append(request.headers.get("Authorization", ""))
            return httpx.Response(200, json={"tag_name": "v1.21.1"})

        make_registry(handler, token="secret").fetch_latest()
        assert headers == ["Bearer secret"]

    def test_http_error(self) -> None:
        """Test a 404 becomes VersionFetchError with the status code."""
        registry = make_registry(lambda request: httpx.Response(404, json={}))
        with pytest.raises(VersionFetchError, match="HTTP 404") as exc_info:
            registry.fetch_release("v9.9.9")
        assert isinstance(exc_info.value.original_error, httpx.HTTPStatusError)

    def test_network_error(self) -> None:
        """Test connection failures become VersionFetchError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(VersionFetchError, match="Failed to reach"):
            make_registry(handler).fetch_latest()

    def test_invalid_json(self) -> None:
        """Test a non-JSON body becomes VersionFetchError."""
        registry = make_registry(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(VersionFetchError, match="invalid JSON"):
            registry.fetch_latest()

    def test_missing_tag_name(self) -> None:
        """Test a payload without tag_name becomes VersionFetchError."""
        registry = make_registry(lambda request: httpx.Response(200, json={"name": "x"}))
        with pytest.raises(VersionFetchError, match="no tag_name"):
            registry.fetch_latest()
