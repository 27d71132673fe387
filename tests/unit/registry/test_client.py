"""Unit tests for the registry client.

The registry is faked with httpx.MockTransport, so no test touches the
network.
"""

import asyncio

import httpx
import pytest
from plugpin.core.settings import Settings
from plugpin.registry.client import RegistryClient, dist_tags_url

DIST_TAGS = {"latest": "2.0.0", "beta": "2.1.0-beta.3"}


def _client(settings: Settings, handler) -> RegistryClient:
    return RegistryClient(settings, transport=httpx.MockTransport(handler))


class TestDistTagsUrl:
    """Tests for dist_tags_url."""

    def test_plain_name(self) -> None:
        """Unscoped names are used verbatim."""
        url = dist_tags_url("https://registry.npmjs.org", "oh-my-opencode-slim")
        assert url == "https://registry.npmjs.org/-/package/oh-my-opencode-slim/dist-tags"

    def test_scoped_name_and_trailing_slash(self) -> None:
        """The scope slash is encoded and a trailing slash is dropped."""
        url = dist_tags_url("https://registry.example.com/", "@scope/pkg")
        assert url == "https://registry.example.com/-/package/@scope%2Fpkg/dist-tags"


class TestFetchDistTags:
    """Tests for RegistryClient.fetch_dist_tags."""

    @pytest.mark.asyncio
    async def test_success(self, settings: Settings) -> None:
        """A 200 response yields the tag mapping."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=DIST_TAGS)

        tags = await _client(settings, handler).fetch_dist_tags()

        assert tags == DIST_TAGS
        assert requests[0].url.path == "/-/package/pkg/dist-tags"
        assert requests[0].headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_other_package(self, settings: Settings) -> None:
        """An explicit package name overrides the managed one."""
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json={"latest": "1.0.0"})

        await _client(settings, handler).fetch_dist_tags("other")

        assert paths == ["/-/package/other/dist-tags"]

    @pytest.mark.asyncio
    async def test_non_string_values_dropped(self, settings: Settings) -> None:
        """Only string versions are kept."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"latest": "1.0.0", "bad": 3})

        assert await _client(settings, handler).fetch_dist_tags() == {"latest": "1.0.0"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(404, json={"error": "Not found"}),
            httpx.Response(500),
            httpx.Response(200, text="not json"),
            httpx.Response(200, json=["latest"]),
        ],
    )
    async def test_unusable_response(self, settings: Settings, response: httpx.Response) -> None:
        """Errors and malformed bodies return None."""

        def handler(request: httpx.Request) -> httpx.Response:
            return response

        assert await _client(settings, handler).fetch_dist_tags() is None

    @pytest.mark.asyncio
    async def test_transport_error(self, settings: Settings) -> None:
        """Connection failures return None."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert await _client(settings, handler).fetch_dist_tags() is None

    @pytest.mark.asyncio
    async def test_slow_registry_times_out(self) -> None:
        """A response slower than the timeout returns None."""
        settings = Settings(package_name="pkg", fetch_timeout_seconds=0.5)

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json=DIST_TAGS)

        assert await _client(settings, handler).fetch_dist_tags() is None


class TestGetLatestVersion:
    """Tests for RegistryClient.get_latest_version."""

    @pytest.mark.asyncio
    async def test_channel_lookup(self, settings: Settings) -> None:
        """The requested channel's version is returned."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=DIST_TAGS)

        client = _client(settings, handler)

        assert await client.get_latest_version() == "2.0.0"
        assert await client.get_latest_version("beta") == "2.1.0-beta.3"

    @pytest.mark.asyncio
    async def test_missing_channel_falls_back_to_latest(self, settings: Settings) -> None:
        """An unpublished channel falls back to latest."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"latest": "2.0.0"})

        assert await _client(settings, handler).get_latest_version("rc") == "2.0.0"

    @pytest.mark.asyncio
    async def test_failure_returns_none(self, settings: Settings) -> None:
        """A failed fetch returns None."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        assert await _client(settings, handler).get_latest_version() is None
