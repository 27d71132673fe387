"""Async npm registry client for dist-tag lookups.

Every request is bounded by ``Settings.fetch_timeout_seconds``. Network
errors, timeouts, non-2xx responses and malformed bodies all resolve to
None: an unreachable registry must never block or crash the caller.
"""

import asyncio
import logging
from urllib.parse import quote

import httpx

from plugpin.core.settings import Settings
from plugpin.versioning.channels import DEFAULT_CHANNEL

logger = logging.getLogger(__name__)


def dist_tags_url(registry_url: str, package_name: str) -> str:
    """Build the dist-tags endpoint URL for a package.

    Scoped names (``@scope/name``) have their slash percent-encoded.
    """
    return f"{registry_url.rstrip('/')}/-/package/{quote(package_name, safe='@')}/dist-tags"


class RegistryClient:
    """Fetches dist-tags from an npm-compatible registry.

    Attributes:
        _settings: Settings providing the registry URL, package and timeout.
        _transport: Optional httpx transport (used to fake the registry).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def fetch_dist_tags(self, package_name: str | None = None) -> dict[str, str] | None:
        """Fetch the dist-tag mapping for a package.

        Args:
            package_name: Package to query. Defaults to the managed package.

        Returns:
            Mapping of dist-tag to version, or None if unavailable.
        """
        name = package_name or self._settings.package_name
        url = dist_tags_url(self._settings.registry_url, name)
        timeout = self._settings.fetch_timeout_seconds

        try:
            async with asyncio.timeout(timeout):
                async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                    response = await client.get(url, headers={"Accept": "application/json"})
        except TimeoutError:
            logger.debug("Registry request timed out after %.1fs: %s", timeout, url)
            return None
        except httpx.HTTPError as e:
            logger.debug("Registry request failed for %s: %s", url, e)
            return None

        if not response.is_success:
            logger.debug("Registry returned HTTP %d for %s", response.status_code, url)
            return None

        try:
            data = response.json()
        except ValueError:
            logger.debug("Registry returned a non-JSON body for %s", url)
            return None

        if not isinstance(data, dict):
            return None
        return {tag: version for tag, version in data.items() if isinstance(version, str)}

    async def get_latest_version(
        self,
        channel: str = DEFAULT_CHANNEL,
        package_name: str | None = None,
    ) -> str | None:
        """Get the published version for a channel.

        Falls back to the ``latest`` tag when the channel is not published.

        Args:
            channel: Dist-tag to look up.
            package_name: Package to query. Defaults to the managed package.

        Returns:
            Version string, or None if no version is available.
        """
        tags = await self.fetch_dist_tags(package_name)
        if not tags:
            return None
        return tags.get(channel) or tags.get(DEFAULT_CHANNEL)
