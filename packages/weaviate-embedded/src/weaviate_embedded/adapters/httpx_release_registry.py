"""HTTPX-based implementation of the ReleaseRegistryPort.

This adapter queries the GitHub releases API for release tags.
"""

from __future__ import annotations

import logging

import httpx

from weaviate_embedded.adapters.ports import ReleaseInfo, ReleaseRegistryPort
from weaviate_embedded.domain.exceptions import VersionFetchError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class HttpxReleaseRegistry:
    """HTTPX-based adapter for the GitHub releases API.

    Every call performs a single GET request. There is no retry and no
    caching: a failure surfaces as VersionFetchError.

    Attributes:
        owner: Repository owner (e.g. 'weaviate').
        repo: Repository name (e.g. 'weaviate').
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        client: httpx.Client | None = None,
        token: str | None = None,
        api_url: str = GITHUB_API_URL,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the release registry.

        Args:
            owner: Repository owner.
            repo: Repository name.
            client: Optional httpx.Client for dependency injection (testing).
                   If not provided, a new client is created per request.
            token: Optional GitHub token, sent as a bearer token.
            api_url: Base URL of the GitHub API.
            timeout: Request timeout in seconds.
        """
        self.owner = owner
        self.repo = repo
        self._client = client
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def fetch_latest(self) -> ReleaseInfo:
        """Fetch the newest published release.

        Raises:
            VersionFetchError: For network failures, HTTP errors or a payload
                without a tag name.
        """
        return self._fetch(f"{self._releases_url}/latest")

    def fetch_release(self, tag: str) -> ReleaseInfo:
        """Fetch the release published under ``tag``.

        Raises:
            VersionFetchError: If the release does not exist or cannot be fetched.
        """
        return self._fetch(f"{self._releases_url}/tags/{tag}")

    @property
    def _releases_url(self) -> str:
        return f"{self._api_url}/repos/{self.owner}/{self.repo}/releases"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _fetch(self, url: str) -> ReleaseInfo:
        logger.debug("Fetching release metadata from %s", url)
        try:
            if self._client is not None:
                response = self._client.get(url, headers=self._headers())
                response.raise_for_status()
                payload = response.json()
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url, headers=self._headers())
                    response.raise_for_status()
                    payload = response.json()
        except httpx.HTTPStatusError as e:
            raise VersionFetchError(
                f"Release registry returned HTTP {e.response.status_code} for {url}",
                value=url,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise VersionFetchError(
                f"Failed to reach release registry at {url}: {e}",
                value=url,
                original_error=e,
            ) from e
        except ValueError as e:
            raise VersionFetchError(
                f"Release registry returned invalid JSON for {url}",
                value=url,
                original_error=e,
            ) from e

        tag = payload.get("tag_name") if isinstance(payload, dict) else None
        if not isinstance(tag, str) or not tag:
            raise VersionFetchError(
                f"Release registry response for {url} has no tag_name", value=url
            )

        return ReleaseInfo(
            tag=tag,
            name=payload.get("name"),
            published_at=payload.get("published_at"),
        )


# Runtime protocol check
assert isinstance(HttpxReleaseRegistry(owner="weaviate", repo="weaviate"), ReleaseRegistryPort)
