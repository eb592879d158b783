"""Fake release registry for testing.

Provides a test double for ReleaseRegistryPort that answers from
preconfigured tags and records every call.
"""

from __future__ import annotations

from weaviate_embedded.adapters.ports import ReleaseInfo
from weaviate_embedded.domain.exceptions import VersionFetchError


class FakeReleaseRegistry:
    """Fake implementation of ReleaseRegistryPort for testing.

    ``fetch_release`` succeeds for every tag in ``known_tags`` (and for the
    latest tag) and raises VersionFetchError otherwise, like a 404 would.

    Example:
        >>> fake = FakeReleaseRegistry(latest="v1.22.0")
        >>> fake.fetch_latest().tag
        'v1.22.0'
        >>> fake.calls
        [('latest', None)]
    """

    def __init__(
        self,
        latest: str = "v1.21.1",
        known_tags: tuple[str, ...] = (),
    ) -> None:
        self._latest = latest
        self._known_tags = set(known_tags) | {latest}
        self._exception: BaseException | None = None
        self._calls: list[tuple[str, str | None]] = []

    @property
    def calls(self) -> list[tuple[str, str | None]]:
        """Return (operation, tag) tuples for every call made."""
        return self._calls

    def set_latest(self, tag: str) -> None:
        self._latest = tag
        self._known_tags.add(tag)

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from every fetch, or None to clear."""
        self._exception = exception

    def fetch_latest(self) -> ReleaseInfo:
        self._calls.append(("latest", None))
        if self._exception is not None:
            raise self._exception
        return ReleaseInfo(tag=self._latest)

    def fetch_release(self, tag: str) -> ReleaseInfo:
        self._calls.append(("release", tag))
        if self._exception is not None:
            raise self._exception
        if tag not in self._known_tags:
            raise VersionFetchError(f"Release {tag} not found", value=tag)
        return ReleaseInfo(tag=tag)
