"""Version resolver use case."""

from __future__ import annotations

import logging

from weaviate_embedded.adapters.ports import ReleaseRegistryPort
from weaviate_embedded.domain.exceptions import InvalidVersionError, VersionFetchError
from weaviate_embedded.domain.version import LATEST, EngineVersion

logger = logging.getLogger(__name__)


class VersionResolver:
    """Use case for turning a requested version into a concrete release tag.

    An explicit tag is validated and normalized locally. The ``latest``
    sentinel costs exactly one registry round trip; so does an explicit tag
    when ``verify`` is requested. Nothing is retried or cached.
    """

    def __init__(self, registry: ReleaseRegistryPort) -> None:
        """Initialize the version resolver.

        Args:
            registry: Port for querying the release registry.
        """
        self._registry = registry

    def resolve(self, requested: str, verify: bool = False) -> str:
        """Resolve ``requested`` to a normalized tag such as 'v1.21.1'.

        Args:
            requested: Explicit tag ('1.21.1', 'v1.21.1') or 'latest'.
            verify: Whether to confirm an explicit tag exists upstream.

        Returns:
            The normalized tag. Never 'latest'.

        Raises:
            InvalidVersionError: If an explicit tag does not match the pattern.
            VersionFetchError: If the registry lookup fails or returns a tag
                that does not match the pattern.
        """
        if requested == LATEST:
            return self._resolve_latest()

        tag = EngineVersion.from_string(requested).tag
        if verify:
            self._registry.fetch_release(tag)
            logger.debug("Verified release %s exists", tag)
        return tag

    def _resolve_latest(self) -> str:
        release = self._registry.fetch_latest()
        try:
            tag = EngineVersion.from_string(release.tag).tag
        except InvalidVersionError as e:
            raise VersionFetchError(
                f"Release registry returned an unrecognized tag: {release.tag!r}",
                value=release.tag,
                original_error=e,
            ) from e
        logger.debug("Resolved latest version to %s", tag)
        return tag
