"""Image resolver use case: validate or synthesize the artifact target."""

from __future__ import annotations

from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.domain.exceptions import ImageRejection, InvalidImageError
from weaviate_embedded.domain.image import (
    ACCEPTED_SUFFIXES,
    ImageTarget,
    LocalImage,
    RemoteImage,
    has_archive_suffix,
)
from weaviate_embedded.domain.platform import PlatformIdentifier


class ImageResolver:
    """Use case for deciding where the engine archive comes from.

    Validates a caller-supplied target, or builds the canonical release URL
    from the resolved version and platform. Never touches the network.
    """

    def __init__(self, defaults: EngineDefaults = DEFAULTS) -> None:
        self._defaults = defaults

    def resolve(
        self,
        requested: ImageTarget | None,
        version: str,
        platform: PlatformIdentifier,
    ) -> ImageTarget:
        """Return a validated image target.

        Args:
            requested: Caller-supplied target, or None for the default URL.
            version: Resolved release tag.
            platform: Resolved platform.

        Raises:
            InvalidImageError: If the target is rejected. ``reason`` tells
                MISSING, NOT_A_FILE and BAD_SUFFIX apart.
        """
        if requested is None:
            return RemoteImage(self.canonical_url(version, platform))
        if isinstance(requested, LocalImage):
            return self._validate_local(requested)
        return self._validate_remote(requested)

    def canonical_url(self, version: str, platform: PlatformIdentifier) -> str:
        """Build '{release_base}/{version}/{product}-{version}-{platform}.{ext}'."""
        base = self._defaults.release_base.rstrip("/")
        product = self._defaults.product
        return f"{base}/{version}/{product}-{version}-{platform.value}.{platform.extension}"

    @staticmethod
    def _validate_local(image: LocalImage) -> LocalImage:
        path = image.path
        if not path.exists():
            raise InvalidImageError(
                f"Image file does not exist: {path}",
                value=str(path),
                reason=ImageRejection.MISSING,
            )
        if not path.is_file():
            raise InvalidImageError(
                f"Image path is not a regular file: {path}",
                value=str(path),
                reason=ImageRejection.NOT_A_FILE,
            )
        if not has_archive_suffix(image.name):
            raise InvalidImageError(
                f"Image file must end in one of {ACCEPTED_SUFFIXES}, got: {image.name}",
                value=str(path),
                reason=ImageRejection.BAD_SUFFIX,
            )
        return LocalImage(path.absolute())

    @staticmethod
    def _validate_remote(image: RemoteImage) -> RemoteImage:
        if not has_archive_suffix(image.name):
            raise InvalidImageError(
                f"Image URL must end in one of {ACCEPTED_SUFFIXES}, got: {image.url}",
                value=image.url,
                reason=ImageRejection.BAD_SUFFIX,
            )
        return image
