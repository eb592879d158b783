"""Port interface and no-op implementation for metrics collection.

Metrics ports follow fire-and-forget semantics: implementations may
buffer, sample, or drop metrics as needed. No exceptions should propagate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from weaviate_embedded.domain.lifecycle import EngineState


@runtime_checkable
class MetricsPort(Protocol):
    """Port interface for metrics collection.

    Contract:
        - All methods are fire-and-forget (no return value, no exceptions)
        - set_* methods update gauges to specific values
        - Implementations may no-op if metrics are disabled
    """

    def set_engine_state(self, state: EngineState) -> None:
        """Set the engine state gauge.

        Args:
            state: Current lifecycle state of the engine.
        """
        ...

    def set_artifact_cached(self, cached: bool) -> None:
        """Record whether the last provisioning reused an installed artifact.

        Args:
            cached: True if no download or extraction was needed.
        """
        ...


class NoOpMetricsAdapter:
    """No-operation metrics adapter for when metrics are disabled.

    Example:
        >>> adapter = NoOpMetricsAdapter()
        >>> adapter.set_artifact_cached(True)  # Does nothing
    """

    def set_engine_state(self, state: EngineState) -> None:
        """No-op."""
        pass

    def set_artifact_cached(self, cached: bool) -> None:
        """No-op."""
        pass
