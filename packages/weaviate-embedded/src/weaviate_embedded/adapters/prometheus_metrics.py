"""Prometheus metrics adapter for the embedded engine.

Implements MetricsPort using prometheus-client library.
Gracefully handles missing prometheus-client (raises ImportError at init).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from weaviate_embedded.domain.lifecycle import EngineState

if TYPE_CHECKING:
    from prometheus_client import CollectorRegistry, Gauge


class PrometheusMetricsAdapter:
    """Prometheus implementation of MetricsPort.

    Exposes one enum-style gauge per lifecycle state (1 for the current
    state, 0 otherwise) and a gauge for artifact cache reuse.

    This adapter requires prometheus-client to be installed:
        pip install weaviate-embedded[metrics]

    Example:
        >>> adapter = PrometheusMetricsAdapter(prefix="myapp_engine")
        >>> adapter.set_artifact_cached(True)  # Sets myapp_engine_artifact_cached to 1

    Raises:
        ImportError: If prometheus-client is not installed.
    """

    def __init__(
        self,
        prefix: str = "weaviate_embedded",
        registry: CollectorRegistry | None = None,
    ) -> None:
        """Initialize Prometheus gauges.

        Args:
            prefix: Metric name prefix. Defaults to "weaviate_embedded".
            registry: Registry to register gauges with. Defaults to the
                     global prometheus_client registry.

        Raises:
            ImportError: If prometheus-client is not installed.
        """
        # Import here to make prometheus-client optional
        from prometheus_client import REGISTRY, Gauge

        registry = registry if registry is not None else REGISTRY
        self._engine_state: Gauge = Gauge(
            f"{prefix}_engine_state",
            "Engine lifecycle state: 1 for the current state, 0 otherwise",
            ["state"],
            registry=registry,
        )
        self._artifact_cached: Gauge = Gauge(
            f"{prefix}_artifact_cached",
            "Artifact reused from cache on last provisioning: 1=yes, 0=no",
            registry=registry,
        )

    def set_engine_state(self, state: EngineState) -> None:
        """Set the state gauge for ``state`` to 1 and every other state to 0."""
        for candidate in EngineState:
            self._engine_state.labels(state=candidate.value).set(
                1 if candidate is state else 0
            )

    def set_artifact_cached(self, cached: bool) -> None:
        self._artifact_cached.set(1 if cached else 0)
