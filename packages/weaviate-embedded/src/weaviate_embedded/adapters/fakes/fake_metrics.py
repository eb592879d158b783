"""Fake metrics adapter for testing.

Provides a test double for MetricsPort that records all metric updates
for assertion in tests.
"""

from __future__ import annotations

from dataclasses import dataclass

from weaviate_embedded.domain.lifecycle import EngineState


@dataclass(frozen=True)
class MetricCall:
    """Record of a single metric update.

    Attributes:
        metric_name: Name of the metric that was updated.
        value: Value that was set.
    """

    metric_name: str
    value: object


class FakeMetricsAdapter:
    """Fake implementation of MetricsPort for testing.

    Example:
        >>> fake = FakeMetricsAdapter()
        >>> fake.set_artifact_cached(True)
        >>> fake.calls
        [MetricCall(metric_name='artifact_cached', value=True)]
    """

    def __init__(self) -> None:
        self._engine_state: EngineState | None = None
        self._artifact_cached: bool | None = None
        self._calls: list[MetricCall] = []

    @property
    def calls(self) -> list[MetricCall]:
        """Return a copy of all metric update calls in order."""
        return list(self._calls)

    @property
    def states(self) -> list[EngineState]:
        """Return every engine state recorded, in order."""
        return [c.value for c in self._calls if c.metric_name == "engine_state"]

    @property
    def current_engine_state(self) -> EngineState | None:
        return self._engine_state

    @property
    def current_artifact_cached(self) -> bool | None:
        return self._artifact_cached

    def set_engine_state(self, state: EngineState) -> None:
        self._engine_state = state
        self._calls.append(MetricCall("engine_state", state))

    def set_artifact_cached(self, cached: bool) -> None:
        self._artifact_cached = cached
        self._calls.append(MetricCall("artifact_cached", cached))

    def reset(self) -> None:
        """Reset all state and calls."""
        self._engine_state = None
        self._artifact_cached = None
        self._calls.clear()
