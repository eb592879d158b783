"""Fake readiness probe and time provider for testing."""

from __future__ import annotations

from weaviate_embedded.domain.config import BindAddress


class FakeReadinessProbe:
    """Fake implementation of ReadinessProbePort for testing.

    Reports the address as accepting after ``ready_after`` failed probes.
    Pass ``ready_after=None`` for an engine that never becomes ready.

    Example:
        >>> probe = FakeReadinessProbe(ready_after=1)
        >>> address = BindAddress("127.0.0.1", 8079)
        >>> probe.is_accepting(address), probe.is_accepting(address)
        (False, True)
    """

    def __init__(self, ready_after: int | None = 0) -> None:
        self._ready_after = ready_after
        self.probes: list[BindAddress] = []

    def is_accepting(self, address: BindAddress) -> bool:
        self.probes.append(address)
        if self._ready_after is None:
            return False
        return len(self.probes) > self._ready_after


class FakeTimeProvider:
    """Fake implementation of TimeProvider that only advances on sleep().

    Example:
        >>> clock = FakeTimeProvider()
        >>> clock.sleep(2.5)
        >>> clock.get_time_seconds()
        2.5
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self.sleeps: list[float] = []

    def get_time_seconds(self) -> float:
        return self._now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self._now += seconds

    def advance(self, seconds: float) -> None:
        """Advance the clock without recording a sleep."""
        self._now += seconds
