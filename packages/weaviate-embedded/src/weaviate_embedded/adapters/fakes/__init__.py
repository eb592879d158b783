"""Fake adapters for testing.

This module provides test doubles for port interfaces, enabling
deterministic testing without real I/O operations.
"""

from weaviate_embedded.adapters.fakes.fake_artifact_acquirer import FakeArtifactAcquirer
from weaviate_embedded.adapters.fakes.fake_host_detector import FakeHostDetector
from weaviate_embedded.adapters.fakes.fake_metrics import FakeMetricsAdapter, MetricCall
from weaviate_embedded.adapters.fakes.fake_process_runner import FakeProcess, FakeProcessRunner
from weaviate_embedded.adapters.fakes.fake_readiness_probe import (
    FakeReadinessProbe,
    FakeTimeProvider,
)
from weaviate_embedded.adapters.fakes.fake_release_registry import FakeReleaseRegistry

__all__ = [
    "FakeArtifactAcquirer",
    "FakeHostDetector",
    "FakeMetricsAdapter",
    "FakeProcess",
    "FakeProcessRunner",
    "FakeReadinessProbe",
    "FakeReleaseRegistry",
    "FakeTimeProvider",
    "MetricCall",
]
