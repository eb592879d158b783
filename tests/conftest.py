"""
Root conftest.py for the weaviate-embedded test suite.

Registers the responsibility (``tra``) and tier markers, reports tests that
lack them, and turns tiers into timeouts when pytest-timeout is installed.

Usage:
    @pytest.mark.tier(1)
    @pytest.mark.tra("UseCase.VersionResolver")
    def test_something():
        ...

Configuration:
    MARKER_ENFORCE=1 fails collection on missing or invalid markers
    TIER_TIMEOUT_MULTIPLIER scales every tier timeout (default 1.0)
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.nodes import Item


VALID_TRA_PREFIXES = frozenset(
    [
        "Domain.Invariant.",
        "Domain.Policy.",
        "UseCase.",
        "Port.",
        "Adapter.",
        "Contract.",
    ]
)

# Seconds; 0 means no limit
TIER_TIMEOUTS: dict[int, float] = {
    0: 0.1,
    1: 2.0,
    2: 30.0,
    3: 300.0,
    4: 0,
}


def pytest_configure(config: Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "tra(anchor): Responsibility this test protects. Must start with one of: "
        "Domain.Invariant, Domain.Policy, UseCase, Port, Adapter, Contract",
    )
    config.addinivalue_line(
        "markers",
        "tier(level): Test tier (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")


def _get_tier(item: Item) -> int | None:
    for marker in item.iter_markers(name="tier"):
        if marker.args and isinstance(marker.args[0], int) and 0 <= marker.args[0] <= 4:
            return marker.args[0]
    return None


def _marker_errors(items: list[Item]) -> list[str]:
    errors = []
    for item in items:
        tra_markers = list(item.iter_markers(name="tra"))
        if len(tra_markers) != 1:
            errors.append(f"{item.nodeid}: expected exactly one @tra marker")
        else:
            anchor = tra_markers[0].args[0] if tra_markers[0].args else ""
            if not any(str(anchor).startswith(p) for p in VALID_TRA_PREFIXES):
                errors.append(f"{item.nodeid}: invalid TRA anchor {anchor!r}")
        if _get_tier(item) is None:
            errors.append(f"{item.nodeid}: missing or invalid @tier marker")
    return errors


def _apply_tier_timeouts(items: list[Item]) -> None:
    try:
        import pytest_timeout as _  # type: ignore[import-untyped]  # noqa: F401
    except ImportError:
        return

    multiplier = float(os.environ.get("TIER_TIMEOUT_MULTIPLIER", "1.0"))
    for item in items:
        tier = _get_tier(item)
        if tier is None or any(item.iter_markers(name="timeout")):
            continue
        timeout = TIER_TIMEOUTS.get(tier, 0)
        if timeout > 0:
            item.add_marker(pytest.mark.timeout(timeout * multiplier))


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    """Check markers and apply tier timeouts."""
    errors = _marker_errors(items)
    if errors:
        if os.environ.get("MARKER_ENFORCE") == "1":
            pytest.fail(
                "Marker errors:\n" + "\n".join(f"  - {e}" for e in errors),
                pytrace=False,
            )
        print("\nMarker warnings:")
        for error in errors[:20]:
            print(f"  {error}")

    _apply_tier_timeouts(items)
