"""Pytest fixtures shared across formatting model tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from formatting.model import CategorySelectionId, DataPoint, SettingsModel


@pytest.fixture
def model() -> SettingsModel:
    """Return a freshly initialized settings model."""

    return SettingsModel()


@pytest.fixture
def point() -> Callable[..., DataPoint]:
    """Return a factory for DataPoints scoped to a test category column."""

    def _point(category: str, color: str, key: str | None = None) -> DataPoint:
        return DataPoint(
            category=category,
            color=color,
            selection_id=CategorySelectionId(query_name="Sales.Region", category=key or category),
        )

    return _point


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request or command machinery.
    - `integration`: tests touching Django settings, views, or commands.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
