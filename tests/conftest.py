"""Pytest configuration and shared fixtures for the keyset pagination tests."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import List
from uuid import UUID, uuid5, NAMESPACE_URL

from pydantic import BaseModel

from keyset_pagination.config import Settings


class Item(BaseModel):
    """Simple entity keyed by an integer id."""

    id: int
    name: str


class Event(BaseModel):
    """Entity ordered by timestamp with a UUID tie-breaker."""

    id: UUID
    created_at: datetime
    title: str


@pytest.fixture
def test_settings() -> Settings:
    """Settings with library defaults, independent of the environment."""
    return Settings(
        default_limit=10,
        default_order="desc",
        default_keys=["id"],
        max_limit=None
    )


@pytest.fixture
def item_model() -> type:
    return Item


@pytest.fixture
def event_model() -> type:
    return Event


@pytest.fixture
def items() -> List[Item]:
    """Items with ids 1..25."""
    return [Item(id=i, name=f"item-{i}") for i in range(1, 26)]


@pytest.fixture
def events() -> List[Event]:
    """Events where several rows share a created_at timestamp."""
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    events = []
    for i in range(23):
        events.append(Event(
            id=uuid5(NAMESPACE_URL, f"event-{i}"),
            created_at=base_time + timedelta(minutes=i // 4),
            title=f"Event {i}"
        ))
    return events


@pytest.fixture
def named_rows() -> List[dict]:
    """Plain dict rows with repeated names."""
    names = ["alpha", "beta", "gamma", "delta"]
    return [{"id": i, "name": names[i % len(names)]} for i in range(1, 18)]


# Pytest markers for test categorization
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, in-memory)")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
