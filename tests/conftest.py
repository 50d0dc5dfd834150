from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from pulse.adapters.storage.memory import MemoryStorage
from pulse.core.identity import SequentialIds
from pulse.core.lifecycle import SessionManager


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Automatically add markers based on test location.

    - tests/unit/ -> @pytest.mark.unit
    - tests/integration/ -> @pytest.mark.integration
    """
    for item in items:
        path = str(item.fspath)
        existing_markers = {m.name for m in item.iter_markers()}

        if "/unit/" in path and "unit" not in existing_markers:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path and "integration" not in existing_markers:
            item.add_marker(pytest.mark.integration)


class FakeClock:
    """Returns a fixed instant, then moves forward by ``step`` on each call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 10, 19, 14, 30, 0, tzinfo=UTC))


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def manager(storage: MemoryStorage, clock: FakeClock) -> SessionManager:
    return SessionManager(storage, clock=clock, id_factory=SequentialIds())


@pytest.fixture
def engineer_submission() -> dict[str, object]:
    return {
        "role": "engineer",
        "familiarity": "beginner",
        "hope": ["practical-skills", "networking"],
    }
