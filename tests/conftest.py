import pytest

from rangecal.services import EventsManager, LocalEventsManager

from tests.helpers import FakeBackend, day, make_event


@pytest.fixture
def backend():
    """Remote store holding a few events in March 2024."""
    return FakeBackend(
        [
            make_event("a", day(2024, 3, 10), 9),
            make_event("b", day(2024, 3, 10), 8),
            make_event("c", day(2024, 3, 12), 14, 30),
            make_event("d", day(2024, 3, 20), 7),
        ]
    )


@pytest.fixture
def manager(backend):
    return EventsManager(backend)


@pytest.fixture
def local_manager():
    return LocalEventsManager(
        [
            make_event("0", day(2024, 3, 10), 9),
            make_event("1", day(2024, 3, 10), 8),
            make_event("2", day(2024, 3, 15), 12),
        ]
    )
