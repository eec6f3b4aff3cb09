import orjson
import pytest

from rangecal.domain import TimeOfDay
from rangecal.errors import NotFoundError, ValidationError
from rangecal.services import LocalEventsManager

from tests.helpers import day, make_event


def _ids(events):
    return [event.id for event in events]


def test_every_range_is_available(local_manager):
    assert _ids(local_manager.get_local_if_available(day(2024, 3, 1), day(2024, 3, 31))) == ["1", "0", "2"]
    assert local_manager.get_local_if_available(day(2025, 1, 1), day(2025, 1, 31)) == []
    with pytest.raises(ValidationError):
        local_manager.get_local_if_available(day(2024, 3, 2), day(2024, 3, 1))


@pytest.mark.asyncio
async def test_resolve_range_answers_from_memory(local_manager):
    events = await local_manager.resolve_range(day(2024, 3, 10), day(2024, 3, 10))
    assert _ids(events) == ["1", "0"]
    with pytest.raises(ValidationError):
        await local_manager.resolve_range(day(2024, 3, 2), day(2024, 3, 1))


@pytest.mark.asyncio
async def test_create_allocates_unused_ids(local_manager):
    created = await local_manager.create(make_event("", day(2024, 3, 10), 8))
    again = await local_manager.create(make_event("", day(2024, 3, 11), 8))
    assert created.id == "3"
    assert again.id == "4"
    assert _ids(local_manager.store) == ["1", "3", "0", "4", "2"]


def test_seed_events_without_ids_do_not_collide():
    manager = LocalEventsManager(
        [
            make_event("", day(2024, 3, 1), 9),
            make_event("2", day(2024, 3, 2), 9),
            make_event("", day(2024, 3, 3), 9),
        ]
    )
    assert sorted(_ids(manager.store)) == ["2", "3", "4"]


@pytest.mark.asyncio
async def test_update_and_remove(local_manager):
    moved = await local_manager.update("0", {"date": day(2024, 3, 20), "start_time": TimeOfDay(7, 0)})
    assert moved.date == day(2024, 3, 20)
    assert _ids(local_manager.store) == ["1", "2", "0"]

    removed = await local_manager.remove("2")
    assert removed.id == "2"
    assert local_manager.find_by_id("2") is None

    with pytest.raises(NotFoundError):
        await local_manager.remove("2")
    with pytest.raises(NotFoundError):
        await local_manager.update("2", {"title": "gone"})


@pytest.mark.asyncio
async def test_aclose_clears_the_store(local_manager):
    await local_manager.aclose()
    assert len(local_manager.store) == 0


@pytest.mark.parametrize("wrap", [False, True])
def test_from_file_reads_event_records(tmp_path, wrap):
    records = [
        {"id": "10", "title": "Dentist", "date_time": "202403051030"},
        {"id": "11", "title": "Run", "date_time": "202403050700", "end_time": "0800"},
    ]
    path = tmp_path / "events.json"
    path.write_bytes(orjson.dumps({"events": records} if wrap else records))

    manager = LocalEventsManager.from_file(path)

    assert _ids(manager.store) == ["11", "10"]
    assert manager.find_by_id("11").end_time == TimeOfDay(8, 0)
