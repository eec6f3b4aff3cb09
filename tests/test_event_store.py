import pytest

from rangecal.data.cache import OrderedEventStore

from tests.helpers import day, is_sorted, make_event


@pytest.fixture
def store():
    return OrderedEventStore(
        [
            make_event("noon", day(2024, 3, 10), 12),
            make_event("morning", day(2024, 3, 10), 8),
            make_event("next", day(2024, 3, 12), 9),
            make_event("later", day(2024, 3, 20), 7),
        ]
    )


def _ids(events):
    return [event.id for event in events]


def test_seed_events_are_sorted(store):
    assert _ids(store) == ["morning", "noon", "next", "later"]
    assert len(store) == 4


def test_insert_places_ties_after_existing_events(store):
    store.insert(make_event("tie", day(2024, 3, 10), 12))
    store.insert(make_event("first", day(2024, 3, 1), 0))
    store.insert(make_event("last", day(2024, 4, 1), 0))
    assert _ids(store) == ["first", "morning", "noon", "tie", "next", "later", "last"]


def test_insert_rejects_duplicate_ids(store):
    with pytest.raises(ValueError):
        store.insert(make_event("noon", day(2024, 5, 1), 9))


def test_insert_into_empty_store():
    store = OrderedEventStore()
    assert store.insert(make_event("only", day(2024, 3, 10), 9)) == 0
    assert _ids(store) == ["only"]


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (day(2024, 3, 10), day(2024, 3, 10), ["morning", "noon"]),
        (day(2024, 3, 1), day(2024, 3, 31), ["morning", "noon", "next", "later"]),
        (day(2024, 3, 11), day(2024, 3, 19), ["next"]),
        (day(2024, 3, 13), day(2024, 3, 19), []),
        (day(2024, 3, 21), day(2024, 3, 31), []),
        (day(2024, 2, 1), day(2024, 3, 9), []),
        (day(2024, 3, 12), day(2024, 3, 20), ["next", "later"]),
    ],
)
def test_slice_by_date_range(store, start, end, expected):
    assert _ids(store.slice_by_date_range(start, end)) == expected


def test_slice_of_empty_store_is_empty():
    assert OrderedEventStore().slice_by_date_range(day(2024, 3, 1), day(2024, 3, 2)) == []


def test_slice_returns_a_copy(store):
    events = store.slice_by_date_range(day(2024, 3, 10), day(2024, 3, 10))
    events.clear()
    assert len(store) == 4


def test_find_by_id(store):
    assert store.find_by_id("next").date == day(2024, 3, 12)
    assert store.find_by_id("missing") is None
    assert store.index_of("noon") == 1
    assert store.index_of("missing") == -1


def test_replace_at_refuses_to_change_the_order(store):
    index = store.index_of("noon")
    renamed = make_event("noon", day(2024, 3, 10), 12, title="Lunch")
    store.replace_at(index, renamed)
    assert store.find_by_id("noon").title == "Lunch"

    with pytest.raises(ValueError):
        store.replace_at(index, make_event("noon", day(2024, 3, 10), 13))


@pytest.mark.parametrize(
    "event_id, hour_day, expected",
    [
        ("morning", (day(2024, 3, 15), 10), ["noon", "next", "morning", "later"]),
        ("later", (day(2024, 3, 10), 9), ["morning", "later", "noon", "next"]),
        ("next", (day(2024, 3, 10), 12), ["morning", "noon", "next", "later"]),
        ("noon", (day(2024, 3, 10), 7), ["noon", "morning", "next", "later"]),
    ],
)
def test_move_keeps_the_store_sorted(store, event_id, hour_day, expected):
    when, hour = hour_day
    index = store.move(event_id, make_event(event_id, when, hour))
    assert _ids(store) == expected
    assert store.index_of(event_id) == index
    assert is_sorted(store)
    assert len(store) == 4


def test_move_unknown_id_raises(store):
    with pytest.raises(KeyError):
        store.move("missing", make_event("missing", day(2024, 3, 1), 9))


def test_remove(store):
    removed = store.remove("next")
    assert removed.id == "next"
    assert store.remove("next") is None
    assert _ids(store) == ["morning", "noon", "later"]


def test_merge_splices_a_batch_into_a_gap(store):
    added = store.merge(
        [
            make_event("m15b", day(2024, 3, 15), 11),
            make_event("m15a", day(2024, 3, 15), 10),
        ]
    )
    assert added == 2
    assert _ids(store) == ["morning", "noon", "next", "m15a", "m15b", "later"]


def test_merge_interleaves_overlapping_batches(store):
    store.merge(
        [
            make_event("m20", day(2024, 3, 20), 6),
            make_event("m11", day(2024, 3, 11), 9),
            make_event("m10", day(2024, 3, 10), 9),
        ]
    )
    assert _ids(store) == ["morning", "m10", "noon", "m11", "next", "m20", "later"]


def test_merge_skips_known_and_repeated_ids(store):
    added = store.merge(
        [
            make_event("noon", day(2024, 3, 10), 12),
            make_event("new", day(2024, 3, 25), 9),
            make_event("new", day(2024, 3, 25), 9),
        ]
    )
    assert added == 1
    assert _ids(store).count("noon") == 1
    assert _ids(store)[-1] == "new"


def test_merge_keeps_existing_events_ahead_of_equal_newcomers(store):
    store.merge([make_event("tie", day(2024, 3, 10), 8), make_event("x", day(2024, 3, 20), 8)])
    assert _ids(store) == ["morning", "tie", "noon", "next", "later", "x"]


def test_clear_and_snapshot(store):
    snapshot = store.snapshot()
    store.clear()
    assert len(store) == 0
    assert len(snapshot) == 4
