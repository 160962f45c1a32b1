import pytest

from chunk_range import (
    BoundsViolation,
    ChunkStore,
    ChunkView,
    ContractViolation,
    Fetched,
    StoreClosedError,
)

from .utils import pattern_bytes


@pytest.fixture
def store(pattern_file):
    with ChunkStore(pattern_file(10), chunk_size=4) as store:
        yield store


def test_construction_does_no_io(store):
    view = ChunkView(store, 1)
    assert not view.materialized
    assert view.length() == 4
    assert store.stats.fetches == 0


def test_access_materializes_once(store):
    view = ChunkView(store, 1)
    assert view.front() == 4
    assert view.back() == 7
    assert view.at(2) == 6
    assert view.materialized
    assert store.stats.fetches == 1
    assert view.index == 1


def test_partial_chunk_clamps_end(store):
    view = ChunkView(store, 2)
    assert view.length() == 4
    assert view.back() == 9
    assert view.length() == 2
    assert list(view) == [8, 9]


def test_pop_shrinks_window(store):
    view = ChunkView(store, 0)
    view.pop_front()
    view.pop_back()
    assert view.length() == 2
    assert (view.front(), view.back()) == (1, 2)
    view.pop_front()
    view.pop_front()
    assert view.is_empty()
    with pytest.raises(ContractViolation):
        view.front()
    with pytest.raises(ContractViolation):
        view.back()
    with pytest.raises(ContractViolation):
        view.pop_front()
    with pytest.raises(ContractViolation):
        view.pop_back()


def test_at_out_of_range(store):
    view = ChunkView(store, 0)
    with pytest.raises(BoundsViolation):
        view.at(4)
    with pytest.raises(IndexError):
        view.at(-1)


def test_slice_translates_bounds_and_shares_data(store):
    view = ChunkView(store, 0)
    view.front()
    inner = view.slice(1, 3)
    assert inner.materialized
    assert list(inner) == [1, 2]
    nested = inner.slice(1, 2)
    assert nested.front() == 2
    assert store.stats.fetches == 1


def test_slice_of_unfetched_view_stays_lazy(store):
    view = ChunkView(store, 1).slice(2, 4)
    assert not view.materialized
    assert store.stats.fetches == 0
    assert view.front() == 6


def test_invalid_slices(store):
    view = ChunkView(store, 0)
    with pytest.raises(ContractViolation):
        view.slice(3, 2)
    with pytest.raises(ContractViolation):
        view.slice(0, 5)
    with pytest.raises(ContractViolation):
        view.slice(-1, 2)


def test_with_bounds_uses_given_data(store):
    data = tuple(pattern_bytes(4))
    view = ChunkView.with_bounds(store, 0, Fetched(data), 1, 3)
    assert view.materialized
    assert list(view) == [1, 2]
    assert store.stats.fetches == 0


def test_view_past_end_of_file_is_contract_violation(store):
    with pytest.raises(ContractViolation):
        ChunkView(store, 3)


def test_copy_is_independent(store):
    view = ChunkView(store, 0)
    other = view.copy()
    other.pop_front()
    assert view.front() == 0
    assert other.front() == 1


def test_for_each_indexed_visits_window(store):
    seen = []
    result = ChunkView(store, 1).slice(1, 4).for_each_indexed(
        lambda i, value: seen.append((i, value))
    )
    assert result is None
    assert seen == [(0, 5), (1, 6), (2, 7)]


def test_for_each_indexed_stops_early(store):
    seen = []

    def callback(i, value):
        seen.append(value)
        return value == 5

    assert ChunkView(store, 1).for_each_indexed(callback) is True
    assert seen == [4, 5]


def test_python_protocol(store):
    view = ChunkView(store, 2)
    assert len(view) == 2
    assert view[-1] == 9
    assert list(view[0:1]) == [8]
    with pytest.raises(IndexError):
        view[-3]
    with pytest.raises(ValueError):
        view[::2]


def test_closed_store_invalidates_fetched_view(store):
    view = ChunkView(store, 0)
    assert view.front() == 0
    store.close()
    with pytest.raises(StoreClosedError):
        view.front()
    with pytest.raises(IOError):
        ChunkView(store, 1).at(0)


def test_fetched_data_clamps_end_to_partial_chunk(store):
    view = ChunkView(store, 2, Fetched(store.fetch_chunk(2)))
    assert view.length() == 2
    assert view.back() == 9
    with pytest.raises(BoundsViolation):
        view.at(2)
    bounded = ChunkView.with_bounds(store, 2, Fetched(store.fetch_chunk(2)), 1, 4)
    assert bounded.length() == 1
    assert list(bounded) == [9]
    with pytest.raises(ContractViolation):
        ChunkView.with_bounds(store, 2, Fetched(store.fetch_chunk(2)), 3, 4)


class Position:
    def __init__(self, value):
        self.value = value

    def __index__(self):
        return self.value


def test_integer_like_indices(store):
    view = ChunkView(store, 1)
    assert view[Position(2)] == 6
    assert view[Position(-1)] == 7
    with pytest.raises(TypeError):
        view["1"]
    with pytest.raises(TypeError):
        view[1.0]


def test_bool_does_not_read(store):
    view = ChunkView(store, 0)
    store.close()
    assert view
    assert not view.slice(2, 2)
    assert store.stats.fetches == 0
