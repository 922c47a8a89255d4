import pytest

from tnac.arrays import ArrayData, ArrayWrapper, Store
from tnac.values import TypeId, Value


def _filled(store, items):
    arr = store.allocate_array(len(items))
    for item in items:
        arr.add(Value(item))
    return arr


def test_allocated_array_starts_empty():
    store = Store()
    arr = store.allocate_array(5)
    assert arr.size() == 0
    assert arr.val_store() is store


def test_add_grows_array():
    store = Store()
    arr = _filled(store, [1, 2, 3])
    assert arr.size() == 3
    assert [v.get(TypeId.INT) for v in arr] == [1, 2, 3]


def test_negative_prealloc_rejected():
    with pytest.raises(ValueError):
        ArrayData(Store(), -1)


def test_wrap_whole_array():
    store = Store()
    arr = _filled(store, [1, 2, 3])
    wrapper = store.wrap(arr)
    assert wrapper.size() == arr.size()
    assert list(wrapper) == list(arr)
    assert wrapper.data() is arr
    assert wrapper.val_store() is store


def test_wrap_whole_follows_growth():
    store = Store()
    arr = store.allocate_array(2)
    wrapper = store.wrap(arr)
    assert wrapper.size() == 0
    arr.add(Value(7))
    assert list(wrapper) == [Value(7)]


def test_wrap_tail():
    store = Store()
    arr = _filled(store, [1, 2, 3, 4])
    wrapper = store.wrap(arr, 1)
    assert wrapper.offset() == 1
    assert list(wrapper) == [Value(2), Value(3), Value(4)]


def test_wrap_window():
    store = Store()
    arr = _filled(store, [1, 2, 3, 4])
    wrapper = store.wrap(arr, 1, 2)
    assert list(wrapper) == [Value(2), Value(3)]
    assert list(reversed(wrapper)) == [Value(3), Value(2)]
    assert wrapper[0] == Value(2)
    assert wrapper[-1] == Value(3)


def test_window_clamped_to_data():
    store = Store()
    arr = _filled(store, [1, 2])
    assert store.wrap(arr, 1, 10).size() == 1
    assert store.wrap(arr, 5).size() == 0


def test_index_out_of_window():
    store = Store()
    wrapper = store.wrap(_filled(store, [1, 2, 3]), 0, 2)
    assert wrapper[1] == Value(2)
    with pytest.raises(IndexError):
        _ = wrapper[2]


def test_negative_offset_rejected():
    with pytest.raises(ValueError):
        ArrayWrapper(ArrayData(Store()), -1)


def test_id_shared_by_wrappers_of_same_data():
    store = Store()
    arr = _filled(store, [1, 2])
    other = _filled(store, [1, 2])
    assert store.wrap(arr).id() == store.wrap(arr, 1).id()
    assert store.wrap(arr).id() != store.wrap(other).id()


def test_rewrap_is_relative():
    store = Store()
    arr = _filled(store, [1, 2, 3, 4, 5])
    outer = store.wrap(arr, 1, 3)
    inner = store.rewrap(outer, 1, 5)
    assert inner.data() is arr
    assert list(inner) == [Value(3), Value(4)]


def test_array_value_iterates_wrapper():
    store = Store()
    wrapper = store.wrap(_filled(store, [4, 5]))
    val = Value.array(wrapper)
    assert val.id() is TypeId.ARRAY
    assert list(val.get(TypeId.ARRAY)) == [Value(4), Value(5)]