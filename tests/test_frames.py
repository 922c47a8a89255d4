import pytest

from tnac.frames import CallStack, Env, StackFrame
from tnac.values import Value


def test_frame_properties():
    frame = StackFrame("f", 2, "back")
    assert frame.name == "f"
    assert frame.arg_count == 2
    assert frame.jump_back == "back"
    assert frame.ret_val is None


def test_allocate_gives_sequential_undefined_slots():
    frame = StackFrame("f", 0, None)
    first = frame.allocate()
    second = frame.allocate()
    assert second == first + 1
    assert frame.value_for(first) == Value()
    assert not frame.value_for(second)


def test_store_and_read_back():
    frame = StackFrame("f", 0, None)
    slot = frame.allocate()
    assert frame.store(slot, Value(42)) is frame
    assert frame.value_for(slot) == Value(42)


def test_args_come_before_allocations():
    frame = StackFrame("f", 2, None)
    frame.add_arg(Value(1)).add_arg(Value(2))
    assert frame.value_for(0) == Value(1)
    assert frame.value_for(1) == Value(2)
    assert frame.allocate() == 2


def test_unallocated_id_raises():
    frame = StackFrame("f", 0, None)
    with pytest.raises(IndexError):
        frame.value_for(0)
    with pytest.raises(IndexError):
        frame.store(3, Value(1))


def test_bad_arg_count():
    with pytest.raises(ValueError):
        StackFrame("f", -1, None)


def test_attach_ret_val():
    frame = StackFrame("f", 0, None)
    slot = frame.allocate()
    frame.attach_ret_val(slot)
    assert frame.ret_val == slot


def test_call_stack_pop_returns_previous():
    stack = CallStack()
    outer = stack.make_frame("outer", 0, None)
    inner = stack.make_frame("inner", 1, "ret")
    assert inner.name == "inner"
    assert len(stack) == 2
    assert stack.pop_frame() is outer
    assert stack.pop_frame() is None
    assert stack.pop_frame() is None
    assert len(stack) == 0


def test_env_mapping():
    env = Env()
    key = object()
    assert env.find_reg(key) is None
    env.map(key, 3)
    assert env.find_reg(key) == 3
    env.map(key, 5)
    assert env.find_reg(key) == 5
    env.clear()
    assert env.find_reg(key) is None