import pytest

from tnac.arrays import Store
from tnac.builder import Builder, Constant
from tnac.instructions import OpCode
from tnac.values import ArrayType, Value


def _array(store):
    arr = store.allocate_array(1)
    arr.add(Value(True))
    return ArrayType(store.wrap(arr))


def test_make_module_and_find():
    bld = Builder()
    mod = bld.make_module("m", "mod:0", 0)
    assert bld.find_function("m") is mod
    assert bld.find_function("other") is None
    assert mod.owner_func is None


def test_duplicate_entity_raises():
    bld = Builder()
    bld.make_module("m", "mod:0", 0)
    with pytest.raises(ValueError):
        bld.make_module("m", "mod:0", 0)


def test_make_function_with_owner():
    bld = Builder()
    mod = bld.make_module("m", "mod:0", 0)
    fn = bld.make_function("f", mod, "f:2@1", 2)
    assert mod.lookup("f") is fn
    assert fn.param_count == 2
    assert bld.find_function("f") is fn


def test_make_loose_is_not_registered():
    bld = Builder()
    loose = bld.make_loose("x", "scope")
    assert loose.is_loose
    assert bld.find_function("x") is None


def test_add_instruction_order_and_position():
    bld = Builder()
    block = bld.make_module("m", "mod:0", 0).create_block("entry")
    first = bld.add_instruction(block, OpCode.LOAD)
    last = bld.add_instruction(block, OpCode.RET)
    mid = bld.add_instruction(block, OpCode.STORE, last)
    assert list(bld.instructions) == [first, mid, last]
    assert mid.owner_block is block


def test_add_instruction_count():
    bld = Builder()
    block = bld.make_module("m", "mod:0", 0).create_block("entry")
    instr = bld.add_instruction(block, OpCode.CALL, None, 5)
    assert instr.capacity == 5


def test_add_var_goes_to_front():
    bld = Builder()
    block = bld.make_module("m", "mod:0", 0).create_block("entry")
    load = bld.add_instruction(block, OpCode.LOAD)
    var = bld.add_var(block, load)
    assert block.first is var
    assert list(block) == [var, load]
    assert var.opcode is OpCode.ALLOC


def test_add_array_on_empty_block():
    bld = Builder()
    block = bld.make_module("m", "mod:0", 0).create_block("entry")
    arr = bld.add_array(block)
    assert block.first is arr and block.last is arr
    assert arr.opcode is OpCode.ARR


def test_registers():
    bld = Builder()
    named = bld.make_register("x")
    indexed = bld.make_register(3)
    glob = bld.make_global_register("g")
    assert named.name == "x" and not named.is_global
    assert indexed.index == 3
    assert glob.is_global


def test_make_edge_and_loose_edge():
    bld = Builder()
    fn = bld.make_module("m", "mod:0", 0)
    a = fn.create_block("a")
    b = fn.create_block("b")
    e = bld.make_edge(a, b, Value(True))
    bld.make_loose_edge(a, b, None)
    assert bld.edges == [e]
    assert b.preds == (e,)


def test_synth_phi_outside_list():
    bld = Builder()
    block = bld.make_module("m", "mod:0", 0).create_block("entry")
    phi = bld.synth_phi(block)
    assert phi.opcode is OpCode.PHI
    assert len(bld.instructions) == 0


def test_intern_and_find():
    bld = Builder()
    store = Store()
    arr = _array(store)
    reg = bld.make_global_register(".array.")
    const = bld.intern(reg, arr)
    assert isinstance(const, Constant)
    assert const.target_reg is reg and const.value is arr
    assert bld.find_interned(ArrayType(arr.wrapper())) is const
    assert bld.interned == [const]
    assert bld.find_interned(_array(store)) is None


def test_intern_twice_raises():
    bld = Builder()
    arr = _array(Store())
    bld.intern(bld.make_global_register("a"), arr)
    with pytest.raises(ValueError):
        bld.intern(bld.make_global_register("b"), arr)