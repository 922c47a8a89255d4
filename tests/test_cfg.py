import pytest

from tnac.arrays import Store
from tnac.builder import Builder
from tnac.cfg import Cfg
from tnac.instructions import OpCode
from tnac.values import ArrayType, Value


def test_declare_module_is_listed():
    cfg = Cfg()
    mod = cfg.declare_module("m", "mod:0", 0)
    assert cfg.modules == [mod]
    assert cfg.find_entity("m") is mod


def test_declare_function_not_listed_as_module():
    cfg = Cfg()
    mod = cfg.declare_module("m", "mod:0", 0)
    fn = cfg.declare_function("f", mod, "f:1@1", 1)
    assert cfg.modules == [mod]
    assert cfg.find_entity("f") is fn
    assert mod.children == [fn]


def test_param_count_limits():
    cfg = Cfg()
    mod = cfg.declare_module("m", "mod:0", 0xFFFF)
    assert mod.param_count == 0xFFFF
    with pytest.raises(ValueError):
        cfg.declare_module("n", "n:0", 0x10000)
    with pytest.raises(ValueError):
        cfg.declare_function("f", mod, "f", -1)


def test_uses_given_builder():
    bld = Builder()
    cfg = Cfg(bld)
    mod = cfg.declare_module("m", "mod:0", 0)
    assert cfg.builder is bld
    assert bld.find_function("m") is mod


def test_connect_records_edge():
    cfg = Cfg()
    mod = cfg.declare_module("m", "mod:0", 0)
    a = mod.create_block("a")
    b = mod.create_block("b")
    edge = cfg.connect(a, b, Value(False))
    assert cfg.edges == [edge]
    assert b.is_last_connection(a)
    assert edge.value.value == Value(False)


def test_instructions_pass_through():
    cfg = Cfg()
    block = cfg.declare_module("m", "mod:0", 0).create_block("entry")
    instr = cfg.builder.add_instruction(block, OpCode.RET)
    assert list(cfg.instructions) == [instr]


def test_find_array():
    cfg = Cfg()
    store = Store()
    arr = ArrayType(store.wrap(store.allocate_array(0)))
    assert cfg.find_array(arr) is None
    const = cfg.builder.intern(cfg.builder.make_global_register("a"), arr)
    assert cfg.find_array(arr) is const
    assert cfg.interned == [const]