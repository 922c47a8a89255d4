import pytest

from tnac.blocks import BasicBlock, Edge
from tnac.instructions import Instruction, InstructionList, OpCode
from tnac.values import Value


def _blocks(*names):
    return [BasicBlock(n, None) for n in names]


def test_edge_registers_on_both_blocks():
    a, b = _blocks("a", "b")
    e = Edge(a, b, Value(True))
    assert a.outs == (e,)
    assert b.preds == (e,)
    assert e.incoming is a and e.outgoing is b
    assert e.value.value == Value(True)


def test_loose_edge_is_not_registered():
    a, b = _blocks("a", "b")
    Edge(a, b, None, loose=True)
    assert a.outs == ()
    assert b.preds == ()


def test_edge_default_value_is_undefined():
    a, b = _blocks("a", "b")
    assert Edge(a, b).value.is_undef()


def test_add_instruction_tracks_range():
    lst = InstructionList()
    block = BasicBlock("b", None)
    instrs = [Instruction(block, OpCode.LOAD) for _ in range(3)]
    for instr in instrs:
        lst.insert_before(None, instr)
        block.add_instruction(instr)
    assert block.first is instrs[0]
    assert block.last is instrs[-1]
    assert list(block) == instrs
    assert block.end is None


def test_add_instruction_front_on_empty_block():
    block = BasicBlock("b", None)
    instr = Instruction(block, OpCode.ALLOC)
    block.add_instruction_front(instr)
    assert block.first is instr and block.last is instr


def test_iteration_stops_at_block_end():
    lst = InstructionList()
    a, b = _blocks("a", "b")
    ia = Instruction(a, OpCode.LOAD)
    ib = Instruction(b, OpCode.LOAD)
    lst.insert_before(None, ia)
    a.add_instruction(ia)
    lst.insert_before(None, ib)
    b.add_instruction(ib)
    assert list(a) == [ia]
    assert a.end is ib


def test_clear_instructions_keeps_other_blocks():
    lst = InstructionList()
    a, b = _blocks("a", "b")
    for block in (a, b, a):
        instr = Instruction(block, OpCode.LOAD)
        lst.insert_before(None, instr)
    # assign only contiguous ranges
    items = list(lst)
    a2 = BasicBlock("a2", None)
    a2.add_instruction(items[0])
    a2.add_instruction(items[1])
    a2.clear_instructions()
    assert list(lst) == [items[2]]
    assert a2.first is None and a2.last is None
    assert list(a2) == []


def test_last_pred_and_connection():
    a, b, c = _blocks("a", "b", "c")
    e1 = Edge(a, c)
    e2 = Edge(b, c)
    assert c.is_last_pred(e2)
    assert not c.is_last_pred(e1)
    assert c.is_last_connection(b)
    assert not c.is_last_connection(a)
    assert not a.is_last_connection(b)


def test_is_connected_to_is_transitive():
    a, b, c, d = _blocks("a", "b", "c", "d")
    Edge(a, b)
    Edge(b, c)
    assert a.is_connected_to(c)
    assert not c.is_connected_to(a)
    assert not a.is_connected_to(d)


def test_is_connected_to_handles_cycles():
    a, b, c = _blocks("a", "b", "c")
    Edge(a, b)
    Edge(b, a)
    assert a.is_connected_to(a)
    assert not a.is_connected_to(c)


def test_edge_rejects_bad_value():
    a, b = _blocks("a", "b")
    with pytest.raises(TypeError):
        Edge(a, b, object())