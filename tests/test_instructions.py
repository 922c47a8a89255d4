import pytest

from tnac.instructions import (
    FuncParam,
    Instruction,
    InstructionList,
    Node,
    NodeKind,
    OpCode,
    Operand,
    RegScope,
    VReg,
    opcode_str,
)
from tnac.values import TypeId, Value


@pytest.mark.parametrize(
    "code, text",
    [
        (OpCode.ADD, "add"),
        (OpCode.BNEG, "bitneg"),
        (OpCode.CMP_NOT, "not"),
        (OpCode.SELECT, "sel"),
        (OpCode.JUMP, "jmp"),
        (OpCode.DYN_BIND, "dyn_bind"),
        (OpCode.FRAC, "frac"),
    ],
)
def test_opcode_str(code, text):
    assert opcode_str(code) == text
    assert Instruction(None, code).opcode_str() == text


def test_opcode_none_has_no_name():
    with pytest.raises(ValueError):
        opcode_str(OpCode.NONE)


@pytest.mark.parametrize(
    "code, count",
    [
        (OpCode.ADD, 3),
        (OpCode.CMP_NE, 0),
        (OpCode.LOAD, 2),
        (OpCode.ALLOC, 1),
        (OpCode.SELECT, 4),
        (OpCode.BOOL, 2),
        (OpCode.FRAC, 3),
        (OpCode.CPLX, 3),
    ],
)
def test_estimate_op_count(code, count):
    assert Instruction.estimate_op_count(code) == count


def test_needs_result():
    for code in (OpCode.STORE, OpCode.APPEND, OpCode.JUMP, OpCode.RET):
        assert not Instruction.needs_result(code)
    assert Instruction.needs_result(OpCode.LOAD)
    assert Instruction.needs_result(OpCode.PHI)


def test_node_kind():
    assert Node(NodeKind.BLOCK).kind is NodeKind.BLOCK
    assert VReg("a").kind is NodeKind.REGISTER
    assert Instruction(None, OpCode.ADD).kind is NodeKind.INSTRUCTION


def test_vreg_identity():
    named = VReg("x")
    indexed = VReg(4, RegScope.GLOBAL)
    assert named.is_named and named.name == "x"
    assert not indexed.is_named and indexed.index == 4
    assert indexed.is_global and not named.is_global
    with pytest.raises(TypeError):
        named.index
    with pytest.raises(TypeError):
        indexed.name


def test_result_register_bound_to_instruction():
    reg = VReg("r")
    instr = Instruction(None, OpCode.LOAD).add(reg)
    assert reg.has_src
    assert reg.source is instr


def test_store_does_not_bind_register():
    reg = VReg("r")
    Instruction(None, OpCode.STORE).add(reg)
    assert not reg.has_src
    with pytest.raises(ValueError):
        reg.source


def test_only_first_operand_bound():
    first, second = VReg("a"), VReg("b")
    instr = Instruction(None, OpCode.ADD).add(first).add(second)
    assert first.source is instr
    assert not second.has_src
    assert instr.operand_count() == 2
    assert instr[1].reg is second


def test_make_result_of_twice_raises():
    reg = VReg(0)
    Instruction(None, OpCode.LOAD).add(reg)
    with pytest.raises(ValueError):
        reg.make_result_of(Instruction(None, OpCode.LOAD))


def test_drop_source_if_other_keeps_source():
    reg = VReg(0)
    instr = Instruction(None, OpCode.LOAD).add(reg)
    reg.drop_source_if(Instruction(None, OpCode.LOAD))
    assert reg.source is instr
    instr.release()
    assert not reg.has_src


def test_operand_index_out_of_range():
    instr = Instruction(None, OpCode.RET).add(Value(1))
    assert instr[0].value == Value(1)
    with pytest.raises(IndexError):
        _ = instr[1]


def test_operand_kinds():
    block = Node(NodeKind.BLOCK)
    edge = Node(NodeKind.EDGE)
    assert Operand(Value(1)).is_value()
    assert Operand(VReg("r")).is_register()
    assert Operand(FuncParam(0)).param == FuncParam(0)
    assert Operand(block).block is block
    assert Operand(edge).is_edge()
    assert Operand(3).index == 3
    assert Operand("name").name == "name"
    assert Operand(TypeId.INT).type_id is TypeId.INT
    assert not Operand(TypeId.INT).is_index()


def test_operand_wrong_access_raises():
    with pytest.raises(TypeError):
        Operand(3).value
    with pytest.raises(TypeError):
        Operand(True)


def test_operand_undef():
    assert Operand().is_undef()
    assert Operand(Value()).is_undef()
    assert not Operand(Value(0)).is_undef()
    assert not Operand(VReg("r")).is_undef()


def test_operand_equality():
    reg = VReg("r")
    assert Operand(reg) == Operand(reg)
    assert Operand(reg) != Operand(VReg("r"))
    assert Operand(Value(2)) == Operand(Value(2))


def test_list_insert_order():
    lst = InstructionList()
    a = lst.insert_before(None, Instruction(None, OpCode.ADD))
    c = lst.insert_before(None, Instruction(None, OpCode.SUB))
    b = lst.insert_before(c, Instruction(None, OpCode.MUL))
    front = lst.insert_before(a, Instruction(None, OpCode.DIV))
    assert list(lst) == [front, a, b, c]
    assert lst.first is front and lst.last is c
    assert a.next is b and b.prev is a
    assert len(lst) == 4


def test_list_remove_releases():
    lst = InstructionList()
    reg = VReg("r")
    instr = lst.insert_before(None, Instruction(None, OpCode.LOAD).add(reg))
    other = lst.insert_before(None, Instruction(None, OpCode.RET))
    lst.remove(instr)
    assert list(lst) == [other]
    assert instr.owner_list is None
    assert not reg.has_src


def test_list_remove_foreign_raises():
    with pytest.raises(ValueError):
        InstructionList().remove(Instruction(None, OpCode.ADD))


def test_list_clear():
    lst = InstructionList()
    for _ in range(3):
        lst.insert_before(None, Instruction(None, OpCode.ADD))
    lst.clear()
    assert len(lst) == 0
    assert lst.first is None and lst.last is None