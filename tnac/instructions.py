"""IR nodes: virtual registers, operands and instructions."""

from __future__ import annotations

import enum
from typing import Any, Iterator

from tnac.traits import type_info
from tnac.values import TypeId, Value


class NodeKind(enum.Enum):
    EDGE = enum.auto()
    BLOCK = enum.auto()
    FUNCTION = enum.auto()
    REGISTER = enum.auto()
    INSTRUCTION = enum.auto()
    CONSTANT = enum.auto()


class Node:
    """Base of every IR node."""

    def __init__(self, kind: NodeKind) -> None:
        self._kind = kind

    @property
    def kind(self) -> NodeKind:
        return self._kind


class OpCode(enum.Enum):
    NONE = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    MOD = enum.auto()
    POW = enum.auto()
    ROOT = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    XOR = enum.auto()
    CMP_E = enum.auto()
    CMP_L = enum.auto()
    CMP_LE = enum.auto()
    CMP_NE = enum.auto()
    CMP_G = enum.auto()
    CMP_GE = enum.auto()
    ABS = enum.auto()
    PLUS = enum.auto()
    HEAD = enum.auto()
    TAIL = enum.auto()
    NEG = enum.auto()
    BNEG = enum.auto()
    CMP_NOT = enum.auto()
    CMP_IS = enum.auto()
    ALLOC = enum.auto()
    ARR = enum.auto()
    STORE = enum.auto()
    LOAD = enum.auto()
    APPEND = enum.auto()
    SELECT = enum.auto()
    CALL = enum.auto()
    JUMP = enum.auto()
    RET = enum.auto()
    PHI = enum.auto()
    DYN_BIND = enum.auto()
    BOOL = enum.auto()
    INT = enum.auto()
    FLOAT = enum.auto()
    FRAC = enum.auto()
    CPLX = enum.auto()
    TEST = enum.auto()


_OPCODE_NAMES: dict[OpCode, str] = {
    OpCode.ADD: "add",
    OpCode.SUB: "sub",
    OpCode.MUL: "mul",
    OpCode.DIV: "div",
    OpCode.MOD: "mod",
    OpCode.POW: "pow",
    OpCode.ROOT: "root",
    OpCode.AND: "and",
    OpCode.OR: "or",
    OpCode.XOR: "xor",
    OpCode.CMP_E: "cmpe",
    OpCode.CMP_L: "cmpl",
    OpCode.CMP_LE: "cmple",
    OpCode.CMP_NE: "cmpne",
    OpCode.CMP_G: "cmpg",
    OpCode.CMP_GE: "cmpge",
    OpCode.ABS: "abs",
    OpCode.PLUS: "plus",
    OpCode.HEAD: "head",
    OpCode.TAIL: "tail",
    OpCode.NEG: "neg",
    OpCode.BNEG: "bitneg",
    OpCode.CMP_NOT: "not",
    OpCode.CMP_IS: "is",
    OpCode.ALLOC: "alloc",
    OpCode.ARR: "arr",
    OpCode.STORE: "store",
    OpCode.LOAD: "load",
    OpCode.APPEND: "append",
    OpCode.SELECT: "sel",
    OpCode.CALL: "call",
    OpCode.JUMP: "jmp",
    OpCode.RET: "ret",
    OpCode.PHI: "phi",
    OpCode.DYN_BIND: "dyn_bind",
    OpCode.BOOL: "bool",
    OpCode.INT: "int",
    OpCode.FLOAT: "float",
    OpCode.FRAC: "frac",
    OpCode.CPLX: "cplx",
    OpCode.TEST: "test",
}


def opcode_str(oc: OpCode) -> str:
    """Textual mnemonic of an opcode."""
    try:
        return _OPCODE_NAMES[oc]
    except KeyError:
        raise ValueError(f"opcode {oc!r} has no mnemonic") from None


def _ctor_ops(type_id: TypeId) -> int:
    return type_info(type_id).max_args + 1


_OP_COUNTS: dict[OpCode, int] = {
    **dict.fromkeys(
        (OpCode.ADD, OpCode.SUB, OpCode.MUL, OpCode.DIV, OpCode.MOD, OpCode.POW,
         OpCode.ROOT, OpCode.AND, OpCode.OR, OpCode.XOR, OpCode.CMP_E, OpCode.CMP_L,
         OpCode.CMP_LE),
        3,
    ),
    **dict.fromkeys(
        (OpCode.ABS, OpCode.PLUS, OpCode.HEAD, OpCode.TAIL, OpCode.NEG, OpCode.BNEG,
         OpCode.CMP_NOT, OpCode.CMP_IS, OpCode.STORE, OpCode.LOAD, OpCode.ARR,
         OpCode.APPEND, OpCode.CALL),
        2,
    ),
    OpCode.ALLOC: 1,
    OpCode.SELECT: 4,
    OpCode.JUMP: 1,
    OpCode.RET: 1,
    OpCode.PHI: 3,
    OpCode.DYN_BIND: 3,
    OpCode.TEST: 3,
    OpCode.BOOL: _ctor_ops(TypeId.BOOL),
    OpCode.INT: _ctor_ops(TypeId.INT),
    OpCode.FLOAT: _ctor_ops(TypeId.FLOAT),
    OpCode.FRAC: _ctor_ops(TypeId.FRACTION),
    OpCode.CPLX: _ctor_ops(TypeId.COMPLEX),
}

_NO_RESULT = frozenset((OpCode.STORE, OpCode.APPEND, OpCode.JUMP, OpCode.RET))


class RegScope(enum.Enum):
    LOCAL = enum.auto()
    GLOBAL = enum.auto()


class VReg(Node):
    """Virtual register identified by a name or an index."""

    def __init__(self, ident: str | int, scope: RegScope = RegScope.LOCAL) -> None:
        super().__init__(NodeKind.REGISTER)
        self._id = ident
        self._scope = scope
        self._source: Instruction | None = None

    @property
    def is_named(self) -> bool:
        return isinstance(self._id, str)

    @property
    def name(self) -> str:
        if not isinstance(self._id, str):
            raise TypeError("register is indexed, not named")
        return self._id

    @property
    def index(self) -> int:
        if isinstance(self._id, str):
            raise TypeError("register is named, not indexed")
        return self._id

    @property
    def is_global(self) -> bool:
        return self._scope is RegScope.GLOBAL

    @property
    def has_src(self) -> bool:
        return self._source is not None

    @property
    def source(self) -> Instruction:
        """The instruction whose result this register holds."""
        if self._source is None:
            raise ValueError("register has no source instruction")
        return self._source

    def make_result_of(self, src: Instruction) -> None:
        if self._source is not None:
            raise ValueError("register already has a source instruction")
        self._source = src

    def drop_source_if(self, instr: Instruction) -> None:
        if self._source is instr:
            self._source = None

    def __repr__(self) -> str:
        sigil = "@" if self.is_global else "%"
        return f"VReg({sigil}{self._id})"


class FuncParam:
    """Reference to a function parameter by position."""

    __slots__ = ("_value",)

    def __init__(self, value: int) -> None:
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FuncParam):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(("param", self._value))

    def __repr__(self) -> str:
        return f"FuncParam({self._value})"


class _OpKind(enum.Enum):
    VALUE = enum.auto()
    REGISTER = enum.auto()
    PARAM = enum.auto()
    BLOCK = enum.auto()
    EDGE = enum.auto()
    INDEX = enum.auto()
    NAME = enum.auto()
    TYPEID = enum.auto()


def _classify(payload: Any) -> _OpKind:
    if isinstance(payload, Value):
        return _OpKind.VALUE
    if isinstance(payload, VReg):
        return _OpKind.REGISTER
    if isinstance(payload, FuncParam):
        return _OpKind.PARAM
    if isinstance(payload, Node):
        if payload.kind is NodeKind.BLOCK:
            return _OpKind.BLOCK
        if payload.kind is NodeKind.EDGE:
            return _OpKind.EDGE
    if isinstance(payload, TypeId):
        return _OpKind.TYPEID
    if isinstance(payload, int) and not isinstance(payload, bool):
        return _OpKind.INDEX
    if isinstance(payload, str):
        return _OpKind.NAME
    raise TypeError(f"unsupported operand: {payload!r}")


class Operand:
    """Instruction operand: a value, register, parameter, block, edge, index, name or type id."""

    __slots__ = ("_payload", "_kind")

    def __init__(self, payload: Any = None) -> None:
        if isinstance(payload, Operand):
            payload = payload._payload
        elif payload is None:
            payload = Value()
        self._kind = _classify(payload)
        self._payload = payload

    def _get(self, kind: _OpKind) -> Any:
        if self._kind is not kind:
            raise TypeError(f"operand holds {self._kind.name.lower()}, not {kind.name.lower()}")
        return self._payload

    def is_undef(self) -> bool:
        return self._kind is _OpKind.VALUE and not self._payload

    def is_value(self) -> bool:
        return self._kind is _OpKind.VALUE

    def is_register(self) -> bool:
        return self._kind is _OpKind.REGISTER

    def is_param(self) -> bool:
        return self._kind is _OpKind.PARAM

    def is_block(self) -> bool:
        return self._kind is _OpKind.BLOCK

    def is_edge(self) -> bool:
        return self._kind is _OpKind.EDGE

    def is_index(self) -> bool:
        return self._kind is _OpKind.INDEX

    def is_name(self) -> bool:
        return self._kind is _OpKind.NAME

    def is_typeid(self) -> bool:
        return self._kind is _OpKind.TYPEID

    @property
    def value(self) -> Value:
        return self._get(_OpKind.VALUE)

    @property
    def reg(self) -> VReg:
        return self._get(_OpKind.REGISTER)

    @property
    def param(self) -> FuncParam:
        return self._get(_OpKind.PARAM)

    @property
    def block(self) -> Any:
        return self._get(_OpKind.BLOCK)

    @property
    def edge(self) -> Any:
        return self._get(_OpKind.EDGE)

    @property
    def index(self) -> int:
        return self._get(_OpKind.INDEX)

    @property
    def name(self) -> str:
        return self._get(_OpKind.NAME)

    @property
    def type_id(self) -> TypeId:
        return self._get(_OpKind.TYPEID)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Operand):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if isinstance(self._payload, Node):
            return self._payload is other._payload
        return self._payload == other._payload

    def __hash__(self) -> int:
        if isinstance(self._payload, Node):
            return hash((self._kind, id(self._payload)))
        return hash((self._kind, self._payload))

    def __repr__(self) -> str:
        return f"Operand({self._payload!r})"


class Instruction(Node):
    """An IR instruction; its first operand is the result register when it has one."""

    def __init__(self, owner: Any, code: OpCode, count: int | None = None) -> None:
        super().__init__(NodeKind.INSTRUCTION)
        self.owner_block = owner
        self._opcode = code
        self._operands: list[Operand] = []
        self._capacity = Instruction.estimate_op_count(code) if count is None else count
        self._list: InstructionList | None = None
        self._prev: Instruction | None = None
        self._next: Instruction | None = None

    @property
    def opcode(self) -> OpCode:
        return self._opcode

    @property
    def capacity(self) -> int:
        """Expected number of operands."""
        return self._capacity

    @property
    def owner_list(self) -> InstructionList | None:
        return self._list

    @property
    def next(self) -> Instruction | None:
        return self._next

    @property
    def prev(self) -> Instruction | None:
        return self._prev

    def add(self, op: Any) -> Instruction:
        """Append an operand; a result register becomes bound to this instruction."""
        operand = Operand(op)
        if (
            Instruction.needs_result(self._opcode)
            and operand.is_register()
            and not self._operands
        ):
            operand.reg.make_result_of(self)
        self._operands.append(operand)
        return self

    def opcode_str(self) -> str:
        return opcode_str(self._opcode)

    def operand_count(self) -> int:
        return len(self._operands)

    def __getitem__(self, idx: int) -> Operand:
        if not 0 <= idx < len(self._operands):
            raise IndexError(f"operand index out of range: {idx}")
        return self._operands[idx]

    def __iter__(self) -> Iterator[Operand]:
        return iter(self._operands)

    @staticmethod
    def estimate_op_count(code: OpCode) -> int:
        """Usual number of operands for an opcode, result included."""
        return _OP_COUNTS.get(code, 0)

    @staticmethod
    def needs_result(code: OpCode) -> bool:
        return code not in _NO_RESULT

    def release(self) -> None:
        """Detach this instruction from the register holding its result."""
        if self._operands and self._operands[0].is_register():
            self._operands[0].reg.drop_source_if(self)

    def __repr__(self) -> str:
        ops = ", ".join(repr(op) for op in self._operands)
        return f"Instruction({self.opcode_str() if self._opcode in _OPCODE_NAMES else 'none'}: {ops})"


class InstructionList:
    """Doubly linked list of instructions; positions are instructions, None is the end."""

    def __init__(self) -> None:
        self._first: Instruction | None = None
        self._last: Instruction | None = None
        self._size = 0

    @property
    def first(self) -> Instruction | None:
        return self._first

    @property
    def last(self) -> Instruction | None:
        return self._last

    def insert_before(self, pos: Instruction | None, instr: Instruction) -> Instruction:
        if instr._list is not None:
            raise ValueError("instruction already belongs to a list")
        if pos is None:
            instr._prev = self._last
            instr._next = None
            if self._last is not None:
                self._last._next = instr
            else:
                self._first = instr
            self._last = instr
        else:
            if pos._list is not self:
                raise ValueError("position does not belong to this list")
            instr._next = pos
            instr._prev = pos._prev
            if pos._prev is not None:
                pos._prev._next = instr
            else:
                self._first = instr
            pos._prev = instr
        instr._list = self
        self._size += 1
        return instr

    def remove(self, instr: Instruction) -> None:
        """Unlink an instruction and release its result register."""
        if instr._list is not self:
            raise ValueError("instruction does not belong to this list")
        if instr._prev is not None:
            instr._prev._next = instr._next
        else:
            self._first = instr._next
        if instr._next is not None:
            instr._next._prev = instr._prev
        else:
            self._last = instr._prev
        instr._prev = instr._next = None
        instr._list = None
        self._size -= 1
        instr.release()

    def clear(self) -> None:
        while self._first is not None:
            self.remove(self._first)

    def __iter__(self) -> Iterator[Instruction]:
        cur = self._first
        while cur is not None:
            nxt = cur._next
            yield cur
            cur = nxt

    def __len__(self) -> int:
        return self._size