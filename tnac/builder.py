"""Factory and owner of every IR entity."""

from __future__ import annotations

from typing import Any, Hashable

from tnac.blocks import BasicBlock, Edge
from tnac.function import Function
from tnac.instructions import (
    Instruction,
    InstructionList,
    Node,
    NodeKind,
    OpCode,
    RegScope,
    VReg,
)
from tnac.values import ArrayType


class Constant(Node):
    """An interned value bound to a global register."""

    def __init__(self, reg: VReg, value: Any) -> None:
        super().__init__(NodeKind.CONSTANT)
        self._reg = reg
        self._value = value

    @property
    def target_reg(self) -> VReg:
        return self._reg

    @property
    def value(self) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"Constant({self._reg!r}, {self._value!r})"


class Builder:
    """Creates and keeps functions, instructions, registers, edges and constants."""

    def __init__(self) -> None:
        self._functions: dict[Hashable, Function] = {}
        self._loose_modules: list[Function] = []
        self._instructions = InstructionList()
        self._regs: list[VReg] = []
        self._edges: list[Edge] = []
        self._loose_edges: list[Edge] = []
        self._synth_phi: list[Instruction] = []
        self._consts: list[Constant] = []
        self._arrays: dict[int, Constant] = {}

    @property
    def instructions(self) -> InstructionList:
        return self._instructions

    @property
    def edges(self) -> list[Edge]:
        return self._edges

    @property
    def interned(self) -> list[Constant]:
        return self._consts

    # Functions

    def make_module(self, entity_id: Hashable, name: str, param_count: int) -> Function:
        return self._make_function(entity_id, None, name, param_count)

    def make_function(
        self, entity_id: Hashable, owner: Function, name: str, param_count: int
    ) -> Function:
        return self._make_function(entity_id, owner, name, param_count)

    def find_function(self, entity_id: Hashable) -> Function | None:
        return self._functions.get(entity_id)

    def make_loose(self, entity_id: Hashable, name: str) -> Function:
        """Create a function that only serves as a named scope."""
        func = Function(name, entity_id, 0)
        func.make_loose()
        self._loose_modules.append(func)
        return func

    def _make_function(
        self, entity_id: Hashable, owner: Function | None, name: str, param_count: int
    ) -> Function:
        if entity_id in self._functions:
            raise ValueError(f"entity {entity_id!r} already has a function")
        func = Function(name, entity_id, param_count, owner)
        self._functions[entity_id] = func
        return func

    # Instructions

    def add_instruction(
        self,
        owner: BasicBlock,
        op: OpCode,
        pos: Instruction | None = None,
        count: int | None = None,
    ) -> Instruction:
        """Insert a new instruction before ``pos`` (None appends) and add it to ``owner``."""
        instr = Instruction(owner, op, count)
        self._instructions.insert_before(pos, instr)
        owner.add_instruction(instr)
        return instr

    def add_var(self, owner: BasicBlock, pos: Instruction | None = None) -> Instruction:
        return self._add_alloc(owner, OpCode.ALLOC, pos)

    def add_array(self, owner: BasicBlock, pos: Instruction | None = None) -> Instruction:
        return self._add_alloc(owner, OpCode.ARR, pos)

    def _add_alloc(
        self, owner: BasicBlock, oc: OpCode, pos: Instruction | None
    ) -> Instruction:
        alloc = Instruction(owner, oc)
        self._instructions.insert_before(pos, alloc)
        owner_first = owner.first
        if pos is owner_first or owner_first is None:
            owner.add_instruction_front(alloc)
        return alloc

    def synth_phi(self, owner: BasicBlock) -> Instruction:
        """Create a phi node kept outside the instruction list."""
        instr = Instruction(owner, OpCode.PHI)
        self._synth_phi.append(instr)
        return instr

    # Registers

    def make_register(self, ident: str | int) -> VReg:
        reg = VReg(ident, RegScope.LOCAL)
        self._regs.append(reg)
        return reg

    def make_global_register(self, ident: str | int) -> VReg:
        reg = VReg(ident, RegScope.GLOBAL)
        self._regs.append(reg)
        return reg

    # Edges

    def make_edge(self, source: BasicBlock, target: BasicBlock, val: Any = None) -> Edge:
        edge = Edge(source, target, val)
        self._edges.append(edge)
        return edge

    def make_loose_edge(
        self, source: BasicBlock, target: BasicBlock, val: Any = None
    ) -> Edge:
        """Create an edge that the blocks it joins do not know about."""
        edge = Edge(source, target, val, loose=True)
        self._loose_edges.append(edge)
        return edge

    # Constants

    def intern(self, reg: VReg, val: ArrayType) -> Constant:
        key = val.wrapper().id()
        if key in self._arrays:
            raise ValueError("array is already interned")
        const = Constant(reg, val)
        self._consts.append(const)
        self._arrays[key] = const
        return const

    def find_interned(self, val: ArrayType) -> Constant | None:
        return self._arrays.get(val.wrapper().id())