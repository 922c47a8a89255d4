"""Compilation state: per-function blocks, variables and insertion points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable

from tnac.blocks import BasicBlock
from tnac.function import Function
from tnac.instructions import Instruction, VReg


@dataclass
class _VarData:
    reg: VReg | None = None
    last_read: VReg | None = None
    modified: bool = False


@dataclass
class _FuncData:
    function: Function
    func_scope: Any
    cur_scope: Any
    func_last: Instruction | None = None
    func_first: Instruction | None = None
    cur_block: BasicBlock | None = None
    return_block: BasicBlock | None = None
    ret_val: VReg | None = None
    terminal: BasicBlock | None = None
    reg_idx: int = 0
    last_store: Any = None
    variables: dict[Hashable, _VarData] = field(default_factory=dict)
    var_names: set[str] = field(default_factory=set)


class Context:
    """Tracks what the compiler is working on, one frame per nested function."""

    def __init__(self) -> None:
        self._modules: dict[Hashable, Any] = {}
        self._stack: list[Any] = []
        self._funcs: list[_FuncData] = []

    def _cur(self) -> _FuncData:
        if not self._funcs:
            raise RuntimeError("no function is being compiled")
        return self._funcs[-1]

    def _var(self, sym: Hashable) -> _VarData:
        try:
            return self._cur().variables[sym]
        except KeyError:
            raise KeyError(f"unknown variable: {sym!r}") from None

    # Modules

    def store_module(self, sym: Hashable, definition: Any) -> None:
        existing = self._modules.setdefault(sym, definition)
        if existing is not definition:
            raise ValueError(f"module {sym!r} already has a different definition")

    def locate_module(self, sym: Hashable) -> Any | None:
        return self._modules.get(sym)

    def push(self, sym: Any) -> None:
        self._stack.append(sym)

    def pop(self) -> Any | None:
        """Take the most recently pushed module symbol, or None."""
        return self._stack.pop() if self._stack else None

    def wipe(self) -> None:
        self._funcs.clear()
        self._modules.clear()

    # Variables

    def store(self, sym: Hashable, reg: VReg) -> None:
        self._cur().variables.setdefault(sym, _VarData()).reg = reg

    def locate(self, sym: Hashable) -> VReg | None:
        data = self._cur().variables.get(sym)
        return data.reg if data is not None else None

    def read_into(self, var: Hashable, reg: VReg) -> None:
        data = self._var(var)
        data.last_read = reg
        data.modified = False

    def modify(self, var: Hashable) -> None:
        data = self._var(var)
        data.last_read = None
        data.modified = True

    def last_read(self, var: Hashable) -> VReg | None:
        return self._var(var).last_read

    def save_store(self, var: Any) -> None:
        self._cur().last_store = var

    def clear_store(self) -> None:
        self._cur().last_store = None

    def last_store(self) -> Any | None:
        return self._cur().last_store

    def new_var_name(self, name: str) -> bool:
        """Record a variable name; False if it was already used in this function."""
        names = self._cur().var_names
        if name in names:
            return False
        names.add(name)
        return True

    # Functions

    def enter_function(self, fn: Function, scope: Any) -> None:
        last: Instruction | None = None
        owner = fn.owner_func
        if owner is not None:
            last = owner.entry().first
        if last is None and self._funcs:
            last = self._cur().func_last
        self._funcs.append(
            _FuncData(function=fn, func_scope=scope, cur_scope=scope, func_last=last)
        )

    def exit_function(self) -> None:
        self._cur()
        self._funcs.pop()

    def current_function(self) -> Function:
        return self._cur().function

    def set_return(self, block: BasicBlock, ret_val: VReg) -> None:
        data = self._cur()
        data.return_block = block
        data.ret_val = ret_val

    def return_block(self) -> BasicBlock | None:
        return self._cur().return_block

    def ret_val(self) -> VReg | None:
        return self._cur().ret_val

    def register_index(self) -> int:
        """Next free register index in the current function."""
        data = self._cur()
        idx = data.reg_idx
        data.reg_idx += 1
        return idx

    # Blocks

    def create_block(self, name: str) -> BasicBlock:
        return self.current_function().create_block(name)

    def enter_block(self, block: BasicBlock) -> None:
        """Make ``block`` current; earlier reads are no longer usable in it."""
        data = self._cur()
        data.cur_block = block
        for var in data.variables.values():
            var.modified = True
            var.last_read = None

    def current_block(self) -> BasicBlock:
        block = self._cur().cur_block
        if block is None:
            raise RuntimeError("no block is being compiled")
        return block

    def exit_block(self) -> None:
        self._cur().cur_block = None

    def terminal_block(self) -> BasicBlock | None:
        return self._cur().terminal

    def terminate_at(self, block: BasicBlock) -> None:
        self._cur().terminal = block

    def terminal_or_entry(self) -> BasicBlock:
        data = self._cur()
        return data.terminal if data.terminal is not None else data.function.entry()

    # Insertion points

    def func_start_at(self, instr: Instruction) -> None:
        """Record the first instruction of the function; later calls are ignored."""
        data = self._cur()
        if data.func_first is None:
            data.func_first = instr

    def func_start(self) -> Instruction | None:
        data = self._cur()
        return data.func_first if data.func_first is not None else data.func_last

    def func_end(self) -> Instruction | None:
        """Position new instructions are inserted before; None is the list end."""
        return self._cur().func_last

    def override_last(self, pos: Instruction | None) -> Instruction | None:
        """Set the insertion point and return the previous one."""
        data = self._cur()
        prev = data.func_last
        data.func_last = pos
        return prev

    # Scopes

    def enter_scope(self, scope: Any) -> Any:
        """Make ``scope`` current and return the previous one."""
        data = self._cur()
        prev = data.cur_scope
        data.cur_scope = scope
        return prev

    def is_in_func_scope(self) -> bool:
        data = self._cur()
        return data.func_scope is data.cur_scope