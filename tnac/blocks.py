"""Basic blocks of the control flow graph and the edges between them."""

from __future__ import annotations

from typing import Any, Iterator

from tnac.instructions import Instruction, Node, NodeKind, Operand


class Edge(Node):
    """A directed connection between two blocks carrying a value along it."""

    def __init__(
        self,
        source: BasicBlock,
        target: BasicBlock,
        val: Any = None,
        loose: bool = False,
    ) -> None:
        super().__init__(NodeKind.EDGE)
        self._in = source
        self._out = target
        self._value = Operand(val)
        if not loose:
            source.add_out(self)
            target.add_pred(self)

    @property
    def incoming(self) -> BasicBlock:
        """The block the edge leaves."""
        return self._in

    @property
    def outgoing(self) -> BasicBlock:
        """The block the edge enters."""
        return self._out

    @property
    def value(self) -> Operand:
        return self._value

    def __repr__(self) -> str:
        return f"Edge({self._in.name} -> {self._out.name})"


class BasicBlock(Node):
    """A named run of consecutive instructions inside a function."""

    def __init__(self, name: str, owner: Any) -> None:
        super().__init__(NodeKind.BLOCK)
        self._name = name
        self._owner = owner
        self._first: Instruction | None = None
        self._last: Instruction | None = None
        self._in: list[Edge] = []
        self._out: list[Edge] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def func(self) -> Any:
        return self._owner

    @property
    def first(self) -> Instruction | None:
        return self._first

    @property
    def last(self) -> Instruction | None:
        return self._last

    @property
    def end(self) -> Instruction | None:
        """The instruction following this block's last one; None for the list end."""
        return self._last.next if self._last is not None else None

    @property
    def preds(self) -> tuple[Edge, ...]:
        return tuple(self._in)

    @property
    def outs(self) -> tuple[Edge, ...]:
        return tuple(self._out)

    def __iter__(self) -> Iterator[Instruction]:
        cur = self._first
        while cur is not None:
            yield cur
            if cur is self._last:
                break
            cur = cur.next

    def add_instruction(self, instr: Instruction) -> BasicBlock:
        self._last = instr
        if self._first is None:
            self._first = instr
        return self

    def add_instruction_front(self, instr: Instruction) -> BasicBlock:
        self._first = instr
        if self._last is None:
            self._last = instr
        return self

    def clear_instructions(self) -> None:
        """Remove every instruction of this block from its instruction list."""
        for instr in list(self):
            owner_list = instr.owner_list
            if owner_list is not None:
                owner_list.remove(instr)
        self._first = None
        self._last = None

    def is_last_pred(self, edge: Edge) -> bool:
        return bool(self._in) and self._in[-1] is edge

    def is_last_connection(self, block: BasicBlock) -> bool:
        return bool(self._in) and self._in[-1].incoming is block

    def is_connected_to(self, other: BasicBlock) -> bool:
        """Whether ``other`` is reachable from this block through outgoing edges."""
        seen: set[int] = set()
        pending = [e.outgoing for e in self._out]
        while pending:
            block = pending.pop()
            if block is other:
                return True
            if id(block) in seen:
                continue
            seen.add(id(block))
            pending.extend(e.outgoing for e in block._out)
        return False

    def add_pred(self, edge: Edge) -> None:
        self._in.append(edge)

    def add_out(self, edge: Edge) -> None:
        self._out.append(edge)

    def __repr__(self) -> str:
        return f"BasicBlock({self._name})"