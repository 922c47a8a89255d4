"""IR functions: named owners of basic blocks and nested functions."""

from __future__ import annotations

from typing import Hashable

from tnac.blocks import BasicBlock
from tnac.instructions import Node, NodeKind


class Function(Node):
    """A function or module in the IR, with its blocks and child functions."""

    def __init__(
        self,
        name: str,
        entity_id: Hashable,
        param_count: int,
        owner: Function | None = None,
        blocks: dict[str, BasicBlock] | None = None,
    ) -> None:
        super().__init__(NodeKind.FUNCTION)
        self._name = name
        self._id = entity_id
        self._param_count = param_count
        self._owner = owner
        self._blocks: dict[str, BasicBlock] = {} if blocks is None else blocks
        self._entry: BasicBlock | None = None
        self._children: list[Function] = []
        self._child_names: dict[str, Function] = {}
        self._loose = False
        if owner is not None:
            owner.add_child(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> Hashable:
        return self._id

    @property
    def is_loose(self) -> bool:
        return self._loose

    @property
    def param_count(self) -> int:
        return self._param_count

    @property
    def owner_func(self) -> Function | None:
        return self._owner

    @property
    def children(self) -> list[Function]:
        return self._children

    @property
    def blocks(self) -> dict[str, BasicBlock]:
        return self._blocks

    def entry(self) -> BasicBlock:
        """The first block created in this function."""
        if self._entry is None:
            raise ValueError(f"function '{self._name}' has no entry block")
        return self._entry

    def lookup(self, name: str) -> Function | None:
        return self._child_names.get(name)

    def create_block(self, name: str) -> BasicBlock:
        if name in self._blocks:
            raise ValueError(f"block '{name}' already exists in '{self._name}'")
        block = BasicBlock(name, self)
        self._blocks[name] = block
        if self._entry is None:
            self._entry = block
        return block

    def delete_block_tree(self, root: BasicBlock) -> None:
        """Delete a block and every successor for which it is the last predecessor."""
        root.clear_instructions()
        for out in root.outs:
            target = out.outgoing
            if target.is_last_connection(root):
                self.delete_block_tree(target)
        self._blocks.pop(root.name, None)

    def raw_name(self) -> str:
        """The name without its mangled suffix."""
        return self._name.split(":", 1)[0]

    def add_child(self, child: Function) -> None:
        self._children.append(child)
        self.add_child_name(child)

    def add_child_name(self, child: Function, name: str | None = None) -> None:
        """Make ``child`` reachable by ``name``; the first registration wins."""
        key = child.raw_name() if name is None else name
        self._child_names.setdefault(key, child)

    def make_loose(self) -> None:
        self._loose = True

    def __repr__(self) -> str:
        return f"Function({self._name})"