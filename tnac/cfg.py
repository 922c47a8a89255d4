"""The control flow graph built by the compiler."""

from __future__ import annotations

from typing import Any, Hashable

from tnac.blocks import BasicBlock, Edge
from tnac.builder import Builder, Constant
from tnac.function import Function
from tnac.instructions import InstructionList
from tnac.values import ArrayType

_MAX_PARAMS = 0xFFFF


def _conv_param_count(param_count: int) -> int:
    if not 0 <= param_count <= _MAX_PARAMS:
        raise ValueError(f"parameter count out of range: {param_count}")
    return param_count


class Cfg:
    """Modules and functions of a program, created through a builder."""

    def __init__(self, builder: Builder | None = None) -> None:
        self._builder = Builder() if builder is None else builder
        self._modules: list[Function] = []

    @property
    def builder(self) -> Builder:
        return self._builder

    @property
    def modules(self) -> list[Function]:
        return self._modules

    @property
    def instructions(self) -> InstructionList:
        return self._builder.instructions

    @property
    def edges(self) -> list[Edge]:
        return self._builder.edges

    @property
    def interned(self) -> list[Constant]:
        return self._builder.interned

    def declare_module(self, entity_id: Hashable, name: str, param_count: int) -> Function:
        mod = self._builder.make_module(entity_id, name, _conv_param_count(param_count))
        self._modules.append(mod)
        return mod

    def declare_function(
        self, entity_id: Hashable, owner: Function, name: str, param_count: int
    ) -> Function:
        return self._builder.make_function(
            entity_id, owner, name, _conv_param_count(param_count)
        )

    def find_entity(self, entity_id: Hashable) -> Function | None:
        return self._builder.find_function(entity_id)

    def connect(self, source: BasicBlock, target: BasicBlock, val: Any = None) -> Edge:
        return self._builder.make_edge(source, target, val)

    def find_array(self, arr: ArrayType) -> Constant | None:
        return self._builder.find_interned(arr)