"""Generation of unique names for blocks, registers and functions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Hashable, Iterator

from tnac.function import Function
from tnac.instructions import OpCode, opcode_str


def _entity_number(entity_id: Hashable) -> int:
    if isinstance(entity_id, int) and not isinstance(entity_id, bool):
        return entity_id
    return id(entity_id)


class NameRepo:
    """Hands out names, numbering repeated prefixes."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    def _next_indexed(self, prefix: str) -> str:
        idx = self._counters.get(prefix, 0)
        self._counters[prefix] = idx + 1
        return f"{prefix}{idx}"

    @contextmanager
    def init_indices(self) -> Iterator[None]:
        """Start numbering afresh; the previous numbering is restored on exit."""
        saved = self._counters
        self._counters = {}
        try:
            yield
        finally:
            self._counters = saved

    def entry_block_name(self) -> str:
        return "entry"

    def ret_block_name(self) -> str:
        return "return"

    def ret_var_name(self) -> str:
        return ".rv"

    def array_name(self) -> str:
        return self.var_name(".array")

    def make_block_name(self, prefix: str, postfix: str) -> str:
        return self._next_indexed(f"{prefix}.{postfix}.")

    def mangle_func_name(self, original: str, owner: Function, param_count: int) -> str:
        return f"{original}:{param_count}@{_entity_number(owner.id):X}"

    def op_name(self, oc: OpCode) -> str:
        return self._next_indexed(f".{opcode_str(oc)}")

    def var_name(self, base: str) -> str:
        return self._next_indexed(f"{base}.")