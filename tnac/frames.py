"""Evaluation stack frames, the call stack and the entity environment."""

from __future__ import annotations

from typing import Hashable

from tnac.values import Value

_MAX_PARAMS = 0xFFFF


class StackFrame:
    """Execution state of one function call: argument and register memory."""

    def __init__(self, name: str, arg_count: int, jump_back: Hashable) -> None:
        if not 0 <= arg_count <= _MAX_PARAMS:
            raise ValueError(f"argument count out of range: {arg_count}")
        self._mem: list[Value] = []
        self._name = name
        self._arg_count = arg_count
        self._jump_back = jump_back
        self._ret_val: int | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def arg_count(self) -> int:
        return self._arg_count

    @property
    def jump_back(self) -> Hashable:
        """Where execution continues after this frame returns."""
        return self._jump_back

    @property
    def ret_val(self) -> int | None:
        return self._ret_val

    def add_arg(self, arg_val: Value) -> StackFrame:
        """Append a function argument to the frame memory."""
        self._mem.append(arg_val)
        return self

    def store(self, reg_id: int, val: Value) -> StackFrame:
        self._check(reg_id)
        self._mem[reg_id] = val
        return self

    def allocate(self) -> int:
        """Reserve a new undefined slot and return its id."""
        self._mem.append(Value())
        return len(self._mem) - 1

    def value_for(self, reg_id: int) -> Value:
        self._check(reg_id)
        return self._mem[reg_id]

    def attach_ret_val(self, rv: int) -> None:
        self._ret_val = rv

    def _check(self, reg_id: int) -> None:
        if not 0 <= reg_id < len(self._mem):
            raise IndexError(f"no memory allocated for id {reg_id}")


class CallStack:
    """Stack of frames for the functions being executed."""

    def __init__(self) -> None:
        self._frames: list[StackFrame] = []

    def make_frame(self, name: str, arg_count: int, jump_back: Hashable) -> StackFrame:
        frame = StackFrame(name, arg_count, jump_back)
        self._frames.append(frame)
        return frame

    def pop_frame(self) -> StackFrame | None:
        """Drop the newest frame; return the one below it, or None."""
        if self._frames:
            self._frames.pop()
        return self._frames[-1] if self._frames else None

    def __len__(self) -> int:
        return len(self._frames)


class Env:
    """Maps entity ids to runtime memory ids."""

    def __init__(self) -> None:
        self._map: dict[Hashable, int] = {}

    def map(self, ent: Hashable, reg: int) -> None:
        self._map[ent] = reg

    def find_reg(self, ent: Hashable) -> int | None:
        return self._map.get(ent)

    def clear(self) -> None:
        self._map.clear()