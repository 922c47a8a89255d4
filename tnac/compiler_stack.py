"""Operand stack used while compiling expressions."""

from __future__ import annotations

from typing import Any, Callable, Iterator

from tnac.arrays import ArrayData
from tnac.instructions import Instruction, Operand
from tnac.traits import cast_value, type_info
from tnac.values import Ratio, TypeId, Value

_CONSTRUCTORS: dict[TypeId, Callable[..., Any]] = {
    TypeId.BOOL: bool,
    TypeId.INT: int,
    TypeId.FLOAT: float,
    TypeId.COMPLEX: complex,
    TypeId.FRACTION: Ratio,
}


class CompilerStack:
    """Stack of operands produced by already compiled sub-expressions."""

    def __init__(self) -> None:
        self._data: list[Operand] = []

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Operand]:
        return iter(self._data)

    def push(self, op: Any) -> None:
        self._data.append(Operand(op))

    def push_undef(self) -> None:
        self.push(Value())

    def top(self) -> Operand:
        if not self._data:
            raise IndexError("compiler stack is empty")
        return self._data[-1]

    def pop(self) -> None:
        """Drop the top operand; does nothing on an empty stack."""
        if self._data:
            self._data.pop()

    def drop(self, count: int) -> None:
        """Drop ``count`` operands, or everything if there are fewer."""
        if len(self._data) < count:
            self._data.clear()
            return
        for _ in range(count):
            self.pop()

    def extract(self) -> Operand:
        """Remove and return the top operand."""
        result = self.top()
        self._data.pop()
        return result

    def try_extract(self) -> Operand:
        """Like ``extract``, but an empty stack yields an undefined value."""
        if not self._data:
            return Operand(Value())
        return self.extract()

    def empty(self) -> bool:
        return not self._data

    def has_values(self, count: int) -> bool:
        """Whether the top ``count`` operands are all known values."""
        if len(self._data) < count:
            return False
        if count == 0:
            return True
        return all(op.is_value() for op in self._data[-count:])

    def has_at_least(self, count: int) -> bool:
        return len(self._data) >= count

    def _take(self, count: int) -> list[Operand]:
        """Remove the top ``count`` operands, returned oldest first."""
        if not count:
            return []
        if len(self._data) < count:
            raise IndexError(f"compiler stack holds fewer than {count} operands")
        taken = self._data[-count:]
        del self._data[-count:]
        return taken

    def fill(self, target: Any, count: int) -> None:
        """Move the top ``count`` operands, oldest first, into an instruction,
        a list of operands or array data."""
        if isinstance(target, ArrayData):
            for op in self._take(count):
                target.add(op.value)
        elif isinstance(target, Instruction):
            for op in self._take(count):
                target.add(op)
        elif isinstance(target, list):
            target.extend(self._take(count))
        else:
            raise TypeError(f"cannot fill {type(target).__name__}")

    def instantiate(self, type_id: TypeId, arg_count: int) -> None:
        """Replace the top ``arg_count`` values with an instance of the given type.

        Missing arguments are undefined; if an argument cannot be converted to
        its parameter type the result is undefined. Non-constructible types are ignored.
        """
        ctor = _CONSTRUCTORS.get(type_id)
        if ctor is None:
            return
        params = type_info(type_id).params
        args = [op.value for op in self._take(arg_count)]
        args.extend(Value() for _ in range(len(params) - len(args)))
        converted = [cast_value(arg, param) for arg, param in zip(args, params)]
        if any(item is None for item in converted):
            self.push(Value())
            return
        self.push(Value(ctor(*converted)))