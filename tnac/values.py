"""Runtime value types and the tagged value container."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterator, TypeVar

R = TypeVar("R")


class TypeId(enum.IntEnum):
    """Identifiers of every supported value type."""

    INVALID = 0
    BOOL = 1
    INT = 2
    FLOAT = 3
    COMPLEX = 4
    FRACTION = 5
    FUNCTION = 6
    ARRAY = 7


@dataclass(frozen=True)
class InvalidValue:
    """Placeholder for a value that has no supported type."""


INVALID = InvalidValue()


class Ratio:
    """A signed fraction kept in lowest terms.

    Numerator and denominator are stored as magnitudes with a separate sign.
    A zero denominator stands for infinity (or NaN when the numerator is zero).
    """

    __slots__ = ("_num", "_denom", "_sign")

    def __init__(self, num: int = 0, denom: int = 1, sign: int | None = None) -> None:
        num = int(num)
        denom = int(denom)
        negative = (num < 0) != (denom < 0)
        if sign is not None and sign < 0:
            negative = not negative
        num, denom = abs(num), abs(denom)
        divisor = math.gcd(num, denom)
        if divisor > 1:
            num //= divisor
            denom //= divisor
        if num == 0 and denom != 0:
            negative = False
        self._num = num
        self._denom = denom
        self._sign = -1 if negative else 1

    @property
    def num(self) -> int:
        """Signed numerator."""
        return self._sign * self._num

    @property
    def denom(self) -> int:
        return self._denom

    @property
    def sign(self) -> int:
        return self._sign

    def to_float(self) -> float:
        if self._denom == 0:
            return math.nan if self._num == 0 else self._sign * math.inf
        return self._sign * (self._num / self._denom)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ratio):
            return NotImplemented
        return (self._num, self._denom, self._sign) == (other._num, other._denom, other._sign)

    def __hash__(self) -> int:
        return hash((self._num, self._denom, self._sign))

    def __repr__(self) -> str:
        return f"Ratio({self.num}, {self._denom})"


class FunctionType:
    """Function value: a reference to an IR function, compared by identity."""

    __slots__ = ("func",)

    def __init__(self, func: Any) -> None:
        self.func = func

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FunctionType):
            return NotImplemented
        return self.func is other.func

    def __hash__(self) -> int:
        return id(self.func)

    def __repr__(self) -> str:
        return f"FunctionType({self.func!r})"


class ArrayType:
    """Array value: a shared reference to an array wrapper."""

    __slots__ = ("_wrapper",)

    def __init__(self, wrapper: Any) -> None:
        self._wrapper = wrapper

    def wrapper(self) -> Any:
        return self._wrapper

    def __iter__(self) -> Iterator[Any]:
        return iter(self._wrapper)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayType):
            return NotImplemented
        return self._wrapper is other._wrapper

    def __hash__(self) -> int:
        return id(self._wrapper)

    def __repr__(self) -> str:
        return f"ArrayType({self._wrapper!r})"


_TYPE_OF_ID: dict[TypeId, type] = {
    TypeId.INVALID: InvalidValue,
    TypeId.BOOL: bool,
    TypeId.INT: int,
    TypeId.FLOAT: float,
    TypeId.COMPLEX: complex,
    TypeId.FRACTION: Ratio,
    TypeId.FUNCTION: FunctionType,
    TypeId.ARRAY: ArrayType,
}

_ID_OF_TYPE: dict[type, TypeId] = {tp: ti for ti, tp in _TYPE_OF_ID.items()}


def _resolve_kind(kind: TypeId | type) -> TypeId:
    if isinstance(kind, TypeId):
        return kind
    try:
        return _ID_OF_TYPE[kind]
    except (KeyError, TypeError):
        raise TypeError(f"unsupported value type: {kind!r}") from None


class Value:
    """A value of one of the supported types, tagged with its type id."""

    __slots__ = ("_raw", "_id")

    def __init__(self, raw: Any = INVALID) -> None:
        type_id = _ID_OF_TYPE.get(type(raw))
        if type_id is None:
            raise TypeError(f"unsupported value type: {type(raw).__name__}")
        self._raw = raw
        self._id = type_id

    def __bool__(self) -> bool:
        """A value is truthy when it has a valid type."""
        return self._id is not TypeId.INVALID

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._id is other._id and self._raw == other._raw

    def __hash__(self) -> int:
        return hash((self._id, self._raw))

    def __repr__(self) -> str:
        return f"Value({self._raw!r})"

    @property
    def raw(self) -> Any:
        return self._raw

    def id(self) -> TypeId:
        return self._id

    @staticmethod
    def id_name(type_id: TypeId) -> str:
        return type_id.name.lower()

    def get(self, kind: TypeId | type) -> Any:
        """Return the stored value; raises TypeError if it is of another type."""
        wanted = _resolve_kind(kind)
        if wanted is not self._id:
            raise TypeError(f"value holds {self._id.name}, not {wanted.name}")
        return self._raw

    def try_get(self, kind: TypeId | type) -> Any | None:
        """Return the stored value if it has the requested type, otherwise None."""
        if _resolve_kind(kind) is not self._id:
            return None
        return self._raw

    @staticmethod
    def pi() -> Value:
        return Value(math.pi)

    @staticmethod
    def e() -> Value:
        return Value(math.e)

    @staticmethod
    def i() -> Value:
        return Value(complex(0.0, 1.0))

    @staticmethod
    def true_val() -> Value:
        return Value(True)

    @staticmethod
    def false_val() -> Value:
        return Value(False)

    @staticmethod
    def function(func: Any) -> Value:
        return Value(FunctionType(func))

    @staticmethod
    def array(wrapper: Any) -> Value:
        return Value(ArrayType(wrapper))


def get_id(val: Value) -> TypeId:
    return val.id()


def on_value(val: Value, func: Callable[[Any], R]) -> R:
    """Call ``func`` with the raw stored value (an InvalidValue when untyped)."""
    if val.id() is TypeId.INVALID:
        return func(INVALID)
    return func(val.raw)