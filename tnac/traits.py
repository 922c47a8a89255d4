"""Operations, casts and type relations over runtime values."""

from __future__ import annotations

import enum
import math
import sys
from dataclasses import dataclass
from typing import Any, Callable

from tnac.values import (
    INVALID,
    ArrayType,
    FunctionType,
    InvalidValue,
    Ratio,
    TypeId,
    Value,
    on_value,
)

_EPSILON = sys.float_info.epsilon


class ValOps(enum.IntEnum):
    """Operations that values support."""

    INVALID_OP = 0
    ADDITION = 1
    SUBTRACTION = 2
    MULTIPLICATION = 3
    DIVISION = 4
    MODULO = 5
    REL_LESS = 6
    REL_LESS_EQ = 7
    REL_GR = 8
    REL_GR_EQ = 9
    EQUAL = 10
    N_EQUAL = 11
    BITWISE_AND = 12
    BITWISE_XOR = 13
    BITWISE_OR = 14
    BINARY_POW = 15
    BINARY_ROOT = 16
    UNARY_NEGATION = 17
    UNARY_PLUS = 18
    UNARY_BITWISE_NOT = 19
    LOGICAL_NOT = 20
    LOGICAL_IS = 21
    UNARY_HEAD = 22
    POST_TAIL = 23
    ABSOLUTE_VALUE = 24


@dataclass(frozen=True)
class TypeInfo:
    """Constructor signature of a type: parameter types and argument limits."""

    params: tuple[TypeId, ...]
    min_args: int

    @property
    def max_args(self) -> int:
        return len(self.params)


_TYPE_INFOS: dict[TypeId, TypeInfo] = {
    TypeId.BOOL: TypeInfo((TypeId.BOOL,), 0),
    TypeId.INT: TypeInfo((TypeId.INT,), 0),
    TypeId.FLOAT: TypeInfo((TypeId.FLOAT,), 0),
    TypeId.COMPLEX: TypeInfo((TypeId.FLOAT, TypeId.FLOAT), 0),
    TypeId.FRACTION: TypeInfo((TypeId.INT, TypeId.INT), 2),
    TypeId.FUNCTION: TypeInfo((TypeId.FUNCTION,), 1),
}


def type_info(type_id: TypeId) -> TypeInfo:
    """Return the constructor signature of a constructible type."""
    try:
        return _TYPE_INFOS[type_id]
    except KeyError:
        raise ValueError(f"type {TypeId(type_id).name} has no constructor info") from None


# Float helpers

def _feq(lhs: float, rhs: float) -> bool:
    if lhs == rhs:
        return True
    return math.isclose(lhs, rhs, rel_tol=_EPSILON, abs_tol=_EPSILON)


def _round_half_away(val: float) -> float:
    if math.isnan(val) or math.isinf(val):
        return val
    return math.copysign(math.floor(abs(val) + 0.5), val)


def _float_to_int(val: float) -> int | None:
    if math.isnan(val) or math.isinf(val):
        return None
    conv = int(val)
    return conv if _feq(float(conv), val) else None


def _complex_to_int(val: complex) -> int | None:
    if not _feq(val.imag, 0.0):
        return None
    return _float_to_int(val.real)


def _float_to_ratio(val: float) -> Ratio:
    if math.isnan(val) or math.isinf(val):
        return Ratio(1, 0, -1 if val < 0 else 1)
    return Ratio(int(val))


# Casters: each maps a raw value to the target type, or None when impossible

def _to_bool(v: Any) -> bool | None:
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return v != 0
    if isinstance(v, float):
        return not _feq(v, 0.0)
    if isinstance(v, complex):
        return not _feq(v.real, 0.0) or not _feq(v.imag, 0.0)
    if isinstance(v, Ratio):
        return v.num != 0
    if isinstance(v, (FunctionType, ArrayType)):
        return True
    return False


def _to_int(v: Any) -> int | None:
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return _float_to_int(v)
    if isinstance(v, complex):
        return _complex_to_int(v)
    if isinstance(v, Ratio):
        return _float_to_int(v.to_float())
    if isinstance(v, (FunctionType, ArrayType)):
        return None
    return 0


def _to_float(v: Any) -> float | None:
    if isinstance(v, bool):
        return 1.0 if v else 0.0
    if isinstance(v, int):
        return float(v)
    if isinstance(v, float):
        return v
    if isinstance(v, complex):
        return v.real if _feq(v.imag, 0.0) else None
    if isinstance(v, Ratio):
        return v.to_float()
    if isinstance(v, (FunctionType, ArrayType)):
        return None
    return 0.0


def _to_complex(v: Any) -> complex | None:
    if isinstance(v, bool):
        return complex(1.0, 0.0) if v else complex()
    if isinstance(v, int):
        return complex(float(v))
    if isinstance(v, float):
        return complex(v)
    if isinstance(v, complex):
        return v
    if isinstance(v, Ratio):
        return complex(v.to_float())
    if isinstance(v, (FunctionType, ArrayType)):
        return None
    return complex()


def _to_fraction(v: Any) -> Ratio | None:
    if isinstance(v, bool):
        return Ratio(1, 1) if v else Ratio(0, 1)
    if isinstance(v, int):
        return Ratio(v)
    if isinstance(v, float):
        return _float_to_ratio(v)
    if isinstance(v, complex):
        if not _feq(v.imag, 0.0):
            return None
        return _float_to_ratio(v.real)
    if isinstance(v, Ratio):
        return v
    if isinstance(v, (FunctionType, ArrayType)):
        return None
    return Ratio(0)


def _to_function(v: Any) -> FunctionType | None:
    return v if isinstance(v, FunctionType) else None


def _to_array(v: Any) -> ArrayType | None:
    return v if isinstance(v, ArrayType) else None


def _to_invalid(_v: Any) -> InvalidValue:
    return INVALID


_CASTERS: dict[TypeId, Callable[[Any], Any]] = {
    TypeId.BOOL: _to_bool,
    TypeId.INT: _to_int,
    TypeId.FLOAT: _to_float,
    TypeId.COMPLEX: _to_complex,
    TypeId.FRACTION: _to_fraction,
    TypeId.FUNCTION: _to_function,
    TypeId.ARRAY: _to_array,
    TypeId.INVALID: _to_invalid,
}

_IDS_BY_TYPE: dict[type, TypeId] = {
    bool: TypeId.BOOL,
    int: TypeId.INT,
    float: TypeId.FLOAT,
    complex: TypeId.COMPLEX,
    Ratio: TypeId.FRACTION,
    FunctionType: TypeId.FUNCTION,
    ArrayType: TypeId.ARRAY,
    InvalidValue: TypeId.INVALID,
}


def cast_value(val: Value, target: TypeId | type) -> Any | None:
    """Convert a value's payload to the target type; None if not convertible.

    Non-array values are never converted to arrays here.
    """
    if not isinstance(target, TypeId):
        try:
            target = _IDS_BY_TYPE[target]
        except (KeyError, TypeError):
            raise TypeError(f"unsupported target type: {target!r}") from None
    return on_value(val, _CASTERS[target])


def to_bool(val: Value) -> bool:
    result = cast_value(val, TypeId.BOOL)
    assert result is not None
    return result


# Common type

_RANK: dict[TypeId, int] = {
    TypeId.BOOL: 0,
    TypeId.INT: 1,
    TypeId.FRACTION: 2,
    TypeId.FLOAT: 3,
    TypeId.COMPLEX: 4,
    TypeId.FUNCTION: 5,
    TypeId.ARRAY: 6,
}


def common_type_id(left: TypeId, right: TypeId) -> TypeId:
    """The type both operands are promoted to in a binary operation."""
    if left not in _RANK or right not in _RANK:
        return TypeId.INVALID
    if left is TypeId.BOOL and right is TypeId.BOOL:
        return TypeId.INT
    return left if _RANK[left] >= _RANK[right] else right


# Missing operators

def complex_mod(left: complex, right: complex) -> complex:
    """Gaussian-style remainder: subtract the rounded quotient times the divisor."""
    if right == 0:
        return complex(math.nan, math.nan)
    quotient = left / right
    mul = complex(_round_half_away(quotient.real), _round_half_away(quotient.imag))
    return left - mul * right


def fraction_mod(left: Ratio, right: Ratio) -> float:
    try:
        return math.fmod(left.to_float(), right.to_float())
    except ValueError:
        return math.nan


# Utility functions

def abs_of(op: Any) -> Any:
    """Absolute value of a raw payload."""
    if isinstance(op, bool):
        return abs(int(op))
    if isinstance(op, (int, float)):
        return abs(op)
    if isinstance(op, complex):
        return math.sqrt(op.real * op.real + op.imag * op.imag)
    if isinstance(op, Ratio):
        return Ratio(abs(op.num), op.denom)
    if isinstance(op, FunctionType):
        return op
    raise TypeError(f"absolute value is not defined for {type(op).__name__}")


def head(op: Any) -> Any:
    """The real part of a complex number; any other payload is its own head."""
    if isinstance(op, complex):
        return op.real
    return op


def tail(op: Any) -> Any:
    """The imaginary part of a complex number; other payloads have no tail."""
    if isinstance(op, complex):
        return op.imag
    return INVALID


def inv(op: Any) -> Any:
    """Multiplicative inverse."""
    if isinstance(op, bool):
        raise TypeError("inversion is not defined for bool")
    if isinstance(op, int):
        return inv(float(op))
    if isinstance(op, float):
        if op == 0.0:
            return math.copysign(math.inf, op)
        return 1.0 / op
    if isinstance(op, complex):
        if op == 0:
            return complex(math.nan, math.nan)
        return 1.0 / op
    if isinstance(op, Ratio):
        return Ratio(op.denom, abs(op.num), op.sign)
    raise TypeError(f"inversion is not defined for {type(op).__name__}")


def _same_kind(lhs: Any, rhs: Any) -> None:
    if type(lhs) is not type(rhs):
        raise TypeError(
            f"operands must share a type: {type(lhs).__name__} and {type(rhs).__name__}"
        )


def eq(lhs: Any, rhs: Any) -> bool:
    """Equality of two payloads of the same type; infinities and NaNs match."""
    _same_kind(lhs, rhs)
    if isinstance(lhs, float):
        if math.isinf(lhs) and math.isinf(rhs):
            return True
        if math.isnan(lhs) and math.isnan(rhs):
            return True
        return _feq(lhs, rhs)
    if isinstance(lhs, complex):
        return eq(lhs.real, rhs.real) and eq(lhs.imag, rhs.imag)
    if isinstance(lhs, (bool, int, Ratio, FunctionType)):
        return lhs == rhs
    raise TypeError(f"equality is not defined for {type(lhs).__name__}")


def less(lhs: Any, rhs: Any) -> bool:
    """Ordering of two payloads of the same type; complex numbers by magnitude."""
    _same_kind(lhs, rhs)
    if isinstance(lhs, complex):
        return abs_of(lhs) < abs_of(rhs)
    if isinstance(lhs, Ratio):
        return lhs.to_float() < rhs.to_float()
    if isinstance(lhs, (bool, int, float)):
        return lhs < rhs
    raise TypeError(f"ordering is not defined for {type(lhs).__name__}")


_BOOL_SIZE = 1
_WORD_SIZE = 8

_SIZES: dict[TypeId, int] = {
    TypeId.INVALID: 0,
    TypeId.BOOL: _BOOL_SIZE,
    TypeId.INT: _WORD_SIZE,
    TypeId.FLOAT: _WORD_SIZE,
    TypeId.COMPLEX: 2 * _WORD_SIZE,
    TypeId.FRACTION: 2 * _WORD_SIZE + 1,
    TypeId.FUNCTION: _WORD_SIZE,
    TypeId.ARRAY: _WORD_SIZE,
}


def size_of(type_id: TypeId) -> int:
    """Size in bytes of a value of the given type."""
    return _SIZES.get(type_id, 0)