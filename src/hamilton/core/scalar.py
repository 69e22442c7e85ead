"""
===============================================================================
HAMILTON - Scalar Capability Contract
===============================================================================

Every quaternion operation is generic over the scalar type of its
components. The algebra only needs a small capability set from that type:

    zero, one           additive / multiplicative identities
    + - * /             binary arithmetic
    unary -             negation
    ==                  equality
    float(x)            conversion to a 64-bit float
    T(f)                construction from a 64-bit float

Anything that needs sqrt, trig or atan2 converts to float64, does the work
in NumPy, and converts the answer back with T(f). That keeps exact types
(int, fractions.Fraction) usable for the purely algebraic subset (add, sub,
Hamilton product, conjugate, dot, cross) while the transcendental
operations are only as precise as the float bridge.

Python's built-in numeric types, fractions.Fraction, decimal.Decimal and
the NumPy scalar types all satisfy the contract as-is.
===============================================================================
"""

from __future__ import annotations

import functools
import operator
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable


@runtime_checkable
class Scalar(Protocol):
    """
    Structural type for quaternion components.

    Equality is not listed because every Python object has ``__eq__``.
    """

    def __add__(self, other: Any) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...

    def __mul__(self, other: Any) -> Any: ...

    def __truediv__(self, other: Any) -> Any: ...

    def __neg__(self) -> Any: ...

    def __float__(self) -> float: ...


T = TypeVar("T", bound=Scalar)
U = TypeVar("U", bound=Scalar)


@dataclass(frozen=True)
class ScalarKind:
    """
    The zero/one/float-bridge half of the contract for one scalar type.

    Parameters
    ----------
    type_ : type
        Concrete scalar type. It must accept ``0``, ``1`` and a ``float``
        in its constructor.

    Examples
    --------
    >>> kind = ScalarKind.of(3)
    >>> kind.zero, kind.one
    (0, 1)
    >>> ScalarKind(float).from_float(0.5)
    0.5
    """

    type_: type

    @classmethod
    def of(cls, value: Any) -> 'ScalarKind':
        """Kind of an existing scalar value."""
        return cls(type(value))

    @classmethod
    def common(cls, *values: Any) -> 'ScalarKind':
        """Kind the given values promote to when added together."""
        return cls.of(functools.reduce(operator.add, values))

    @property
    def zero(self) -> Any:
        return self.type_(0)

    @property
    def one(self) -> Any:
        return self.type_(1)

    def from_float(self, value: float) -> Any:
        """
        Convert a float64 result back into this scalar type.

        For ``int`` this truncates toward zero, which is the documented price
        of running transcendental operations on an exact type.
        """
        return self.type_(value)

    @staticmethod
    def to_float(value: Any) -> float:
        return float(value)
