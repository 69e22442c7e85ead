"""
===============================================================================
HAMILTON - Quaternion Value Type and Algebra
===============================================================================

Generic quaternion implementation for 3D rotation math. A quaternion is an
immutable value with one scalar part and a three-component vector part:

    q = r + x*i + y*j + z*k,    i^2 = j^2 = k^2 = ijk = -1

The class is generic over the scalar type of its components (see
:mod:`hamilton.core.scalar`). The purely algebraic operations (add,
subtract, Hamilton product, conjugate, dot, scale) stay exact for integer or
rational components; operations needing sqrt or trig run through the
float64 bridge and convert back to the component type.

Convention
----------
Scalar-first storage, with the vector part kept as a tuple:

    Quaternion(r, (x, y, z))          or  Quaternion.from_vec((w, x, y, z))

Every operation returns a new value; nothing mutates an operand.

A unit quaternion represents a rotation by angle theta about unit axis n:

    q = [cos(theta/2), sin(theta/2) * n]

and rotates a vector v as v' = q * v * q^{-1}.

References
----------
    [1] Kuipers, "Quaternions and Rotation Sequences", Princeton, 1999.
    [2] Shoemake, "Animating Rotation with Quaternion Curves", SIGGRAPH, 1985.
    [3] Dam, Koch & Lillholm, "Quaternions, Interpolation and Animation",
        DIKU-TR-98/5, 1998.

===============================================================================
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, Tuple

import numpy as np

from hamilton.core import vector as v3
from hamilton.core.constants import (
    DEFAULT_CONSTRUCTION_ORDER,
    DEFAULT_EXTERNAL,
    DEFAULT_EXTRACTION_ORDER,
    SLERP_DOT_THRESHOLD,
    UNIT_TOLERANCE,
)
from hamilton.core.scalar import Scalar, ScalarKind, T, U


@dataclass(frozen=True)
class Quaternion(Generic[T]):
    """
    Immutable quaternion ``r + vec[0]*i + vec[1]*j + vec[2]*k``.

    Equality and hashing are structural (component-wise), so quaternions
    can be used as dict keys and compared exactly. The default value
    ``Quaternion()`` is the zero quaternion.

    Attributes
    ----------
    r : T
        Scalar (real) part.
    vec : tuple of T
        Vector part ``(x, y, z)``, i.e. the i, j and k components.

    Examples
    --------
    >>> q1 = Quaternion.from_vec((1, 2, 3, 4))
    >>> q2 = Quaternion.from_vec((5, 6, 7, 8))
    >>> str(q1 * q2)
    '-60 + 12i + 30j + 24k'
    >>> str(q2 * q1)
    '-60 + 20i + 14j + 32k'
    """

    r: T = 0
    vec: Tuple[T, T, T] = (0, 0, 0)

    def __post_init__(self) -> None:
        vec = tuple(self.vec)
        if len(vec) != 3:
            raise ValueError(
                f"Quaternion vector part needs exactly 3 components, got {len(vec)}"
            )
        # Lists and arrays are accepted on input but stored as a tuple so the
        # value stays hashable.
        object.__setattr__(self, "vec", vec)

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def from_vec(cls, values: Sequence[T]) -> 'Quaternion[T]':
        """
        Build a quaternion from a 4-sequence ``(w, x, y, z)``.

        Parameters
        ----------
        values : sequence of T
            Components in scalar-first order.

        Returns
        -------
        Quaternion
            ``w + x*i + y*j + z*k``.
        """
        w, x, y, z = values
        return cls(w, (x, y, z))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Quaternion[float]':
        """Build a float quaternion from a NumPy array ``[w, x, y, z]``."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (4,):
            raise ValueError(f"Quaternion array must have shape (4,), got {arr.shape}")
        return cls.from_vec([float(c) for c in arr])

    @classmethod
    def identity(cls, kind: Optional[ScalarKind] = None) -> 'Quaternion':
        """
        The multiplicative identity ``1 + 0i + 0j + 0k``.

        Parameters
        ----------
        kind : ScalarKind, optional
            Scalar type of the components. Defaults to ``int``, which compares
            equal to the float identity.
        """
        if kind is None:
            kind = ScalarKind(int)
        zero = kind.zero
        return cls(kind.one, (zero, zero, zero))

    @classmethod
    def from_axis_angle(cls, axis: Sequence[T], angle: T) -> 'Quaternion[T]':
        """
        Create a quaternion from an axis-angle representation.

            q = [cos(angle/2), sin(angle/2) * axis/|axis|]

        Parameters
        ----------
        axis : sequence of T
            3-element rotation axis. Normalized internally.
        angle : T
            Rotation angle in radians.

        Returns
        -------
        Quaternion
            Unit quaternion for the rotation, in the scalar type the inputs
            promote to.

        Notes
        -----
        A zero-length axis is not rejected: the division by its length
        produces NaN components instead of an exception.
        """
        kind = ScalarKind.common(angle, *axis)

        axis_f = np.array([kind.to_float(c) for c in axis], dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore"):
            n = axis_f / np.sqrt(np.dot(axis_f, axis_f))

        half_angle = kind.to_float(angle) / 2.0
        sin_half = np.sin(half_angle)

        return cls(
            kind.from_float(float(np.cos(half_angle))),
            tuple(kind.from_float(float(c * sin_half)) for c in n),
        )

    @classmethod
    def from_euler(cls, roll: T, pitch: T, yaw: T,
                   order=DEFAULT_CONSTRUCTION_ORDER) -> 'Quaternion[T]':
        """
        Create a quaternion from Euler angles.

        See :func:`hamilton.core.euler.from_euler` for the order codes and
        the angle convention.
        """
        from hamilton.core import euler
        return euler.from_euler(roll, pitch, yaw, order)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def w(self) -> T:
        """Scalar part (alias for ``r``)."""
        return self.r

    @property
    def x(self) -> T:
        return self.vec[0]

    @property
    def y(self) -> T:
        return self.vec[1]

    @property
    def z(self) -> T:
        return self.vec[2]

    @property
    def kind(self) -> ScalarKind:
        """Scalar kind of the components, taken from the scalar part."""
        return ScalarKind.of(self.r)

    @property
    def components(self) -> np.ndarray:
        """
        Quaternion as a float64 NumPy array ``[w, x, y, z]``.

        Returns
        -------
        np.ndarray
            New 4-element array; modifying it does not affect the quaternion.
        """
        return np.array([float(self.r)] + [float(c) for c in self.vec],
                        dtype=np.float64)

    def as_array(self) -> np.ndarray:
        return self.components

    # =========================================================================
    # CORE ALGEBRA
    # =========================================================================

    def __neg__(self) -> 'Quaternion[T]':
        return Quaternion(-self.r, (-self.vec[0], -self.vec[1], -self.vec[2]))

    def __add__(self, other: 'Quaternion[T]') -> 'Quaternion[T]':
        """Component-wise sum."""
        if isinstance(other, Quaternion):
            return Quaternion(self.r + other.r, v3.add(self.vec, other.vec))
        return NotImplemented

    def __sub__(self, other: 'Quaternion[T]') -> 'Quaternion[T]':
        """Difference, defined as ``self + (-other)``."""
        if isinstance(other, Quaternion):
            return self + (-other)
        return NotImplemented

    def multiply(self, other: 'Quaternion[T]') -> 'Quaternion[T]':
        """
        Hamilton product ``self * other``.

        In scalar/vector form, with q1 = (r1, v1) and q2 = (r2, v2):

            q1 * q2 = ( r1*r2 - v1 . v2,
                        v1 x v2 + r1*v2 + r2*v1 )

        The cross product makes the product non-commutative: q1 * q2 and
        q2 * q1 differ by the sign of the ``v1 x v2`` term. For rotations,
        ``q1 * q2`` applies ``q2`` first and then ``q1``.

        Parameters
        ----------
        other : Quaternion
            Right-hand operand.

        Returns
        -------
        Quaternion
            The product.
        """
        r1, v1 = self.r, self.vec
        r2, v2 = other.r, other.vec

        r = r1 * r2 - v3.dot(v1, v2)
        vec = v3.add(v3.add(v3.cross(v1, v2), v3.scale(v2, r1)), v3.scale(v1, r2))

        return Quaternion(r, vec)

    def divide(self, other: 'Quaternion[T]') -> 'Quaternion[T]':
        """
        Quaternion division ``self / other``.

        Expanded over ``d = other.square_len()``, with q = self and p = other:

            t_r = ( p_r*q_r + p_v . q_v ) / d
            t_v = ( p_r*q_v - q_r*p_v + q_v x p_v ) / d

        which is ``conj(p) * q / |p|^2``. Every component is divided by ``d``.

        Parameters
        ----------
        other : Quaternion
            Divisor.

        Returns
        -------
        Quaternion
            The quotient.

        Notes
        -----
        A zero divisor is not guarded: the scalar type's own division by
        zero surfaces (``ZeroDivisionError`` for Python numbers, inf/NaN for
        NumPy floats).
        """
        q_r, q_v = self.r, self.vec
        p_r, p_v = other.r, other.vec
        d = other.square_len()

        r = p_r * q_r + v3.dot(p_v, q_v)
        vec = v3.add(
            v3.add(v3.scale(q_v, p_r), v3.scale(p_v, -q_r)),
            v3.cross(q_v, p_v),
        )

        return Quaternion(r / d, (vec[0] / d, vec[1] / d, vec[2] / d))

    def __mul__(self, other):
        """
        Multiplication operator.

        - Quaternion * Quaternion -> Hamilton product
        - Quaternion * scalar     -> component-wise scaling
        """
        if isinstance(other, Quaternion):
            return self.multiply(other)
        if isinstance(other, Scalar):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        """Right-multiplication by a scalar: scalar * Quaternion."""
        if isinstance(other, Scalar):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Quaternion):
            return self.divide(other)
        return NotImplemented

    def __pow__(self, exponent):
        """``q ** n`` for integral n, otherwise the real-exponent power."""
        if isinstance(exponent, numbers.Integral) and not isinstance(exponent, bool):
            return self.pow_by_int(int(exponent))
        return self.pow_by_scalar(exponent)

    def __abs__(self) -> T:
        return self.magnitude()

    def conjugate(self) -> 'Quaternion[T]':
        """
        Return the quaternion conjugate ``[r, -x, -y, -z]``.

        For unit quaternions this is the inverse, i.e. the reverse rotation.
        """
        return Quaternion(self.r, (-self.vec[0], -self.vec[1], -self.vec[2]))

    def square_len(self) -> T:
        """Squared norm ``r^2 + x^2 + y^2 + z^2`` (exact for exact scalars)."""
        return self.r * self.r + v3.dot(self.vec, self.vec)

    def magnitude(self) -> T:
        """
        Euclidean norm ``sqrt(square_len())``.

        The square root is taken on the float bridge and converted back to
        the scalar type of ``square_len()``.
        """
        sq = self.square_len()
        kind = ScalarKind.of(sq)
        return kind.from_float(float(np.sqrt(kind.to_float(sq))))

    def normalize(self) -> 'Quaternion[T]':
        """
        Return the quaternion scaled to unit magnitude.

        Only an exactly-zero magnitude is special-cased: the zero quaternion
        is returned unchanged. Tiny but non-zero magnitudes are scaled like
        any other.
        """
        m = self.magnitude()
        kind = ScalarKind.of(m)
        if m == kind.zero:
            return self
        return self.scale(kind.one / m)

    def dot(self, other: 'Quaternion[T]') -> T:
        """4D inner product ``r1*r2 + v1 . v2``."""
        return self.r * other.r + v3.dot(self.vec, other.vec)

    def inverse(self) -> 'Quaternion[T]':
        """
        Multiplicative inverse ``conj(q) * (1 / square_len(q))``.

        ``q * q.inverse()`` is the identity for any non-zero q. A zero
        quaternion is not guarded against; see :meth:`divide`.
        """
        sq = self.square_len()
        return self.conjugate().scale(ScalarKind.of(sq).one / sq)

    def scale(self, s: T) -> 'Quaternion[T]':
        """Multiply all four components by the scalar ``s``."""
        return Quaternion(self.r * s, v3.scale(self.vec, s))

    def map(self, f: Callable[[T], U]) -> 'Quaternion[U]':
        """
        Apply ``f`` to all four components.

        The scalar type changes if ``f`` changes it, e.g. ``q.map(float)``
        turns an integer quaternion into a float one.
        """
        return Quaternion(f(self.r), v3.map_vec(self.vec, f))

    # =========================================================================
    # ROTATION OPERATIONS
    # =========================================================================

    def rotate(self, v: Sequence[T]) -> Tuple[T, T, T]:
        """
        Rotate a 3-vector by this quaternion.

        Uses the two-cross-product form of the sandwich product
        ``q * [0, v] * q^{-1}``:

            t  = 2 * (u x v)
            v' = v + r*t + u x t

        where ``u`` is the vector part. The quaternion must be unit length;
        it is not normalized or checked here.

        Parameters
        ----------
        v : sequence of T
            Vector to rotate.

        Returns
        -------
        tuple of T
            The rotated vector.
        """
        v = tuple(v)
        u = self.vec
        two = self.kind.one + self.kind.one

        t = v3.scale(v3.cross(u, v), two)
        return v3.add(v3.add(v, v3.scale(t, self.r)), v3.cross(u, t))

    def to_axis_angle(self) -> Tuple[Tuple[T, T, T], T]:
        """
        Convert a unit quaternion to ``(axis, angle)``.

            angle = 2 * arccos(r)
            axis  = vec / |vec|

        Returns
        -------
        tuple
            ``(axis, angle)`` with ``angle`` in [0, 2*pi]. For a rotation
            with no vector part the axis is undefined and ``(0, 0, 1)`` is
            returned by convention.
        """
        kind = self.kind
        vec = np.array([kind.to_float(c) for c in self.vec], dtype=np.float64)
        vec_norm = np.sqrt(np.dot(vec, vec))

        # Clamp to [-1, 1] to protect against floating-point overshoot in arccos
        angle = 2.0 * np.arccos(np.clip(kind.to_float(self.r), -1.0, 1.0))

        if vec_norm == 0.0:
            axis = (kind.zero, kind.zero, kind.one)
        else:
            axis = tuple(kind.from_float(float(c)) for c in vec / vec_norm)
        return axis, kind.from_float(float(angle))

    def angle_to(self, other: 'Quaternion') -> float:
        """
        Rotation angle in radians [0, pi] between two unit quaternions.

            angle = 2 * arccos(|q1 . q2|)

        The absolute value folds q and -q, which describe the same rotation.
        """
        d = abs(float(self.dot(other)))
        return float(2.0 * np.arccos(np.clip(d, 0.0, 1.0)))

    def is_unit(self, tolerance: float = UNIT_TOLERANCE) -> bool:
        """True if the magnitude is within ``tolerance`` of 1."""
        return abs(float(np.sqrt(float(self.square_len()))) - 1.0) < tolerance

    # =========================================================================
    # EULER ANGLES
    # =========================================================================

    def to_euler(self, order=DEFAULT_EXTRACTION_ORDER,
                 external: bool = DEFAULT_EXTERNAL) -> Tuple[T, T, T]:
        """
        Convert to Euler angles.

        See :func:`hamilton.core.euler.to_euler` for the order codes and the
        gimbal-lock behavior.
        """
        from hamilton.core import euler
        return euler.to_euler(self, order, external)

    # =========================================================================
    # INTERPOLATION
    # =========================================================================

    @staticmethod
    def slerp(q1: 'Quaternion', q2: 'Quaternion', t: float) -> 'Quaternion':
        """
        Spherical Linear Interpolation (SLERP) between two quaternions.

            slerp(q1, q2, t) = q1 * sin((1-t)*theta) / sin(theta)
                             + q2 * sin(t*theta) / sin(theta)

        where theta = arccos(q1 . q2) is the angle between the normalized
        operands.

        Parameters
        ----------
        q1 : Quaternion
            Start orientation (t = 0). Normalized internally.
        q2 : Quaternion
            End orientation (t = 1). Normalized internally.
        t : float
            Interpolation parameter. Not clamped, so values outside [0, 1]
            extrapolate along the same arc.

        Returns
        -------
        Quaternion
            Interpolated unit quaternion.

        Notes
        -----
        - Always interpolates along the short arc: if q1 . q2 < 0, q2 is
          negated first (q and -q represent the same rotation).
        - Once the dot product exceeds SLERP_DOT_THRESHOLD the operands are
          nearly parallel and sin(theta) -> 0, so normalized linear
          interpolation is used instead.
        """
        q1 = q1.normalize()
        q2 = q2.normalize()
        kind = q1.kind

        dot = q1.dot(q2)
        if dot < kind.zero:
            q2 = -q2
            dot = -dot

        # Clamp for numerical safety before arccos
        cos_theta = float(np.clip(kind.to_float(dot), -1.0, 1.0))

        if cos_theta > SLERP_DOT_THRESHOLD:
            return (q1 + (q2 - q1).scale(kind.from_float(t))).normalize()

        theta = np.arccos(cos_theta)
        sin_theta = np.sin(theta)

        scale1 = kind.from_float(float(np.sin((1.0 - t) * theta) / sin_theta))
        scale2 = kind.from_float(float(np.sin(t * theta) / sin_theta))

        return q1.scale(scale1) + q2.scale(scale2)

    # =========================================================================
    # EXPONENTIATION
    # =========================================================================

    def pow_by_int(self, n: int) -> 'Quaternion[T]':
        """
        Raise to an integer power by repeated squaring.

        Uses O(log |n|) Hamilton products and stays exact for exact scalar
        types. ``n == 0`` gives the identity and a negative ``n`` raises the
        inverse to ``-n``.

        Parameters
        ----------
        n : int
            Exponent.

        Returns
        -------
        Quaternion
            ``self ** n``.
        """
        if n == 0:
            return Quaternion.identity(self.kind)
        if n < 0:
            return self.inverse().pow_by_int(-n)

        half = self.pow_by_int(n // 2)
        squared = half * half
        if n % 2 == 1:
            return squared * self
        return squared

    def pow_by_scalar(self, e: T) -> 'Quaternion[T]':
        """
        Raise to a real power through the exponential map.

        Writing q = |q| * (cos(phi) + n*sin(phi)) with unit axis n:

            q^e = |q|^e * (cos(e*phi) + n*sin(e*phi))

        Parameters
        ----------
        e : T
            Real exponent.

        Returns
        -------
        Quaternion
            ``self ** e``. Agrees with :meth:`pow_by_int` at integral
            exponents up to floating-point round-off.

        Notes
        -----
        - A zero quaternion is returned unchanged.
        - A quaternion with an exactly-zero vector part has no axis; its
          real part is raised to the power directly and the vector part
          stays zero. A negative real part with a fractional exponent then
          gives NaN.
        """
        kind = self.kind
        magnitude = self.magnitude()
        if magnitude == ScalarKind.of(magnitude).zero:
            return self

        e_f = float(e)
        r_f = kind.to_float(self.r)
        vec = np.array([kind.to_float(c) for c in self.vec], dtype=np.float64)
        vec_len = np.sqrt(np.dot(vec, vec))

        if vec_len == 0.0:
            with np.errstate(invalid="ignore"):
                real = float(np.power(r_f, e_f))
            return Quaternion(kind.from_float(real), (kind.zero, kind.zero, kind.zero))

        norm = np.sqrt(r_f * r_f + vec_len * vec_len)
        # atan2 equals arcsin(|vec| / |q|) whenever r >= 0 and keeps the
        # correct quadrant when r < 0.
        phi = np.arctan2(vec_len, r_f)

        new_phi = e_f * phi
        new_len = norm ** e_f
        axis = vec / vec_len

        r = float(np.cos(new_phi) * new_len)
        v = axis * (np.sin(new_phi) * new_len)
        return Quaternion(kind.from_float(r), tuple(kind.from_float(float(c)) for c in v))

    # =========================================================================
    # STRING FORM
    # =========================================================================

    def __str__(self) -> str:
        """Canonical form ``"<r> + <x>i + <y>j + <z>k"``."""
        x, y, z = self.vec
        return f"{self.r} + {x}i + {y}j + {z}k"
