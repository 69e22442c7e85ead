"""
Exception types raised by the quaternion library.

Only caller errors are raised. Degenerate numeric situations (gimbal lock,
zero magnitude, near-parallel slerp endpoints) return a documented value
instead, and division by a zero-magnitude quaternion surfaces whatever the
scalar type itself does on a zero divisor.
"""


class HamiltonError(Exception):
    """Base class for all errors raised by hamilton."""


class UnsupportedRotationOrder(HamiltonError, ValueError):
    """An Euler rotation-order code is unknown or not valid for the operation.

    Parameters
    ----------
    order : str
        The offending order code, as supplied by the caller.
    supported : tuple of str
        Order codes the failing operation accepts.
    """

    def __init__(self, order, supported):
        self.order = order
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported rotation order {order!r}; "
            f"expected one of {', '.join(self.supported)}"
        )
