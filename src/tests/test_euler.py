"""
===============================================================================
HAMILTON - Euler Angle Conversion Test Suite
===============================================================================
Tests for quaternion <-> Euler angle conversion in every supported rotation
order, the extrinsic/intrinsic relationship, gimbal-lock handling and the
rejection of unsupported order codes.
===============================================================================
"""

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from hamilton import EulerOrder, HamiltonError, Quaternion, UnsupportedRotationOrder
from hamilton.core import euler
from hamilton.core.constants import HALF_PI

AXES = {
    "X": (1.0, 0.0, 0.0),
    "Y": (0.0, 1.0, 0.0),
    "Z": (0.0, 0.0, 1.0),
}


def extrinsic(order, angles):
    """Compose single-axis rotations about fixed axes: q = q_C * q_B * q_A."""
    q = Quaternion.identity().map(float)
    for axis, angle in zip(order, angles):
        q = Quaternion.from_axis_angle(AXES[axis], angle) * q
    return q


def intrinsic(order, angles):
    """Compose single-axis rotations about moving axes: q = q_A * q_B * q_C."""
    q = Quaternion.identity().map(float)
    for axis, angle in zip(order, angles):
        q = q * Quaternion.from_axis_angle(AXES[axis], angle)
    return q


def same_rotation(q1, q2, atol=1e-12):
    """q and -q describe the same rotation."""
    return abs(abs(float(q1.normalize().dot(q2.normalize()))) - 1.0) < atol


ANGLE_SETS = [
    (0.0, 0.0, 0.0),
    (0.1, 0.2, 0.3),
    (-0.8, 0.4, 2.1),
    (1.2, -1.0, -2.5),
    (np.pi / 4, np.pi / 6, np.pi / 3),
]


# =============================================================================
# Test: Euler -> quaternion
# =============================================================================

class TestFromEuler:
    """Tests for the closed-form Euler -> quaternion construction."""

    @pytest.mark.parametrize("order", ["XYZ", "YXZ", "ZYX", "YZX", "ZXY"])
    @pytest.mark.parametrize("angles", ANGLE_SETS)
    def test_matches_axis_composition(self, order, angles):
        q = Quaternion.from_euler(*angles, order=order)
        assert_allclose(q.components, extrinsic(order, angles).components, atol=1e-14)

    def test_default_order_is_xyz(self):
        angles = (0.3, -0.2, 0.9)
        assert Quaternion.from_euler(*angles) == euler.from_euler(*angles, order="XYZ")

    def test_aerospace_321_formula(self):
        """XYZ with (roll, pitch, yaw) is the classic 3-2-1 quaternion."""
        phi, theta, psi = 0.1, 0.2, 0.3
        c_phi, s_phi = np.cos(phi / 2), np.sin(phi / 2)
        c_theta, s_theta = np.cos(theta / 2), np.sin(theta / 2)
        c_psi, s_psi = np.cos(psi / 2), np.sin(psi / 2)
        expected = [
            c_phi * c_theta * c_psi + s_phi * s_theta * s_psi,
            s_phi * c_theta * c_psi - c_phi * s_theta * s_psi,
            c_phi * s_theta * c_psi + s_phi * c_theta * s_psi,
            c_phi * c_theta * s_psi - s_phi * s_theta * c_psi,
        ]
        assert_allclose(Quaternion.from_euler(phi, theta, psi).components, expected,
                        atol=1e-14)

    def test_result_is_unit(self):
        assert Quaternion.from_euler(1.0, -0.7, 2.0, order="ZXY").is_unit()

    def test_accepts_enum(self):
        angles = (0.5, 0.25, -0.4)
        assert (euler.from_euler(*angles, order=EulerOrder.ZXY)
                == euler.from_euler(*angles, order="ZXY"))


# =============================================================================
# Test: Quaternion -> Euler (extrinsic)
# =============================================================================

class TestToEulerExternal:
    """Tests for the four extrinsic extraction functions."""

    @pytest.mark.parametrize("order,extract", [
        ("XYZ", euler.to_euler_external_XYZ),
        ("XZY", euler.to_euler_external_XZY),
        ("YZX", euler.to_euler_external_YZX),
        ("ZYX", euler.to_euler_external_ZYX),
    ])
    @pytest.mark.parametrize("angles", ANGLE_SETS)
    def test_recovers_composed_angles(self, order, extract, angles):
        q = extrinsic(order, angles)
        assert_allclose(extract(q), angles, atol=1e-12)

    @pytest.mark.parametrize("order", ["XYZ", "ZYX", "YZX"])
    @pytest.mark.parametrize("angles", ANGLE_SETS)
    def test_round_trip(self, order, angles):
        """to_euler(from_euler(angles, order), order) == angles."""
        q = Quaternion.from_euler(*angles, order=order)
        assert_allclose(q.to_euler(order), angles, atol=1e-12)

    def test_normalizes_first(self):
        q = extrinsic("ZYX", (0.4, -0.3, 1.1))
        assert_allclose(q.scale(7.5).to_euler("ZYX"), (0.4, -0.3, 1.1), atol=1e-12)

    def test_default_is_external_zyx(self):
        q = Quaternion.from_vec((0.9, 0.1, -0.3, 0.2))
        assert q.to_euler() == euler.to_euler_external_ZYX(q)
        assert euler.to_euler(q) == euler.to_euler_external_ZYX(q)

    def test_identity_is_zero(self):
        """Identity quaternion should map to zero Euler angles."""
        for order in ("XYZ", "XZY", "YZX", "ZYX"):
            assert_allclose(Quaternion.identity().to_euler(order), (0.0, 0.0, 0.0),
                            atol=1e-14)

    def test_angles_follow_scalar_type(self):
        """Angles come back in the quaternion's scalar type."""
        angles = Quaternion.from_vec((1.0, 0.0, 0.0, 0.0)).to_euler()
        assert all(isinstance(a, float) for a in angles)
        q32 = Quaternion.from_vec([np.float32(c) for c in (0.9, 0.1, -0.3, 0.2)])
        assert all(isinstance(a, np.float32) for a in q32.to_euler())


# =============================================================================
# Test: Quaternion -> Euler (intrinsic)
# =============================================================================

class TestToEulerInternal:
    """Tests for the intrinsic extraction wrappers."""

    @pytest.mark.parametrize("order", ["XYZ", "XZY", "YZX", "ZYX"])
    @pytest.mark.parametrize("angles", ANGLE_SETS)
    def test_recovers_intrinsic_angles(self, order, angles):
        q = intrinsic(order, angles)
        assert_allclose(q.to_euler(order, external=False), angles, atol=1e-12)

    @pytest.mark.parametrize("internal,external", [
        (euler.to_euler_internal_XYZ, euler.to_euler_external_ZYX),
        (euler.to_euler_internal_XZY, euler.to_euler_external_YZX),
        (euler.to_euler_internal_YZX, euler.to_euler_external_XZY),
        (euler.to_euler_internal_ZYX, euler.to_euler_external_XYZ),
    ])
    def test_internal_is_reversed_external(self, internal, external):
        """Intrinsic ABC is exactly extrinsic CBA read backwards."""
        q = Quaternion.from_vec((0.3, -0.5, 0.7, 0.2))
        assert internal(q) == tuple(reversed(external(q)))

    def test_aerospace_yaw_pitch_roll(self):
        """Intrinsic ZYX returns (yaw, pitch, roll) of the 3-2-1 sequence."""
        roll, pitch, yaw = 0.1, 0.2, 0.3
        q = Quaternion.from_euler(roll, pitch, yaw, order="XYZ")
        assert_allclose(q.to_euler("ZYX", external=False), (yaw, pitch, roll), atol=1e-12)


# =============================================================================
# Test: Gimbal lock
# =============================================================================

class TestGimbalLock:
    """Tests for the degenerate middle-angle = +/-90 deg configuration."""

    @pytest.mark.parametrize("order", ["XYZ", "ZYX", "YZX"])
    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_pole_values(self, order, sign):
        q = Quaternion.from_euler(0.3, sign * HALF_PI, 0.2, order=order)
        first, middle, third = q.to_euler(order)
        assert middle == sign * HALF_PI
        assert third == 0.0
        assert np.isfinite(first)

    @pytest.mark.parametrize("order", ["XYZ", "XZY", "YZX", "ZYX"])
    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_locked_angles_reproduce_rotation(self, order, sign):
        """The pinned triple still describes the same orientation."""
        q = extrinsic(order, (0.7, sign * HALF_PI, -0.4))
        angles = euler.to_euler(q, order)
        assert same_rotation(extrinsic(order, angles), q, atol=1e-9)

    def test_near_pole_inside_threshold(self):
        """asin argument just past 0.9998 is treated as locked."""
        pitch = np.arcsin(0.99985)
        first, middle, third = Quaternion.from_euler(0.0, pitch, 0.0).to_euler("XYZ")
        assert middle == HALF_PI
        assert third == 0.0

    def test_below_threshold_is_not_locked(self):
        pitch = np.arcsin(0.9997)
        angles = Quaternion.from_euler(0.2, pitch, 0.1).to_euler("XYZ")
        assert_allclose(angles, (0.2, pitch, 0.1), atol=1e-8)

    def test_logs_warning(self, caplog):
        caplog.set_level(logging.WARNING, logger="hamilton.core.euler")
        Quaternion.from_euler(0.3, HALF_PI, 0.2).to_euler("XYZ")
        assert any(r.levelno == logging.WARNING and "Gimbal lock" in r.getMessage()
                   for r in caplog.records)

    def test_no_warning_away_from_pole(self, caplog):
        caplog.set_level(logging.WARNING, logger="hamilton.core.euler")
        Quaternion.from_euler(0.3, 0.5, 0.2).to_euler("XYZ")
        assert not caplog.records

    def test_internal_variant_zeroes_first_angle(self):
        """Reversal moves the zeroed angle to the front for intrinsic orders."""
        q = Quaternion.from_euler(0.3, HALF_PI, 0.2, order="ZYX")
        first, middle, third = q.to_euler("XYZ", external=False)
        assert first == 0.0
        assert middle == HALF_PI


# =============================================================================
# Test: Rotation-order codes
# =============================================================================

class TestRotationOrder:
    """Tests for order-code parsing and rejection."""

    @pytest.mark.parametrize("code", ["ABC", "xyz", "", "XYZX", "XXY"])
    def test_unknown_order_in_to_euler(self, code):
        with pytest.raises(UnsupportedRotationOrder):
            Quaternion.identity().to_euler(code)

    @pytest.mark.parametrize("code", ["ABC", "XZY"])
    def test_unsupported_order_in_from_euler(self, code):
        """XZY exists as an extraction order but not as a construction order."""
        with pytest.raises(UnsupportedRotationOrder):
            Quaternion.from_euler(0.1, 0.2, 0.3, order=code)

    @pytest.mark.parametrize("code", ["YXZ", "ZXY"])
    def test_construction_only_orders_rejected_for_extraction(self, code):
        with pytest.raises(UnsupportedRotationOrder):
            Quaternion.identity().to_euler(code, external=False)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError, match="ABC"):
            euler.to_euler(Quaternion.identity(), "ABC")

    def test_error_is_hamilton_error(self):
        with pytest.raises(HamiltonError):
            euler.to_euler(Quaternion.identity(), "ABC")

    def test_error_lists_supported_orders(self):
        with pytest.raises(UnsupportedRotationOrder) as excinfo:
            euler.from_euler(0.0, 0.0, 0.0, order="QQQ")
        assert excinfo.value.order == "QQQ"
        assert excinfo.value.supported == ("XYZ", "YXZ", "ZYX", "YZX", "ZXY")

    def test_parse(self):
        assert EulerOrder.parse("ZYX") is EulerOrder.ZYX
        assert EulerOrder.parse(EulerOrder.XZY) is EulerOrder.XZY
        with pytest.raises(UnsupportedRotationOrder):
            EulerOrder.parse(EulerOrder.YXZ, ("XYZ",))
