"""Tests for the pairing curve wrapper."""

import pytest

from zkcircuit.primitives.field import BLS12_381_FR, BN254_FR
from zkcircuit.protocol.curve import BLS12_381, BN254, PairingCurve, get_curve


class TestCurveLookup:

    def test_get_curve(self) -> None:
        """Curve names map to curve bundles."""
        assert get_curve("bn254") is BN254
        assert get_curve("bls12_381") is BLS12_381

    def test_unknown_curve(self) -> None:
        """Unknown curve names raise KeyError."""
        with pytest.raises(KeyError, match="Available"):
            get_curve("secp256k1")

    def test_scalar_fields(self) -> None:
        """Each curve carries its galois scalar field."""
        assert BN254.field is BN254_FR
        assert BLS12_381.field is BLS12_381_FR

    def test_mismatched_field_rejected(self) -> None:
        """A field whose order differs from the curve order is refused."""
        with pytest.raises(ValueError):
            PairingCurve("broken", BLS12_381_FR, BN254.backend)


class TestGroupOps:

    def test_mul_matches_repeated_add(self) -> None:
        """Scalar multiplication agrees with repeated addition."""
        assert BN254.eq(BN254.mul_g1(2), BN254.add(BN254.g1, BN254.g1))
        assert BN254.eq(BN254.mul_g2(3), BN254.add(BN254.g2, BN254.add(BN254.g2, BN254.g2)))

    def test_mul_accepts_field_elements(self) -> None:
        """Field scalars multiply like ints."""
        assert BN254.eq(BN254.mul_g1(BN254_FR(5)), BN254.mul_g1(5))

    def test_mul_reduces_negative_scalars(self) -> None:
        """-1 * G is the negation of G."""
        assert BN254.eq(BN254.mul_g1(-1), BN254.neg(BN254.g1))

    def test_msm(self) -> None:
        """msm sums scalar multiples."""
        points = [BN254.g1, BN254.mul_g1(2)]
        result = BN254.msm(BN254.zero_g1, points, [3, BN254_FR(4)])
        assert BN254.eq(result, BN254.mul_g1(11))

    def test_msm_skips_zero_scalars(self) -> None:
        """Zero scalars contribute nothing."""
        result = BN254.msm(BN254.zero_g2, [BN254.g2], [0])
        assert BN254.eq(result, BN254.zero_g2)

    def test_msm_dimension_mismatch(self) -> None:
        """Points and scalars must pair up."""
        with pytest.raises(ValueError):
            BN254.msm(BN254.zero_g1, [BN254.g1], [1, 2])

    def test_normalize_affine(self) -> None:
        """Equal points normalize to the same affine coordinates."""
        x, y = BN254.normalize(BN254.mul_g1(7))
        other_x, other_y = BN254.normalize(BN254.add(BN254.mul_g1(3), BN254.mul_g1(4)))
        assert (x, y) == (other_x, other_y)
