"""Tests for the R1CS to QAP reduction."""

import galois
import numpy as np
import pytest

from zkcircuit.circuits import CubicCircuit, MultiplyCircuit
from zkcircuit.constraints import ConstraintSystem, SynthesisMode, Unsatisfiable, generate_constraints
from zkcircuit.primitives.field import random_element
from zkcircuit.protocol.qap import evaluate_at, poly_coefficients, r1cs_to_qap, witness_map


def _dot(z, vec):
    total = type(z)(0)
    for zi, vi in zip(z, vec):
        total = total + zi * vi
    return total


class TestReduction:

    def test_domain_covers_constraints_and_inputs(self, field) -> None:
        """The domain has one point per constraint and per instance column."""
        cs = generate_constraints(MultiplyCircuit(), field, SynthesisMode.SETUP)
        qap = r1cs_to_qap(cs)
        assert qap.num_constraints == 1
        assert qap.domain_size == 3
        assert qap.num_variables == 4
        assert qap.t.degree == 3

    def test_input_rows_appended(self, field) -> None:
        """Each instance column gets an x_i * 0 = 0 row in A."""
        cs = generate_constraints(MultiplyCircuit(), field, SynthesisMode.SETUP)
        mats = r1cs_to_qap(cs).matrices
        assert np.array_equal(mats.a[1], field([1, 0, 0, 0]))
        assert np.array_equal(mats.a[2], field([0, 1, 0, 0]))
        assert np.array_equal(mats.b[1:], field.Zeros((2, 4)))
        assert np.array_equal(mats.c[1:], field.Zeros((2, 4)))

    def test_reduction_does_not_need_values(self, field) -> None:
        """A setup-mode system reduces to a QAP."""
        cs = generate_constraints(CubicCircuit(), field, SynthesisMode.SETUP)
        qap = r1cs_to_qap(cs)
        assert qap.domain_size == 3 + 2


class TestWitnessMap:

    @pytest.mark.parametrize("circuit", [MultiplyCircuit(3, 4), CubicCircuit(3)])
    def test_divisibility_at_random_point(self, field, rng, circuit) -> None:
        """A(tau) * B(tau) - C(tau) == h(tau) * t(tau) for a satisfying assignment."""
        cs = generate_constraints(circuit, field)
        qap = r1cs_to_qap(cs)
        z = cs.full_assignment()
        h = witness_map(qap, z)
        assert h.degree <= qap.domain_size - 2

        tau = random_element(field, rng)
        ev = evaluate_at(qap, tau)
        lhs = _dot(z, ev.u) * _dot(z, ev.v) - _dot(z, ev.w)
        assert lhs == h(tau) * ev.t

    def test_unsatisfied_row_reported(self, field) -> None:
        """witness_map names the first row that fails."""
        cs = ConstraintSystem(field)
        a = cs.allocate_witness(lambda: 3)
        b = cs.allocate_witness(lambda: 4)
        c = cs.allocate_public_input(lambda: 13)
        cs.enforce(a, b, c)
        qap = r1cs_to_qap(cs)
        with pytest.raises(Unsatisfiable) as exc_info:
            witness_map(qap, cs.full_assignment())
        assert exc_info.value.index == 0

    def test_dimension_mismatch(self, field) -> None:
        """An assignment of the wrong length is refused."""
        cs = generate_constraints(MultiplyCircuit(3, 4), field)
        with pytest.raises(ValueError):
            witness_map(r1cs_to_qap(cs), field([1, 12]))


class TestPolyCoefficients:

    def test_ascending_and_padded(self, field) -> None:
        """Coefficients come out lowest degree first, zero padded."""
        p = galois.Poly([1, 2, 3], field=field)
        assert np.array_equal(poly_coefficients(p, 5), field([3, 2, 1, 0, 0]))

    def test_zero_poly(self, field) -> None:
        """The zero polynomial gives all-zero coefficients."""
        assert np.array_equal(poly_coefficients(galois.Poly.Zero(field), 3), field.Zeros(3))

    def test_too_long(self, field) -> None:
        """A polynomial that does not fit raises ValueError."""
        with pytest.raises(ValueError):
            poly_coefficients(galois.Poly([1, 0, 0], field=field), 2)
