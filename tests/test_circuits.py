"""Tests for the synthesis driver and the bundled circuits."""

import numpy as np
import pytest

from zkcircuit.circuits import CIRCUIT_REGISTRY, CubicCircuit, MultiplyCircuit, get_circuit
from zkcircuit.constraints import (
    AssignmentMissing,
    ConstraintSynthesizer,
    ConstraintSystem,
    SynthesisMode,
    SynthesisState,
    generate_constraints,
    synthesize,
)
from zkcircuit.primitives.field import random_element


def _layout(cs):
    m = cs.to_matrices()
    return (cs.num_instance_variables, cs.num_witness_variables, m.a, m.b, m.c)


def _same_layout(left, right) -> bool:
    return left[:2] == right[:2] and all(np.array_equal(x, y) for x, y in zip(left[2:], right[2:]))


class TestSynthesisContract:

    def test_base_class_requires_synthesize(self) -> None:
        """A circuit class without synthesize cannot be instantiated."""
        class Incomplete(ConstraintSynthesizer):
            pass

        with pytest.raises(TypeError):
            Incomplete()

    def test_generate_constraints_returns_frozen_system(self, field) -> None:
        """generate_constraints returns a synthesized prove-mode system."""
        cs = generate_constraints(MultiplyCircuit(3, 4), field)
        assert cs.state is SynthesisState.SYNTHESIZED
        assert cs.mode is SynthesisMode.PROVE


class TestMultiplyCircuit:

    def test_prove_mode(self, field) -> None:
        """Prove mode allocates, assigns and satisfies the circuit."""
        cs = generate_constraints(MultiplyCircuit(3, 4), field)
        assert cs.num_witness_variables == 2
        assert cs.num_instance_variables == 2
        assert cs.num_constraints == 1
        assert cs.public_inputs == [field(12)]
        assert cs.is_satisfied()

    def test_setup_mode(self, field) -> None:
        """Setup mode builds the same shape without values."""
        cs = generate_constraints(MultiplyCircuit(), field, SynthesisMode.SETUP)
        assert cs.num_witness_variables == 2
        assert cs.num_instance_variables == 2
        assert cs.num_constraints == 1
        assert cs.constraints[0].label == "a * b = c"

    def test_random_field_values(self, field, rng) -> None:
        """Random field factors give a satisfied system."""
        a, b = random_element(field, rng), random_element(field, rng)
        cs = generate_constraints(MultiplyCircuit(a, b), field)
        assert cs.public_inputs == [a * b]
        assert cs.is_satisfied()

    def test_product(self) -> None:
        """product() multiplies the two factors."""
        assert MultiplyCircuit(6, 7).product() == 42

    def test_product_requires_both_factors(self) -> None:
        """product() reports the missing factor."""
        with pytest.raises(AssignmentMissing, match="for b"):
            MultiplyCircuit(3, None).product()

    def test_missing_values_abort_prove(self, field) -> None:
        """With no values, synthesis fails before allocating anything."""
        cs = ConstraintSystem(field)
        with pytest.raises(AssignmentMissing):
            synthesize(MultiplyCircuit(), cs)
        assert cs.state is SynthesisState.FAILED
        assert cs.num_witness_variables == 0
        assert cs.num_instance_variables == 1

    def test_missing_second_factor(self, field) -> None:
        """The public output is never allocated when its inputs are incomplete."""
        cs = ConstraintSystem(field)
        with pytest.raises(AssignmentMissing) as exc_info:
            synthesize(MultiplyCircuit(3, None), cs)
        assert exc_info.value.what == "b"
        assert cs.num_witness_variables == 1
        assert cs.num_instance_variables == 1

    def test_non_integer_factor_fails_synthesis(self, field) -> None:
        """A float factor aborts synthesis instead of being truncated."""
        cs = ConstraintSystem(field)
        with pytest.raises(TypeError):
            synthesize(MultiplyCircuit(1.5, 2), cs)
        assert cs.state is SynthesisState.FAILED
        assert cs.num_witness_variables == 0

    def test_layout_is_deterministic(self, field) -> None:
        """Different values and setup mode give the same layout."""
        first = _layout(generate_constraints(MultiplyCircuit(3, 4), field))
        second = _layout(generate_constraints(MultiplyCircuit(5, 6), field))
        shape = _layout(generate_constraints(MultiplyCircuit(), field, SynthesisMode.SETUP))
        assert _same_layout(first, second)
        assert _same_layout(first, shape)


class TestCubicCircuit:

    def test_output(self) -> None:
        """output() computes x^3 + x + 5."""
        assert CubicCircuit(3).output() == 35

    def test_prove_mode(self, field) -> None:
        """Prove mode allocates, assigns and satisfies the circuit."""
        cs = generate_constraints(CubicCircuit(3), field)
        assert cs.num_witness_variables == 3
        assert cs.num_instance_variables == 2
        assert cs.num_constraints == 3
        assert cs.public_inputs == [field(35)]
        assert cs.is_satisfied()

    def test_witness_values(self, field) -> None:
        """Witnesses hold x, x^2 and x^3."""
        cs = generate_constraints(CubicCircuit(3), field)
        assert cs.witness_assignment == [field(3), field(9), field(27)]

    def test_affine_row_uses_one(self, field) -> None:
        """The affine row puts the constant 5 on the one column."""
        cs = generate_constraints(CubicCircuit(), field, SynthesisMode.SETUP)
        m = cs.to_matrices()
        # columns: one, out, x, x^2, x^3
        assert np.array_equal(m.a[2], field([5, 0, 1, 0, 1]))
        assert np.array_equal(m.b[2], field([1, 0, 0, 0, 0]))
        assert np.array_equal(m.c[2], field([0, 1, 0, 0, 0]))

    def test_wrong_output_detected(self, field) -> None:
        """A wrong public output fails the last constraint."""
        class Off(CubicCircuit):
            def output(self):
                return super().output() + 1

        cs = generate_constraints(Off(3), field)
        assert cs.which_is_unsatisfied() == 2

    def test_missing_value(self, field) -> None:
        """Prove mode without x raises AssignmentMissing."""
        with pytest.raises(AssignmentMissing, match="for x"):
            generate_constraints(CubicCircuit(), field)


class TestRegistry:

    def test_registered_names(self) -> None:
        """Both bundled circuits are registered."""
        assert set(CIRCUIT_REGISTRY) == {"multiply", "cubic"}

    def test_get_circuit(self) -> None:
        """get_circuit passes inputs to the circuit class."""
        circuit = get_circuit("multiply", a=2, b=5)
        assert isinstance(circuit, MultiplyCircuit)
        assert circuit.product() == 10

    def test_get_circuit_without_inputs(self) -> None:
        """Omitting inputs gives a setup-only instance."""
        assert isinstance(get_circuit("cubic"), CubicCircuit)

    def test_unknown_circuit(self) -> None:
        """Unknown names list the available circuits."""
        with pytest.raises(KeyError, match="Available"):
            get_circuit("sha256")
