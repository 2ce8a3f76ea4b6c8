"""Rank-1 constraint system.

The ConstraintSystem accumulates variables and constraints of the form
``A * B = C`` while a circuit synthesizes. It runs in one of two modes:

- SETUP: no values exist. Value thunks are never called; only the shape of
  the system (variables, roles, constraints) is recorded.
- PROVE: every allocation evaluates its thunk. A thunk that reports a missing
  value raises AssignmentMissing, which aborts the synthesis.

Both modes go through the same allocation code, so a circuit produces the same
shape whether or not values are present.

Column layout used by matrices and assignment vectors:
    [one, instance_1, ..., instance_k, witness_0, ..., witness_{w-1}]
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import galois

from zkcircuit.constraints.errors import (
    AssignmentMissing,
    InvalidState,
    MalformedLinearCombination,
)
from zkcircuit.constraints.variable import LcLike, LinearCombination, Variable, VariableKind
from zkcircuit.primitives.field import FieldType, to_field

logger = logging.getLogger(__name__)

# Per-process source of owner tokens; one token per ConstraintSystem.
_owner_tokens = itertools.count(1)

ValueThunk = Callable[[], object]


class SynthesisMode(Enum):
    SETUP = "setup"
    PROVE = "prove"


class SynthesisState(Enum):
    FRESH = "fresh"
    SYNTHESIZING = "synthesizing"
    SYNTHESIZED = "synthesized"
    FAILED = "failed"


@dataclass(frozen=True)
class Constraint:
    """A single ``a * b = c`` row with an optional diagnostic label."""
    a: LinearCombination
    b: LinearCombination
    c: LinearCombination
    label: str | None = None


@dataclass
class R1CSMatrices:
    """Dense constraint matrices.

    Attributes:
        a, b, c: Field matrices of shape (num_constraints, num_variables)
        num_instance_variables: Number of leading columns that are public
            (including the constant one)
        num_witness_variables: Number of trailing private columns
    """
    a: galois.FieldArray
    b: galois.FieldArray
    c: galois.FieldArray
    num_instance_variables: int
    num_witness_variables: int

    @property
    def num_constraints(self) -> int:
        return self.a.shape[0]

    @property
    def num_variables(self) -> int:
        return self.num_instance_variables + self.num_witness_variables


class ConstraintSystem:
    """Accumulates variables and constraints during synthesis.

    Args:
        field: galois prime field class the constraints live in
        mode: SETUP (shape only) or PROVE (values required)
    """

    def __init__(self, field: FieldType, mode: SynthesisMode = SynthesisMode.PROVE):
        self.field = field
        self.mode = mode
        self.state = SynthesisState.FRESH
        self._owner = next(_owner_tokens)
        self._one = Variable(VariableKind.ONE, 0, self._owner, field)
        self._num_instance = 1
        self._num_witness = 0
        # Assignments are only populated in PROVE mode.
        self._instance_assignment: list[galois.FieldArray] = [field(1)] if self.is_proving else []
        self._witness_assignment: list[galois.FieldArray] = []
        self._constraints: list[Constraint] = []

    def __repr__(self) -> str:
        return (
            f"ConstraintSystem(mode={self.mode.value}, state={self.state.value}, "
            f"instance={self._num_instance}, witness={self._num_witness}, "
            f"constraints={len(self._constraints)})"
        )

    @property
    def is_proving(self) -> bool:
        return self.mode is SynthesisMode.PROVE

    @property
    def is_frozen(self) -> bool:
        return self.state in (SynthesisState.SYNTHESIZED, SynthesisState.FAILED)

    # --- Allocation ---

    def one(self) -> Variable:
        """The constant-one variable of this system."""
        return self._one

    def allocate_witness(self, value_thunk: ValueThunk, label: str | None = None) -> Variable:
        """Allocate a private variable.

        Args:
            value_thunk: Zero-argument callable producing the value. Called only
                in PROVE mode. Signals absence by raising AssignmentMissing or
                returning None.
            label: Optional name used in log messages

        Returns:
            Fresh witness Variable
        """
        self._check_mutable()
        value = self._resolve(value_thunk, label)
        var = Variable(VariableKind.WITNESS, self._num_witness, self._owner, self.field)
        self._num_witness += 1
        if value is not None:
            self._witness_assignment.append(value)
        logger.debug("Allocated %s%s", var, f" ({label})" if label else "")
        return var

    def allocate_public_input(self, value_thunk: ValueThunk, label: str | None = None) -> Variable:
        """Allocate a public input variable.

        Same contract as ``allocate_witness``. Public inputs are numbered in
        allocation order, which is the order the verifier expects their values.
        """
        self._check_mutable()
        value = self._resolve(value_thunk, label)
        var = Variable(VariableKind.INSTANCE, self._num_instance, self._owner, self.field)
        self._num_instance += 1
        if value is not None:
            self._instance_assignment.append(value)
        logger.debug("Allocated %s%s", var, f" ({label})" if label else "")
        return var

    def _resolve(self, value_thunk: ValueThunk, label: str | None):
        if not self.is_proving:
            return None
        value = value_thunk()
        if value is None:
            raise AssignmentMissing(label)
        return to_field(self.field, value)

    # --- Constraints ---

    def enforce(self, a: LcLike, b: LcLike, c: LcLike, label: str | None = None) -> None:
        """Append the constraint ``a * b = c``.

        Satisfiability is not checked here; see ``is_satisfied``.

        Raises:
            MalformedLinearCombination: If a term references a variable issued
                by another constraint system
        """
        self._check_mutable()
        constraint = Constraint(self._as_lc(a), self._as_lc(b), self._as_lc(c), label)
        self._constraints.append(constraint)
        logger.debug("Enforced constraint %d%s", len(self._constraints) - 1, f" ({label})" if label else "")

    def _as_lc(self, value: LcLike) -> LinearCombination:
        if isinstance(value, Variable):
            lc = value.to_lc()
        elif isinstance(value, LinearCombination):
            lc = value
        else:
            # Constants are multiples of the one variable.
            lc = self._one * value
        if lc.field is not self.field:
            raise MalformedLinearCombination(f"Combination over {lc.field.name}, system is over {self.field.name}")
        for var in lc.variables:
            self._check_owned(var)
        return lc

    def _check_owned(self, var: Variable) -> None:
        if var.owner != self._owner:
            raise MalformedLinearCombination(f"{var} belongs to another constraint system")
        limit = self._num_instance if var.kind is not VariableKind.WITNESS else self._num_witness
        if var.index >= limit:
            raise MalformedLinearCombination(f"{var} was never allocated")

    def _check_mutable(self) -> None:
        if self.is_frozen:
            raise InvalidState(f"Constraint system is {self.state.value}; it can no longer be modified")

    # --- Lifecycle ---

    def begin(self) -> None:
        if self.state is not SynthesisState.FRESH:
            raise InvalidState(f"Synthesis already ran on this constraint system (state={self.state.value})")
        self.state = SynthesisState.SYNTHESIZING

    def finalize(self) -> None:
        """Freeze the system after a successful synthesis."""
        self.state = SynthesisState.SYNTHESIZED

    def fail(self) -> None:
        """Mark the system unusable after a failed synthesis."""
        self.state = SynthesisState.FAILED

    def clear_assignment(self) -> None:
        """Drop all values, keeping the shape."""
        self._instance_assignment = []
        self._witness_assignment = []

    # --- Inspection ---

    @property
    def num_instance_variables(self) -> int:
        """Number of public slots, including the constant one."""
        return self._num_instance

    @property
    def num_witness_variables(self) -> int:
        return self._num_witness

    @property
    def num_constraints(self) -> int:
        return len(self._constraints)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return tuple(self._constraints)

    @property
    def instance_assignment(self) -> list[galois.FieldArray]:
        return list(self._instance_assignment)

    @property
    def witness_assignment(self) -> list[galois.FieldArray]:
        return list(self._witness_assignment)

    @property
    def public_inputs(self) -> list[galois.FieldArray]:
        """Public input values in allocation order, without the constant one."""
        return list(self._instance_assignment[1:])

    def has_assignment(self) -> bool:
        return (
            len(self._instance_assignment) == self._num_instance
            and len(self._witness_assignment) == self._num_witness
        )

    def column(self, var: Variable) -> int:
        """Column of ``var`` in the [one, instance..., witness...] layout."""
        self._check_owned(var)
        if var.kind is VariableKind.WITNESS:
            return self._num_instance + var.index
        return var.index

    def value(self, var: Variable) -> galois.FieldArray:
        """Assigned value of ``var`` (PROVE mode only)."""
        self._check_owned(var)
        if not self.has_assignment():
            raise AssignmentMissing(str(var))
        if var.kind is VariableKind.WITNESS:
            return self._witness_assignment[var.index]
        return self._instance_assignment[var.index]

    def eval_lc(self, lc: LcLike) -> galois.FieldArray:
        return self._as_lc(lc).evaluate(self.value)

    def full_assignment(self) -> galois.FieldArray:
        """Assignment vector in column order."""
        if not self.has_assignment():
            raise AssignmentMissing("full assignment")
        return self.field([int(v) for v in self._instance_assignment + self._witness_assignment])

    def which_is_unsatisfied(self) -> int | None:
        """Index of the first violated constraint, or None if all hold."""
        for i, constraint in enumerate(self._constraints):
            lhs = constraint.a.evaluate(self.value) * constraint.b.evaluate(self.value)
            if lhs != constraint.c.evaluate(self.value):
                return i
        return None

    def is_satisfied(self) -> bool:
        return self.which_is_unsatisfied() is None

    def to_matrices(self) -> R1CSMatrices:
        """Export the constraints as dense matrices over the system's field."""
        n_rows = len(self._constraints)
        n_cols = self._num_instance + self._num_witness
        mats = [self.field.Zeros((n_rows, n_cols)) for _ in range(3)]
        for row, constraint in enumerate(self._constraints):
            for mat, lc in zip(mats, (constraint.a, constraint.b, constraint.c)):
                for var, coeff in lc:
                    mat[row, self.column(var)] = coeff
        return R1CSMatrices(mats[0], mats[1], mats[2], self._num_instance, self._num_witness)
