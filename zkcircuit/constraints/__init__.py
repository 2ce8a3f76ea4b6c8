"""Constraint synthesis core: variables, linear combinations, the constraint
system, and the circuit contract."""

from zkcircuit.constraints.circuit import (
    ConstraintSynthesizer,
    generate_constraints,
    synthesize,
)
from zkcircuit.constraints.errors import (
    AssignmentMissing,
    InvalidState,
    MalformedLinearCombination,
    MalformedVerifyingKey,
    SynthesisError,
    Unsatisfiable,
    require_value,
)
from zkcircuit.constraints.system import (
    Constraint,
    ConstraintSystem,
    R1CSMatrices,
    SynthesisMode,
    SynthesisState,
)
from zkcircuit.constraints.variable import (
    LinearCombination,
    Variable,
    VariableKind,
)

__all__ = [
    # Circuit contract
    "ConstraintSynthesizer",
    "synthesize",
    "generate_constraints",
    # Constraint system
    "ConstraintSystem",
    "Constraint",
    "R1CSMatrices",
    "SynthesisMode",
    "SynthesisState",
    # Algebra
    "Variable",
    "VariableKind",
    "LinearCombination",
    # Errors
    "SynthesisError",
    "AssignmentMissing",
    "MalformedLinearCombination",
    "Unsatisfiable",
    "MalformedVerifyingKey",
    "InvalidState",
    "require_value",
]
