"""
zkcircuit: R1CS constraint synthesis with a Groth16 backend.

A circuit describes a computation by allocating variables and enforcing
rank-1 constraints on a ConstraintSystem. The same description runs without
values to generate keys and with values to generate proofs.

This package provides:
- Scalar fields of BN254 and BLS12-381 (via galois)
- Variables, linear combinations, and the constraint system
- The circuit synthesis contract and driver
- Example circuits
- R1CS to QAP reduction and Groth16 setup/prove/verify (via py_ecc)

Usage:
    from zkcircuit import MultiplyCircuit, setup, prove, verify

    pk, vk = setup(MultiplyCircuit())
    proof = prove(pk, MultiplyCircuit(a, b))
    assert verify(vk, [a * b], proof)
"""

from zkcircuit.circuits import CubicCircuit, MultiplyCircuit, get_circuit
from zkcircuit.constraints import (
    AssignmentMissing,
    ConstraintSynthesizer,
    ConstraintSystem,
    InvalidState,
    LinearCombination,
    MalformedLinearCombination,
    MalformedVerifyingKey,
    SynthesisError,
    SynthesisMode,
    Unsatisfiable,
    Variable,
    VariableKind,
    generate_constraints,
    require_value,
    synthesize,
)
from zkcircuit.primitives import BLS12_381_FR, BN254_FR, get_field
from zkcircuit.protocol import (
    BackendConfig,
    Proof,
    ProvingKey,
    VerifyingKey,
    prove,
    setup,
    verify,
)

__version__ = "0.1.0"
__all__ = [
    # Fields
    "BN254_FR",
    "BLS12_381_FR",
    "get_field",
    # Synthesis
    "ConstraintSynthesizer",
    "ConstraintSystem",
    "SynthesisMode",
    "Variable",
    "VariableKind",
    "LinearCombination",
    "synthesize",
    "generate_constraints",
    "require_value",
    # Errors
    "SynthesisError",
    "AssignmentMissing",
    "MalformedLinearCombination",
    "MalformedVerifyingKey",
    "Unsatisfiable",
    "InvalidState",
    # Circuits
    "MultiplyCircuit",
    "CubicCircuit",
    "get_circuit",
    # Groth16
    "BackendConfig",
    "ProvingKey",
    "VerifyingKey",
    "Proof",
    "setup",
    "prove",
    "verify",
]
