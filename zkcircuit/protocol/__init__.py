"""Protocol - Groth16 proving backend over synthesized constraint systems."""

from zkcircuit.protocol.config import BackendConfig, DEFAULT_CONFIG
from zkcircuit.protocol.curve import (
    BLS12_381,
    BN254,
    CURVES,
    PairingCurve,
    get_curve,
)
from zkcircuit.protocol.groth16 import (
    PreparedVerifyingKey,
    Proof,
    ProvingKey,
    VerifyingKey,
    prepare_inputs,
    prepare_verifying_key,
    prove,
    setup,
    verify,
    verify_proof,
)
from zkcircuit.protocol.qap import QAP, evaluate_at, r1cs_to_qap, witness_map

__all__ = [
    # Configuration
    "BackendConfig",
    "DEFAULT_CONFIG",
    # Curves
    "PairingCurve",
    "BN254",
    "BLS12_381",
    "CURVES",
    "get_curve",
    # QAP
    "QAP",
    "r1cs_to_qap",
    "evaluate_at",
    "witness_map",
    # Groth16
    "ProvingKey",
    "VerifyingKey",
    "PreparedVerifyingKey",
    "Proof",
    "setup",
    "prove",
    "verify",
    "verify_proof",
    "prepare_verifying_key",
    "prepare_inputs",
]
