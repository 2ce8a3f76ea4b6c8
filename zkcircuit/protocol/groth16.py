"""Groth16 zk-SNARK over a synthesized constraint system.

The backend drives synthesis itself:

- setup: synthesize the circuit in SETUP mode (no values), reduce to a QAP,
  and derive the structured reference string from random toxic waste
  (tau, alpha, beta, gamma, delta).
- prove: synthesize in PROVE mode, compute the QAP quotient h, and combine
  the proving key with random blinding factors r, s.
- verify: one pairing-product check against the public inputs, in the order
  the circuit allocated them.

Example:
    pk, vk = setup(MultiplyCircuit())
    proof = prove(pk, MultiplyCircuit(a, b))
    assert verify(vk, [a * b], proof)
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any

import galois

from zkcircuit.constraints.circuit import generate_constraints
from zkcircuit.constraints.errors import MalformedVerifyingKey, Unsatisfiable
from zkcircuit.constraints.system import SynthesisMode
from zkcircuit.primitives.field import random_element, random_nonzero, to_field
from zkcircuit.protocol.config import DEFAULT_CONFIG, BackendConfig
from zkcircuit.protocol.curve import PairingCurve, get_curve
from zkcircuit.protocol.qap import evaluate_at, poly_coefficients, r1cs_to_qap, witness_map

logger = logging.getLogger(__name__)

# --- Type Aliases ---
G1Point = Any
G2Point = Any


# --- Keys and Proof ---

@dataclass
class VerifyingKey:
    """Public verification parameters.

    Attributes:
        curve: Curve the key lives on
        alpha_g1, beta_g2, gamma_g2, delta_g2: Fixed group elements
        gamma_abc_g1: One element per instance column (constant one first)
    """
    curve: PairingCurve
    alpha_g1: G1Point
    beta_g2: G2Point
    gamma_g2: G2Point
    delta_g2: G2Point
    gamma_abc_g1: list[G1Point] = field(default_factory=list)

    @property
    def num_public_inputs(self) -> int:
        return len(self.gamma_abc_g1) - 1


@dataclass
class PreparedVerifyingKey:
    """Verifying key with e(alpha, beta) precomputed."""
    vk: VerifyingKey
    alpha_g1_beta_g2: Any


@dataclass
class ProvingKey:
    """Prover parameters.

    Attributes:
        vk: Matching verifying key
        beta_g1, delta_g1: Fixed G1 elements
        a_query: u_i(tau) * G1 for every column
        b_g1_query, b_g2_query: v_i(tau) in G1 and G2 for every column
        h_query: tau^j * t(tau) / delta * G1 for j < domain_size - 1
        l_query: (beta u_i + alpha v_i + w_i)(tau) / delta * G1 per witness column
        num_instance_variables, num_witness_variables, num_constraints: Circuit
            shape the key was generated for
    """
    vk: VerifyingKey
    beta_g1: G1Point
    delta_g1: G1Point
    a_query: list[G1Point]
    b_g1_query: list[G1Point]
    b_g2_query: list[G2Point]
    h_query: list[G1Point]
    l_query: list[G1Point]
    num_instance_variables: int
    num_witness_variables: int
    num_constraints: int

    @property
    def curve(self) -> PairingCurve:
        return self.vk.curve


@dataclass
class Proof:
    a: G1Point
    b: G2Point
    c: G1Point


# --- Helpers ---

def _resolve_curve(curve: PairingCurve | str | None, config: BackendConfig | None) -> PairingCurve:
    if isinstance(curve, PairingCurve):
        return curve
    if curve is not None:
        return get_curve(curve)
    return get_curve((config or DEFAULT_CONFIG).curve)


def _sample_tau(qap, curve: PairingCurve, rng: random.Random | None) -> galois.FieldArray:
    # tau must avoid the domain, otherwise t(tau) = 0 and the key is degenerate.
    while True:
        tau = random_nonzero(curve.field, rng)
        if qap.t(tau) != 0:
            return tau


# --- Main Entry Points ---

def setup(
    circuit,
    rng: random.Random | None = None,
    curve: PairingCurve | str | None = None,
    config: BackendConfig | None = None,
) -> tuple[ProvingKey, VerifyingKey]:
    """Generate proving and verifying keys for the shape of ``circuit``.

    The circuit's private values are ignored (they may all be None).

    Args:
        circuit: Object implementing ``synthesize(cs)``
        rng: Source of toxic waste; defaults to the system CSPRNG
        curve: Curve or curve name; defaults to ``config.curve``
        config: Backend configuration

    Returns:
        (ProvingKey, VerifyingKey)
    """
    curve = _resolve_curve(curve, config)
    cs = generate_constraints(circuit, curve.field, SynthesisMode.SETUP)
    qap = r1cs_to_qap(cs)

    tau = _sample_tau(qap, curve, rng)
    alpha = random_nonzero(curve.field, rng)
    beta = random_nonzero(curve.field, rng)
    gamma = random_nonzero(curve.field, rng)
    delta = random_nonzero(curve.field, rng)
    gamma_inv = gamma ** -1
    delta_inv = delta ** -1

    ev = evaluate_at(qap, tau)
    k = cs.num_instance_variables
    combined = [beta * ev.u[i] + alpha * ev.v[i] + ev.w[i] for i in range(qap.num_variables)]

    vk = VerifyingKey(
        curve=curve,
        alpha_g1=curve.mul_g1(alpha),
        beta_g2=curve.mul_g2(beta),
        gamma_g2=curve.mul_g2(gamma),
        delta_g2=curve.mul_g2(delta),
        gamma_abc_g1=[curve.mul_g1(combined[i] * gamma_inv) for i in range(k)],
    )

    t_over_delta = ev.t * delta_inv
    h_query = []
    tau_power = curve.field(1)
    for _ in range(qap.domain_size - 1):
        h_query.append(curve.mul_g1(tau_power * t_over_delta))
        tau_power = tau_power * tau

    pk = ProvingKey(
        vk=vk,
        beta_g1=curve.mul_g1(beta),
        delta_g1=curve.mul_g1(delta),
        a_query=[curve.mul_g1(u) for u in ev.u],
        b_g1_query=[curve.mul_g1(v) for v in ev.v],
        b_g2_query=[curve.mul_g2(v) for v in ev.v],
        h_query=h_query,
        l_query=[curve.mul_g1(combined[i] * delta_inv) for i in range(k, qap.num_variables)],
        num_instance_variables=k,
        num_witness_variables=cs.num_witness_variables,
        num_constraints=cs.num_constraints,
    )
    logger.info(
        "Groth16 setup on %s: %d constraints, %d public inputs, %d witnesses",
        curve.name, cs.num_constraints, k - 1, cs.num_witness_variables,
    )
    return pk, vk


def prove(
    pk: ProvingKey,
    circuit,
    rng: random.Random | None = None,
    config: BackendConfig | None = None,
) -> Proof:
    """Prove that ``circuit``'s private values satisfy its constraints.

    Args:
        pk: Proving key from ``setup`` for the same circuit shape
        circuit: Circuit instance with every private value present
        rng: Source of the blinding factors r, s
        config: Backend configuration

    Returns:
        Proof (A in G1, B in G2, C in G1)

    Raises:
        AssignmentMissing: If the circuit lacks a required value
        Unsatisfiable: If the values violate a constraint
        ValueError: If the circuit shape differs from the proving key's
    """
    config = config or DEFAULT_CONFIG
    curve = pk.curve
    cs = generate_constraints(circuit, curve.field, SynthesisMode.PROVE)

    shape = (cs.num_instance_variables, cs.num_witness_variables, cs.num_constraints)
    expected = (pk.num_instance_variables, pk.num_witness_variables, pk.num_constraints)
    if shape != expected:
        raise ValueError(f"Circuit shape {shape} does not match proving key shape {expected}")

    if config.check_satisfied:
        index = cs.which_is_unsatisfied()
        if index is not None:
            raise Unsatisfiable(index, cs.constraints[index].label)

    qap = r1cs_to_qap(cs)
    z = cs.full_assignment()
    h = poly_coefficients(witness_map(qap, z), qap.domain_size - 1)
    witness = z[cs.num_instance_variables:]
    # Private values are no longer needed once z and h are computed.
    cs.clear_assignment()

    r = random_element(curve.field, rng)
    s = random_element(curve.field, rng)

    a = curve.add(curve.msm(pk.vk.alpha_g1, pk.a_query, z), curve.mul(pk.delta_g1, r))
    b_g2 = curve.add(curve.msm(pk.vk.beta_g2, pk.b_g2_query, z), curve.mul(pk.vk.delta_g2, s))
    b_g1 = curve.add(curve.msm(pk.beta_g1, pk.b_g1_query, z), curve.mul(pk.delta_g1, s))

    c = curve.msm(curve.zero_g1, pk.l_query, witness)
    c = curve.msm(c, pk.h_query, h)
    c = curve.add(c, curve.mul(a, s))
    c = curve.add(c, curve.mul(b_g1, r))
    c = curve.add(c, curve.neg(curve.mul(pk.delta_g1, r * s)))

    logger.info("Groth16 proof generated on %s (%d constraints)", curve.name, pk.num_constraints)
    return Proof(a=a, b=b_g2, c=c)


def prepare_verifying_key(vk: VerifyingKey) -> PreparedVerifyingKey:
    """Precompute the fixed pairing e(alpha, beta)."""
    return PreparedVerifyingKey(vk=vk, alpha_g1_beta_g2=vk.curve.pairing(vk.beta_g2, vk.alpha_g1))


def prepare_inputs(vk: VerifyingKey, public_inputs) -> G1Point:
    """Combine public inputs into IC = gamma_abc[0] + sum x_i * gamma_abc[i + 1].

    Raises:
        MalformedVerifyingKey: If the number of inputs does not match the key
    """
    if len(public_inputs) != vk.num_public_inputs:
        raise MalformedVerifyingKey(
            f"Expected {vk.num_public_inputs} public inputs, got {len(public_inputs)}"
        )
    curve = vk.curve
    scalars = [to_field(curve.field, x) for x in public_inputs]
    return curve.msm(vk.gamma_abc_g1[0], vk.gamma_abc_g1[1:], scalars)


def verify_proof(pvk: PreparedVerifyingKey, public_inputs, proof: Proof) -> bool:
    """Check e(A, B) == e(alpha, beta) * e(IC, gamma) * e(C, delta)."""
    vk = pvk.vk
    curve = vk.curve
    ic = prepare_inputs(vk, public_inputs)
    lhs = curve.pairing(proof.b, proof.a)
    rhs = pvk.alpha_g1_beta_g2 * curve.pairing(vk.gamma_g2, ic) * curve.pairing(vk.delta_g2, proof.c)
    ok = lhs == rhs
    logger.info("Groth16 verification on %s: %s", curve.name, "accepted" if ok else "rejected")
    return ok


def verify(vk: VerifyingKey, public_inputs, proof: Proof) -> bool:
    """Verify ``proof`` against public inputs given in allocation order."""
    return verify_proof(prepare_verifying_key(vk), public_inputs, proof)
