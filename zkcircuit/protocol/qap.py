"""R1CS to QAP reduction.

Each constraint row j becomes the domain point x_j = j + 1. Column i of the
A, B, C matrices becomes the polynomials u_i, v_i, w_i interpolating that
column over the domain. An assignment z satisfies the R1CS exactly when

    (sum z_i u_i) * (sum z_i v_i) - (sum z_i w_i) = h * t

for some polynomial h, where t is the vanishing polynomial of the domain.

One extra row per instance column is appended to A (``x_i * 0 = 0``). These
rows keep the public-input polynomials linearly independent, so a public input
that appears in no constraint is still bound by the proof.
"""

from dataclasses import dataclass

import galois

from zkcircuit.constraints.errors import Unsatisfiable
from zkcircuit.constraints.system import ConstraintSystem, R1CSMatrices
from zkcircuit.primitives.polynomial import (
    evaluation_domain,
    interpolate,
    lagrange_coefficients_at,
    vanishing_poly,
)


@dataclass
class QAP:
    """Quadratic arithmetic program derived from a constraint system.

    Attributes:
        matrices: Constraint matrices including the appended input rows
        domain: Evaluation points, one per row
        t: Vanishing polynomial of the domain
        num_constraints: Rows coming from the circuit (without input rows)
    """
    matrices: R1CSMatrices
    domain: galois.FieldArray
    t: galois.Poly
    num_constraints: int

    @property
    def domain_size(self) -> int:
        return len(self.domain)

    @property
    def num_variables(self) -> int:
        return self.matrices.num_variables


@dataclass
class QAPEvaluation:
    """All QAP polynomials evaluated at one point (used by setup)."""
    u: galois.FieldArray
    v: galois.FieldArray
    w: galois.FieldArray
    t: galois.FieldArray


def _with_input_rows(matrices: R1CSMatrices) -> R1CSMatrices:
    m, n = matrices.a.shape
    k = matrices.num_instance_variables
    field = type(matrices.a)
    mats = []
    for original in (matrices.a, matrices.b, matrices.c):
        extended = field.Zeros((m + k, n))
        if m:
            extended[:m] = original
        mats.append(extended)
    for i in range(k):
        mats[0][m + i, i] = 1
    return R1CSMatrices(mats[0], mats[1], mats[2], k, matrices.num_witness_variables)


def r1cs_to_qap(cs: ConstraintSystem) -> QAP:
    """Build the QAP for a synthesized constraint system."""
    matrices = _with_input_rows(cs.to_matrices())
    domain = evaluation_domain(cs.field, matrices.num_constraints)
    return QAP(matrices, domain, vanishing_poly(domain), cs.num_constraints)


def _weighted_columns(weights: galois.FieldArray, mat: galois.FieldArray) -> galois.FieldArray:
    """result[i] = sum_j weights[j] * mat[j, i]."""
    field = type(mat)
    rows, cols = mat.shape
    result = field.Zeros(cols)
    for j in range(rows):
        for i in range(cols):
            if mat[j, i] != 0:
                result[i] += weights[j] * mat[j, i]
    return result


def _weighted_rows(mat: galois.FieldArray, z: galois.FieldArray) -> galois.FieldArray:
    """result[j] = sum_i mat[j, i] * z[i]."""
    field = type(mat)
    rows, cols = mat.shape
    result = field.Zeros(rows)
    for j in range(rows):
        for i in range(cols):
            if mat[j, i] != 0:
                result[j] += mat[j, i] * z[i]
    return result


def evaluate_at(qap: QAP, tau: galois.FieldArray) -> QAPEvaluation:
    """Evaluate u_i(tau), v_i(tau), w_i(tau) for every column and t(tau)."""
    lagrange = lagrange_coefficients_at(qap.domain, tau)
    mats = qap.matrices
    return QAPEvaluation(
        u=_weighted_columns(lagrange, mats.a),
        v=_weighted_columns(lagrange, mats.b),
        w=_weighted_columns(lagrange, mats.c),
        t=qap.t(tau),
    )


def witness_map(qap: QAP, z: galois.FieldArray) -> galois.Poly:
    """Compute the quotient h = (A(X) * B(X) - C(X)) / t(X) for assignment ``z``.

    Args:
        qap: Program from ``r1cs_to_qap``
        z: Full assignment in column order [one, instance..., witness...]

    Returns:
        h, of degree at most domain_size - 2

    Raises:
        Unsatisfiable: If some row does not hold, reporting the first one
    """
    if len(z) != qap.num_variables:
        raise ValueError(f"Dimension mismatch: {len(z)} values vs {qap.num_variables} columns")
    mats = qap.matrices
    a_evals = _weighted_rows(mats.a, z)
    b_evals = _weighted_rows(mats.b, z)
    c_evals = _weighted_rows(mats.c, z)

    # t divides A*B - C exactly when every row holds on the domain.
    for j in range(qap.domain_size):
        if a_evals[j] * b_evals[j] != c_evals[j]:
            raise Unsatisfiable(j)

    a_poly = interpolate(qap.domain, a_evals)
    b_poly = interpolate(qap.domain, b_evals)
    c_poly = interpolate(qap.domain, c_evals)

    return (a_poly * b_poly - c_poly) // qap.t


def poly_coefficients(poly: galois.Poly, length: int) -> galois.FieldArray:
    """Ascending coefficients of ``poly`` zero-padded to ``length``."""
    field = poly.field
    if poly == galois.Poly.Zero(field):
        return field.Zeros(length)
    if poly.degree >= length:
        raise ValueError(f"Polynomial of degree {poly.degree} does not fit in {length} coefficients")
    coeffs = field.Zeros(length)
    ascending = poly.coeffs[::-1]
    coeffs[: len(ascending)] = ascending
    return coeffs
