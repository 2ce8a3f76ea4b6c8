"""Polynomial operations over an evaluation domain.

The QAP reduction places constraint i at domain point ``i + 1``. These helpers
cover the three things the backend needs from that domain: the vanishing
polynomial, interpolation from evaluations, and the Lagrange basis evaluated
at a single point.
"""

import galois

from zkcircuit.primitives.field import FieldType, batch_inverse


def evaluation_domain(field: FieldType, size: int) -> galois.FieldArray:
    """Domain points 1, 2, ..., size."""
    if size < 1:
        raise ValueError(f"Domain size must be positive, got {size}")
    return field([i + 1 for i in range(size)])


def vanishing_poly(domain: galois.FieldArray) -> galois.Poly:
    """t(X) = prod(X - x_j) over the domain."""
    return galois.Poly.Roots(domain)


def interpolate(domain: galois.FieldArray, values: galois.FieldArray) -> galois.Poly:
    """Unique polynomial of degree < len(domain) through (domain[j], values[j])."""
    if len(domain) != len(values):
        raise ValueError(f"Dimension mismatch: {len(domain)} points vs {len(values)} values")
    return galois.lagrange_poly(domain, values)


def lagrange_coefficients_at(domain: galois.FieldArray, tau: galois.FieldArray) -> galois.FieldArray:
    """Evaluate every Lagrange basis polynomial of ``domain`` at ``tau``.

    L_j(tau) = t(tau) / ((tau - x_j) * prod_{k != j} (x_j - x_k))

    Args:
        domain: Distinct evaluation points
        tau: Evaluation point

    Returns:
        Array with result[j] = L_j(tau)
    """
    field = type(domain)
    n = len(domain)
    for j in range(n):
        if domain[j] == tau:
            result = field.Zeros(n)
            result[j] = 1
            return result

    t_at_tau = field(1)
    for j in range(n):
        t_at_tau = t_at_tau * (tau - domain[j])

    denominators = field.Zeros(n)
    for j in range(n):
        d = tau - domain[j]
        for k in range(n):
            if k != j:
                d = d * (domain[j] - domain[k])
        denominators[j] = d

    return batch_inverse(denominators) * t_at_tau
