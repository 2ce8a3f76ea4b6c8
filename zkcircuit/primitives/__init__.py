"""Primitives - field construction and polynomial helpers."""

from zkcircuit.primitives.field import (
    BLS12_381_FR,
    BN254_FR,
    FIELDS,
    batch_inverse,
    get_field,
    random_element,
    random_nonzero,
    to_field,
)
from zkcircuit.primitives.polynomial import (
    interpolate,
    lagrange_coefficients_at,
    vanishing_poly,
)

__all__ = [
    # Field
    "BN254_FR",
    "BLS12_381_FR",
    "FIELDS",
    "get_field",
    "to_field",
    "random_element",
    "random_nonzero",
    "batch_inverse",
    # Polynomials
    "interpolate",
    "lagrange_coefficients_at",
    "vanishing_poly",
]
