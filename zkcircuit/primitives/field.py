"""Scalar fields of pairing-friendly curves, built with galois.

The constraint system is generic over the field: every API takes the galois
``FieldArray`` subclass as an argument. This module only provides the two
scalar fields the proving backend knows how to pair over, plus helpers that
work with any galois prime field.

Building a galois prime field normally factors p - 1 to find a primitive
element. For 254/255-bit scalar fields that factorization is expensive, so the
known multiplicative generators are passed in and verification is skipped.
"""

import numbers
import random
from typing import Type

import galois

# --- Field Construction ---

BN254_FR_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
BN254_FR_GENERATOR = 5

BLS12_381_FR_MODULUS = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
BLS12_381_FR_GENERATOR = 7

BN254_FR = galois.GF(BN254_FR_MODULUS, primitive_element=BN254_FR_GENERATOR, verify=False)
"""Scalar field of the BN254 (alt_bn128) curve."""

BLS12_381_FR = galois.GF(BLS12_381_FR_MODULUS, primitive_element=BLS12_381_FR_GENERATOR, verify=False)
"""Scalar field of the BLS12-381 curve."""

FieldType = Type[galois.FieldArray]

FIELDS: dict[str, FieldType] = {
    "bn254": BN254_FR,
    "bls12_381": BLS12_381_FR,
}


def get_field(name: str) -> FieldType:
    """Look up a scalar field by curve name."""
    if name not in FIELDS:
        raise KeyError(f"Unknown field '{name}'. Available: {list(FIELDS.keys())}")
    return FIELDS[name]


# --- Element Helpers ---

def to_field(field: FieldType, value) -> galois.FieldArray:
    """Coerce an integer (possibly negative or >= p) or field scalar into ``field``.

    Raises:
        TypeError: If ``value`` belongs to another field or is not an integer
    """
    if isinstance(value, galois.FieldArray):
        if type(value) is not field:
            raise TypeError(f"Element of {type(value).name} used where {field.name} was expected")
        return value
    if not isinstance(value, numbers.Integral):
        raise TypeError(f"Cannot convert {type(value).__name__} value {value!r} to an element of {field.name}")
    return field(int(value) % field.order)


def random_element(field: FieldType, rng: random.Random | None = None) -> galois.FieldArray:
    """Sample a uniformly random element of ``field``.

    Sampling goes through Python integers since the scalar fields exceed the
    range of numpy's integer generators.
    """
    rng = rng or random.SystemRandom()
    return field(rng.randrange(field.order))


def random_nonzero(field: FieldType, rng: random.Random | None = None) -> galois.FieldArray:
    """Sample a uniformly random element of ``field`` excluding zero."""
    rng = rng or random.SystemRandom()
    return field(rng.randrange(1, field.order))


# --- Batch Inversion ---

def batch_inverse(values: galois.FieldArray) -> galois.FieldArray:
    """Invert every element of ``values`` with a single field inversion.

    Montgomery's trick: keep the product of everything before position i,
    invert the full product once, then walk back multiplying the two.

    Args:
        values: Field elements to invert

    Returns:
        Array with result[i] = 1 / values[i]

    Raises:
        ZeroDivisionError: If any element is zero
    """
    field = type(values)
    n = len(values)
    before = field.Ones(n)
    running = field(1)
    for i in range(n):
        if values[i] == 0:
            raise ZeroDivisionError(f"Cannot invert zero at index {i}")
        before[i] = running
        running = running * values[i]

    inverse = running ** -1
    result = field.Zeros(n)
    for i in reversed(range(n)):
        result[i] = inverse * before[i]
        inverse = inverse * values[i]
    return result
