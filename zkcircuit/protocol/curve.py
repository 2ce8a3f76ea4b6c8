"""Pairing-friendly curves for the proving backend.

Each PairingCurve bundles py_ecc's optimized group operations with the galois
scalar field used for synthesis. Synthesis never touches group elements; only
the backend does.
"""

from dataclasses import dataclass
from types import ModuleType

from py_ecc import optimized_bls12_381, optimized_bn128

from zkcircuit.primitives.field import BLS12_381_FR, BN254_FR, FieldType


@dataclass(frozen=True)
class PairingCurve:
    """Group operations of one curve plus its scalar field.

    Points are py_ecc projective tuples; compare them with ``eq`` or
    ``normalize`` rather than ``==``.
    """
    name: str
    field: FieldType
    backend: ModuleType

    def __post_init__(self):
        if self.field.order != self.backend.curve_order:
            raise ValueError(f"Scalar field of {self.name} does not match its curve order")

    @property
    def g1(self):
        return self.backend.G1

    @property
    def g2(self):
        return self.backend.G2

    @property
    def zero_g1(self):
        return self.backend.Z1

    @property
    def zero_g2(self):
        return self.backend.Z2

    def add(self, p, q):
        return self.backend.add(p, q)

    def neg(self, p):
        return self.backend.neg(p)

    def mul(self, p, scalar):
        """Scalar multiplication; ``scalar`` may be an int or field element."""
        return self.backend.multiply(p, int(scalar) % self.backend.curve_order)

    def mul_g1(self, scalar):
        return self.mul(self.g1, scalar)

    def mul_g2(self, scalar):
        return self.mul(self.g2, scalar)

    def msm(self, zero, points, scalars):
        """Multi-scalar multiplication sum(scalar_i * point_i), starting from ``zero``."""
        if len(points) != len(scalars):
            raise ValueError(f"Dimension mismatch: {len(points)} points vs {len(scalars)} scalars")
        acc = zero
        for point, scalar in zip(points, scalars):
            if int(scalar) != 0:
                acc = self.add(acc, self.mul(point, scalar))
        return acc

    def pairing(self, q_g2, p_g1):
        return self.backend.pairing(q_g2, p_g1)

    def eq(self, p, q) -> bool:
        return self.backend.eq(p, q)

    def normalize(self, p):
        return self.backend.normalize(p)


BN254 = PairingCurve("bn254", BN254_FR, optimized_bn128)
BLS12_381 = PairingCurve("bls12_381", BLS12_381_FR, optimized_bls12_381)

CURVES: dict[str, PairingCurve] = {
    "bn254": BN254,
    "bls12_381": BLS12_381,
}


def get_curve(name: str) -> PairingCurve:
    """Look up a curve by name."""
    if name not in CURVES:
        raise KeyError(f"Unknown curve '{name}'. Available: {list(CURVES.keys())}")
    return CURVES[name]
