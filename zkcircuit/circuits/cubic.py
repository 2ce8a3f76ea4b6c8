"""Cubic circuit: prove knowledge of x with x^3 + x + 5 = out for public out.

Flattened into three rank-1 constraints:
    x * x = x2
    x2 * x = x3
    (x3 + x + 5) * 1 = out
The last row uses the constant-one variable for the affine term.
"""

from zkcircuit.constraints.circuit import ConstraintSynthesizer
from zkcircuit.constraints.errors import require_value
from zkcircuit.constraints.system import ConstraintSystem

CONSTANT_TERM = 5


class CubicCircuit(ConstraintSynthesizer):

    def __init__(self, x=None):
        self.x = x

    def _x(self):
        return require_value(self.x, "x")

    def output(self):
        x = self._x()
        return x * x * x + x + CONSTANT_TERM

    def synthesize(self, cs: ConstraintSystem) -> None:
        one = cs.one()
        x = cs.allocate_witness(self._x, label="x")
        x2 = cs.allocate_witness(lambda: self._x() * self._x(), label="x^2")
        x3 = cs.allocate_witness(lambda: self._x() * self._x() * self._x(), label="x^3")
        out = cs.allocate_public_input(self.output, label="out")

        cs.enforce(x, x, x2, label="x * x = x^2")
        cs.enforce(x2, x, x3, label="x^2 * x = x^3")
        cs.enforce(x3 + x + CONSTANT_TERM * one, one, out, label="x^3 + x + 5 = out")
