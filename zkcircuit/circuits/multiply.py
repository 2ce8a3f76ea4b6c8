"""Multiplication circuit: prove knowledge of a, b with a * b = c for public c.

Allocates two witnesses and one public input, and enforces one constraint.
It is the smallest circuit that touches every part of the synthesis contract.
"""

from zkcircuit.constraints.circuit import ConstraintSynthesizer
from zkcircuit.constraints.errors import require_value
from zkcircuit.constraints.system import ConstraintSystem


class MultiplyCircuit(ConstraintSynthesizer):
    """a * b = c with a, b private and c public.

    Args:
        a: Private factor, or None when the circuit is only used for setup
        b: Private factor, or None when the circuit is only used for setup
    """

    def __init__(self, a=None, b=None):
        self.a = a
        self.b = b

    def product(self):
        """c = a * b; raises AssignmentMissing if either factor is absent."""
        return require_value(self.a, "a") * require_value(self.b, "b")

    def synthesize(self, cs: ConstraintSystem) -> None:
        a = cs.allocate_witness(lambda: require_value(self.a, "a"), label="a")
        b = cs.allocate_witness(lambda: require_value(self.b, "b"), label="b")
        c = cs.allocate_public_input(self.product, label="c")

        cs.enforce(a, b, c, label="a * b = c")
