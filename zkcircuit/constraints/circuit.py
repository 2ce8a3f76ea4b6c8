"""Circuit synthesis contract.

A circuit describes a computation by allocating variables and enforcing
constraints on a ConstraintSystem it is handed. The same circuit description
runs in setup mode (no private values) and prove mode (all values present).

Example:
    class Square(ConstraintSynthesizer):
        def __init__(self, x=None):
            self.x = x

        def synthesize(self, cs):
            x = cs.allocate_witness(lambda: require_value(self.x, "x"))
            y = cs.allocate_public_input(lambda: require_value(self.x, "x") ** 2)
            cs.enforce(x, x, y)
"""

import logging
from abc import ABC, abstractmethod

from zkcircuit.constraints.system import ConstraintSystem, SynthesisMode
from zkcircuit.primitives.field import FieldType

logger = logging.getLogger(__name__)


class ConstraintSynthesizer(ABC):
    """Interface implemented by every circuit.

    The driver only calls ``synthesize``; any object with that method can be
    synthesized, the base class just names the contract.
    """

    @abstractmethod
    def synthesize(self, cs: ConstraintSystem) -> None:
        """Allocate variables and enforce constraints on ``cs``.

        Raises:
            SynthesisError: AssignmentMissing when a required value is absent
                in prove mode, or any backend-specific subclass
        """
        pass


def synthesize(circuit, cs: ConstraintSystem) -> ConstraintSystem:
    """Run one synthesis pass of ``circuit`` into ``cs``.

    On success the system is frozen (SYNTHESIZED). On failure it is marked
    FAILED and the exception propagates; a failed system must be discarded.
    """
    cs.begin()
    name = type(circuit).__name__
    try:
        circuit.synthesize(cs)
    except Exception:
        cs.fail()
        logger.debug("Synthesis of %s failed in %s mode", name, cs.mode.value)
        raise
    cs.finalize()
    logger.debug(
        "Synthesized %s in %s mode: %d instance, %d witness, %d constraints",
        name, cs.mode.value, cs.num_instance_variables, cs.num_witness_variables, cs.num_constraints,
    )
    return cs


def generate_constraints(circuit, field: FieldType, mode: SynthesisMode = SynthesisMode.PROVE) -> ConstraintSystem:
    """Synthesize ``circuit`` into a fresh constraint system over ``field``."""
    return synthesize(circuit, ConstraintSystem(field, mode))
