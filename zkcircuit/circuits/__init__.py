"""Example circuits built on the synthesis contract."""

from zkcircuit.circuits.cubic import CubicCircuit
from zkcircuit.circuits.multiply import MultiplyCircuit

# Registry mapping circuit names to classes
CIRCUIT_REGISTRY = {
    "multiply": MultiplyCircuit,
    "cubic": CubicCircuit,
}


def get_circuit(name: str, **inputs):
    """Instantiate a registered circuit.

    Args:
        name: Registry key (e.g., 'multiply', 'cubic')
        **inputs: Private inputs; omit them to get a setup-only instance

    Raises:
        KeyError: If no circuit is registered under ``name``
    """
    if name not in CIRCUIT_REGISTRY:
        raise KeyError(
            f"No circuit named '{name}'. "
            f"Available: {list(CIRCUIT_REGISTRY.keys())}"
        )
    return CIRCUIT_REGISTRY[name](**inputs)


__all__ = [
    "MultiplyCircuit",
    "CubicCircuit",
    "CIRCUIT_REGISTRY",
    "get_circuit",
]
