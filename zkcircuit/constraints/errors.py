"""Synthesis error taxonomy.

All failures raised while building or proving a constraint system derive from
``SynthesisError`` so that a driver can catch the whole family in one place.
"""


class SynthesisError(Exception):
    """Base class for constraint synthesis failures."""


class AssignmentMissing(SynthesisError):
    """A value was required (prove mode) but the circuit does not have it."""

    def __init__(self, what: str | None = None):
        self.what = what
        message = "assignment missing" if what is None else f"assignment missing for {what}"
        super().__init__(message)


class MalformedLinearCombination(SynthesisError):
    """A linear combination references a variable this system did not allocate."""


class Unsatisfiable(SynthesisError):
    """The assignment violates a constraint."""

    def __init__(self, index: int, label: str | None = None):
        self.index = index
        self.label = label
        where = f"constraint {index}" if label is None else f"constraint {index} ({label})"
        super().__init__(f"{where} is not satisfied")


class MalformedVerifyingKey(SynthesisError):
    """The verifying key does not match the shape of the supplied public inputs."""


class InvalidState(SynthesisError):
    """A constraint system was used outside of its lifecycle."""


def require_value(value, what: str | None = None):
    """Return ``value`` or raise ``AssignmentMissing`` if it is absent.

    This is the single way circuits should unwrap optional private data inside
    value thunks, so that setup mode (no values) and prove mode share one path.
    """
    if value is None:
        raise AssignmentMissing(what)
    return value
