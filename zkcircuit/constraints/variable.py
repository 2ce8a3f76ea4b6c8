"""Variables and linear combinations.

A ``Variable`` is a handle into one constraint system. A ``LinearCombination``
is an ordered sparse map from variables to field coefficients representing
``sum(coeff_i * var_i)``.

Example:
    a = cs.allocate_witness(lambda: a_val)
    b = cs.allocate_witness(lambda: b_val)
    lc = 3 * a + b - 5 * cs.one()
"""

import numbers
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Callable, Iterator, Union

import galois

from zkcircuit.primitives.field import FieldType, to_field


class VariableKind(Enum):
    """Role of a variable, fixed at allocation time."""

    ONE = "one"
    INSTANCE = "instance"
    WITNESS = "witness"


@dataclass(frozen=True)
class Variable:
    """Handle identifying a slot in a constraint system.

    Attributes:
        kind: Role of the variable (constant one, public input, or witness)
        index: Position within its role. Instance indices start at 1 because
            instance slot 0 is the constant one.
        owner: Token of the constraint system that issued the handle
        field: Field the slot takes values in (not part of identity)
    """
    kind: VariableKind
    index: int
    owner: int
    field: FieldType = dataclass_field(compare=False, repr=False)

    __array_ufunc__ = None

    @property
    def is_public(self) -> bool:
        return self.kind is not VariableKind.WITNESS

    def to_lc(self) -> "LinearCombination":
        return LinearCombination(self.field, [(self, 1)])

    def __add__(self, other):
        return self.to_lc() + other

    def __radd__(self, other):
        return self.to_lc() + other

    def __sub__(self, other):
        return self.to_lc() - other

    def __rsub__(self, other):
        return -self.to_lc() + other

    def __mul__(self, scalar):
        return self.to_lc() * scalar

    def __rmul__(self, scalar):
        return self.to_lc() * scalar

    def __neg__(self):
        return -self.to_lc()

    def __str__(self) -> str:
        return f"{self.kind.value}[{self.index}]"


Term = tuple[Variable, galois.FieldArray]


class LinearCombination:
    """Ordered map Variable -> coefficient.

    Term order is insertion order, so the same sequence of operations always
    yields the same layout. Terms whose coefficient cancels to zero are
    removed.
    """

    __slots__ = ("field", "_terms")

    # Keep numpy from broadcasting field scalars over a combination.
    __array_ufunc__ = None

    def __init__(self, field: FieldType, terms=None):
        self.field = field
        self._terms: dict[Variable, galois.FieldArray] = {}
        for var, coeff in terms or ():
            self._add_term(var, coeff)

    @classmethod
    def zero(cls, field: FieldType) -> "LinearCombination":
        return cls(field)

    def _add_term(self, var: Variable, coeff) -> None:
        if not isinstance(var, Variable):
            raise TypeError(f"Expected Variable, got {type(var).__name__}")
        c = to_field(self.field, coeff)
        if var in self._terms:
            total = self._terms[var] + c
            if total == 0:
                del self._terms[var]
            else:
                self._terms[var] = total
        elif c != 0:
            self._terms[var] = c

    def _coerce(self, other) -> "LinearCombination":
        if isinstance(other, Variable):
            other = other.to_lc()
        elif isinstance(other, numbers.Integral) and other == 0:
            # Start value of sum(); other constants need an explicit cs.one().
            return LinearCombination(self.field)
        if not isinstance(other, LinearCombination):
            return NotImplemented
        if other.field is not self.field:
            raise TypeError(f"Cannot combine {self.field.name} and {other.field.name} combinations")
        return other

    # --- Algebra ---

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        result = LinearCombination(self.field, self._terms.items())
        for var, coeff in other._terms.items():
            result._add_term(var, coeff)
        return result

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other + (-self)

    def __neg__(self):
        return LinearCombination(self.field, [(var, -coeff) for var, coeff in self._terms.items()])

    def __mul__(self, scalar):
        if isinstance(scalar, (LinearCombination, Variable)):
            # Products of variables are not linear; use a constraint instead.
            return NotImplemented
        c = to_field(self.field, scalar)
        return LinearCombination(self.field, [(var, coeff * c) for var, coeff in self._terms.items()])

    __rmul__ = __mul__

    # --- Inspection ---

    def __iter__(self) -> Iterator[Term]:
        return iter(self._terms.items())

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, var) -> bool:
        return var in self._terms

    def __eq__(self, other) -> bool:
        if not isinstance(other, LinearCombination):
            return NotImplemented
        return self.field is other.field and self._terms == other._terms

    def __repr__(self) -> str:
        if not self._terms:
            return "LinearCombination(0)"
        body = " + ".join(f"{int(coeff)}*{var}" for var, coeff in self._terms.items())
        return f"LinearCombination({body})"

    @property
    def variables(self) -> list[Variable]:
        return list(self._terms)

    def coefficient(self, var: Variable) -> galois.FieldArray:
        """Coefficient of ``var``, zero if absent."""
        return self._terms.get(var, self.field(0))

    def evaluate(self, value_of: Callable[[Variable], galois.FieldArray]) -> galois.FieldArray:
        """Evaluate the combination given a lookup from variable to value."""
        total = self.field(0)
        for var, coeff in self._terms.items():
            total = total + coeff * value_of(var)
        return total


LcLike = Union[LinearCombination, Variable, int, galois.FieldArray]
