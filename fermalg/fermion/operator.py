"""Sums of fermionic operator products."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from ..config import get_config
from ..fock import ERROR_FOCK_STATE, FockState
from ..logging import get_logger
from .term import Term, prune_terms, reduce_terms

logger = get_logger(__name__)


@dataclass(eq=False)
class Operator:
    """
    Sum of :class:`Term` objects:

        O = sum_k Term_k.

    The operator owns its terms. Terms passed to the constructor are copied,
    so no term is shared between two operators; terms generated internally
    (contractions, commutator halves) are moved in without copying. Order of
    the terms is stable but carries no meaning.

    Example
    -------
    >>> op = Operator.from_terms([Term(2, [False, True], [0, 0])])
    >>> op.make_normal_order()
    >>> len(op)  # 1 - c^+_0 c_0
    2
    """

    terms: List[Term] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.terms = [term.copy() for term in self.terms]

    @classmethod
    def from_terms(cls, terms: Iterable[Term]) -> "Operator":
        """Create an operator from an iterable of terms (copied)."""
        return cls(terms=list(terms))

    @classmethod
    def _adopt(cls, terms: List[Term]) -> "Operator":
        op = cls()
        op.terms = terms
        return op

    def copy(self) -> "Operator":
        return Operator(terms=self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def is_zero(self) -> bool:
        """Return True if the operator has no terms left."""
        return len(self.terms) == 0

    def dagger(self) -> "Operator":
        """Return the Hermitian conjugate."""
        return Operator._adopt([term.dagger() for term in self.terms])

    # ------------------------------------------------------------------
    # Action on basis states
    # ------------------------------------------------------------------

    def act_right(self, ket: FockState) -> Dict[FockState, complex]:
        """
        Apply the operator to a basis state.

        Returns
        -------
        Dict[FockState, complex]
            Resulting basis states mapped to their accumulated coefficients.
            Forbidden results and coefficients with magnitude at or below the
            configured epsilon are left out, as are states whose
            contributions cancel.
        """
        epsilon = get_config().epsilon
        result: Dict[FockState, complex] = {}
        for term in self.terms:
            bra, melem = term.act_right(ket)
            if bra == ERROR_FOCK_STATE or abs(melem) <= epsilon:
                continue
            result[bra] = result.get(bra, 0j) + melem
        return {bra: melem for bra, melem in result.items() if abs(melem) > epsilon}

    def get_matrix_element(self, bra: FockState, ket: FockState) -> complex:
        """Return ``<bra| O |ket>``."""
        return self.act_right(ket).get(bra, 0j)

    # ------------------------------------------------------------------
    # Canonical form
    # ------------------------------------------------------------------

    def make_normal_order(self) -> None:
        """
        Normal-order every term in place.

        Contraction terms are appended to the operator, which is then reduced
        and pruned with the configured default precision.
        """
        contractions: List[Term] = []
        for term in self.terms:
            contractions.extend(term.make_normal_order())
        logger.debug(
            "Normal ordering %d terms produced %d contractions",
            len(self.terms),
            len(contractions),
        )
        self.terms.extend(contractions)
        self.reduce()
        self.prune()

    def reduce(self) -> None:
        """Merge terms with identical operator strings."""
        reduce_terms(self.terms)

    def prune(self, precision: Optional[float] = None) -> None:
        """Drop terms with ``abs(value) < precision`` (configured default)."""
        prune_terms(self.terms, precision)

    # ------------------------------------------------------------------
    # Commutators
    # ------------------------------------------------------------------

    def get_commutator(self, rhs: "Operator") -> "Operator":
        """
        Return ``[self, rhs]`` as a new operator.

        The result holds every pairwise term commutator and is not
        simplified; call :meth:`make_normal_order` to canonicalize it.
        """
        output: List[Term] = []
        for lhs_term in self.terms:
            for rhs_term in rhs.terms:
                output.extend(lhs_term.get_commutator(rhs_term))
        return Operator._adopt(output)

    def commutes(self, rhs: "Operator") -> bool:
        """
        Check whether the operators commute.

        The commutator is normal-ordered, reduced and pruned; the operators
        commute when no term survives.
        """
        commutator = self.get_commutator(rhs)
        commutator.make_normal_order()
        if not commutator.is_zero():
            logger.debug("Commutator has %d surviving terms", len(commutator))
        return commutator.is_zero()

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: "Operator") -> "Operator":
        if not isinstance(other, Operator):
            return NotImplemented
        return Operator(terms=self.terms + other.terms)

    def __neg__(self) -> "Operator":
        return Operator._adopt([-term for term in self.terms])

    def __sub__(self, other: "Operator") -> "Operator":
        if not isinstance(other, Operator):
            return NotImplemented
        return self + (-other)

    def __rmul__(self, scalar: complex) -> "Operator":
        try:
            c = complex(scalar)
        except (TypeError, ValueError) as exc:
            raise TypeError("Operator can only be multiplied by scalars.") from exc
        scaled = self.copy()
        for term in scaled.terms:
            term.value *= c
        return scaled

    def __mul__(self, scalar: complex) -> "Operator":
        return self.__rmul__(scalar)

    def __matmul__(self, other: "Operator") -> "Operator":
        """Operator product; products that vanish by construction are dropped."""
        if not isinstance(other, Operator):
            return NotImplemented
        output: List[Term] = []
        for lhs_term in self.terms:
            for rhs_term in other.terms:
                outcome = lhs_term.product(rhs_term)
                if outcome.ok:
                    output.append(outcome.term)
        return Operator._adopt(output)

    def __str__(self) -> str:
        if not self.terms:
            return "0"
        return " + ".join(str(term) for term in self.terms)


__all__ = ["Operator"]
