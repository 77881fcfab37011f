"""Fermionic operator algebra: terms, operators and their failure modes."""

from .errors import (
    FermionAlgebraError,
    TermOutcome,
    TermStatus,
    VanishingTermError,
    WrongLabelError,
    WrongOperatorSequenceError,
)
from .operator import Operator
from .term import Term, prune_terms, reduce_terms, terms_equal

__all__ = [
    "Term",
    "Operator",
    "reduce_terms",
    "prune_terms",
    "terms_equal",
    "FermionAlgebraError",
    "WrongLabelError",
    "WrongOperatorSequenceError",
    "VanishingTermError",
    "TermStatus",
    "TermOutcome",
]
