"""
Failure taxonomy of the fermionic operator algebra.

Construction errors are raised as exceptions. Where a failure is an expected
path (one half of a commutator vanishing, a contraction term that is zero)
the algebra works with :class:`TermOutcome` instead, so callers can inspect
the failure and carry on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .term import Term


class FermionAlgebraError(ValueError):
    """Base class for errors raised by the operator algebra."""


class WrongLabelError(FermionAlgebraError):
    """Sequence and index labels do not describe ``n_ops`` operators."""


class WrongOperatorSequenceError(FermionAlgebraError):
    """An operator pattern cannot be reached or violates a precondition."""


class VanishingTermError(WrongOperatorSequenceError):
    """The operator product is identically zero by Pauli exclusion."""


class TermStatus(Enum):
    """Outcome of building a term."""

    OK = "ok"
    WRONG_LABELS = "wrong_labels"
    VANISHING = "vanishing"


@dataclass
class TermOutcome:
    """
    Result of an operation that may legitimately fail to produce a term.

    Attributes:
        status: Enumeration describing the outcome.
        term: The produced term, or ``None`` unless ``status`` is ``OK``.
        message: Human-readable explanation of a failure.
    """

    status: TermStatus
    term: Optional["Term"] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is TermStatus.OK


__all__ = [
    "FermionAlgebraError",
    "WrongLabelError",
    "WrongOperatorSequenceError",
    "VanishingTermError",
    "TermStatus",
    "TermOutcome",
]
