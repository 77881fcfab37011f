"""Products of fermionic creation and annihilation operators.

A :class:`Term` is ``value * o_0 o_1 ... o_{N-1}`` where each ``o_k`` is a
creation (``c^+``) or annihilation (``c``) operator on mode ``indices[k]``.
Reordering a term is exact algebra: swapping two operators on different modes
flips the sign, swapping ``c`` and ``c^+`` on the same mode also produces the
contraction term of the anticommutator ``{c, c^+} = 1``. Methods that reorder
a term rewrite it in place and return those contraction terms.
"""

from __future__ import annotations

import numbers
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import get_config
from ..diagnostics.core import assert_normal_ordered, is_normal_ordered
from ..diagnostics.debug_mode import is_debug_enabled
from ..fock import ERROR_FOCK_STATE, FockState
from ..logging import get_logger
from .errors import (
    TermOutcome,
    TermStatus,
    VanishingTermError,
    WrongLabelError,
    WrongOperatorSequenceError,
)

logger = get_logger(__name__)


def _render(sequence: Sequence[bool], indices: Sequence[int]) -> str:
    return "".join(
        ("c^{+}" if created else "c") + f"_{mode}"
        for created, mode in zip(sequence, indices)
    )


def _vanishes(sequence: Sequence[bool], indices: Sequence[int]) -> bool:
    """True if two like operators on one mode meet with nothing in between
    that changes that mode's occupation."""
    n_ops = len(sequence)
    for i in range(n_ops):
        count = 1 if sequence[i] else -1
        for j in range(i + 1, n_ops):
            if indices[j] == indices[i]:
                count += 1 if sequence[j] else -1
                if count > 1 or count < -1:
                    return True
    return False


def _coerce_indices(indices: Iterable[int]) -> List[int]:
    modes = list(indices)
    non_integral = [mode for mode in modes if not isinstance(mode, numbers.Integral)]
    if non_integral:
        raise WrongLabelError(
            f"Wrong labels: mode indices must be integers, got {non_integral}"
        )
    return [int(mode) for mode in modes]


def _validate(
    n_ops: int, sequence: Sequence[bool], indices: Sequence[int]
) -> Tuple[TermStatus, str]:
    if len(sequence) != n_ops or len(indices) != n_ops:
        return TermStatus.WRONG_LABELS, (
            f"Wrong labels: expected {n_ops} operators, got "
            f"{len(sequence)} sequence entries and {len(indices)} indices"
        )
    negative = [mode for mode in indices if mode < 0]
    if negative:
        return TermStatus.WRONG_LABELS, (
            f"Wrong labels: mode indices must be >= 0, got {negative}"
        )
    if _vanishes(sequence, indices):
        return TermStatus.VANISHING, (
            f"The term {_render(sequence, indices)} vanishes"
        )
    return TermStatus.OK, ""


@dataclass(eq=False)
class Term:
    """
    Single product of fermionic ladder operators with a complex coefficient.

    Attributes
    ----------
    n_ops:
        Number of operators N.
    sequence:
        N booleans, True for creation and False for annihilation, in
        left-to-right product order.
    indices:
        N mode indices, parallel to ``sequence``.
    value:
        Complex coefficient.

    Raises
    ------
    WrongLabelError
        If ``sequence`` or ``indices`` does not have ``n_ops`` entries, or an
        index is negative.
    VanishingTermError
        If the product is identically zero (two creation or two annihilation
        operators on one mode with nothing in between that changes its
        occupation).

    Example
    -------
    >>> hop = Term(2, [True, False], [0, 1], 1.0)
    >>> str(hop)
    '(1+0j)*c^{+}_0c_1'
    """

    n_ops: int
    sequence: List[bool]
    indices: List[int]
    value: complex = 1.0

    def __post_init__(self) -> None:
        self.sequence = [bool(created) for created in self.sequence]
        self.indices = _coerce_indices(self.indices)
        self.value = complex(self.value)

        status, message = _validate(self.n_ops, self.sequence, self.indices)
        if status is TermStatus.WRONG_LABELS:
            raise WrongLabelError(message)
        if status is TermStatus.VANISHING:
            raise VanishingTermError(message)

    @classmethod
    def build(
        cls,
        n_ops: int,
        sequence: Sequence[bool],
        indices: Sequence[int],
        value: complex = 1.0,
    ) -> TermOutcome:
        """
        Build a term, reporting failure through the returned outcome.

        Returns
        -------
        TermOutcome
            ``OK`` with the new term, or ``WRONG_LABELS`` / ``VANISHING``
            with a message.
        """
        sequence = [bool(created) for created in sequence]
        try:
            indices = _coerce_indices(indices)
        except WrongLabelError as exc:
            return TermOutcome(status=TermStatus.WRONG_LABELS, message=str(exc))
        status, message = _validate(n_ops, sequence, indices)
        if status is not TermStatus.OK:
            return TermOutcome(status=status, message=message)
        return TermOutcome(
            status=status, term=cls._unchecked(sequence, indices, value)
        )

    @classmethod
    def _unchecked(
        cls, sequence: List[bool], indices: List[int], value: complex
    ) -> "Term":
        term = cls.__new__(cls)
        term.n_ops = len(sequence)
        term.sequence = sequence
        term.indices = indices
        term.value = complex(value)
        return term

    def copy(self) -> "Term":
        return Term._unchecked(list(self.sequence), list(self.indices), self.value)

    @property
    def n_create(self) -> int:
        """Number of creation operators."""
        return sum(self.sequence)

    def dagger(self) -> "Term":
        """Return the Hermitian conjugate as a new term."""
        return Term._unchecked(
            [not created for created in reversed(self.sequence)],
            list(reversed(self.indices)),
            self.value.conjugate(),
        )

    def is_normal_ordered(self) -> bool:
        return is_normal_ordered(self)

    # ------------------------------------------------------------------
    # Reordering
    # ------------------------------------------------------------------

    def elementary_swap(
        self, position: int, force_ignore: bool = False
    ) -> List["Term"]:
        """
        Swap the operators at ``position`` and ``position + 1``.

        Operators on different modes (or any pair when ``force_ignore`` is
        set) anticommute: the sign flips and no new term appears. For ``c``
        and ``c^+`` on the same mode the contraction term, with both
        operators removed and the coefficient unchanged, is returned and the
        swap is then performed with a sign flip.

        Parameters
        ----------
        position:
            Left position of the adjacent pair.
        force_ignore:
            Treat the pair as anticommuting even on the same mode.

        Returns
        -------
        List[Term]
            Contraction terms produced by the swap (zero or one). The caller
            is responsible for normal-ordering them.

        Raises
        ------
        IndexError
            If ``position`` does not address an adjacent pair.
        """
        if not 0 <= position < self.n_ops - 1:
            raise IndexError(
                f"position {position} out of range for a term with {self.n_ops} operators"
            )

        out: List[Term] = []
        if force_ignore or self.indices[position] != self.indices[position + 1]:
            self.value = -self.value
            seq, idx = self.sequence, self.indices
            seq[position], seq[position + 1] = seq[position + 1], seq[position]
            idx[position], idx[position + 1] = idx[position + 1], idx[position]
            return out

        # Like operators on one mode have a vanishing anticommutator
        if self.sequence[position] != self.sequence[position + 1]:
            outcome = Term.build(
                self.n_ops - 2,
                self.sequence[:position] + self.sequence[position + 2 :],
                self.indices[:position] + self.indices[position + 2 :],
                self.value,
            )
            if outcome.ok:
                logger.debug(
                    "Contracting %s at position %d gives %s", self, position, outcome.term
                )
                out.append(outcome.term)
            else:
                logger.debug("Contraction of %s dropped: %s", self, outcome.message)
        self.elementary_swap(position, force_ignore=True)
        return out

    def rearrange(self, desired: Sequence[bool]) -> List["Term"]:
        """
        Permute the operators until ``sequence`` equals ``desired``.

        Parameters
        ----------
        desired:
            Target creation/annihilation pattern, same length and the same
            number of creation operators as the term.

        Returns
        -------
        List[Term]
            Every contraction term spawned along the way.

        Raises
        ------
        WrongOperatorSequenceError
            If the target pattern cannot be reached.
        """
        desired = [bool(created) for created in desired]
        if len(desired) != self.n_ops or sum(desired) != self.n_create:
            raise WrongOperatorSequenceError(
                f"Cannot rearrange {self} into pattern {desired}"
            )

        out: List[Term] = []
        if self.sequence == desired:
            return out

        n_ops = self.n_ops
        for i in range(n_ops - 1):
            if self.sequence[i] == desired[i]:
                continue

            # Nearest operator that supplies the missing type without
            # disturbing one already in place.
            j = i + 1
            while j < n_ops and (
                self.sequence[j] == self.sequence[i] or self.sequence[j] == desired[j]
            ):
                j += 1
            if j == n_ops:
                raise WrongOperatorSequenceError(
                    f"Cannot rearrange {self} into pattern {desired}"
                )

            if n_ops == 2:
                out.extend(self.elementary_swap(0))
                return out

            endpoints = (self.indices[i], self.indices[j])
            needs_walk = endpoints[0] == endpoints[1] or any(
                self.indices[k] in endpoints for k in range(i + 1, j)
            )
            if not needs_walk:
                self.value = -self.value
                self.sequence[i] = not self.sequence[i]
                self.sequence[j] = not self.sequence[j]
                self.indices[i], self.indices[j] = self.indices[j], self.indices[i]
            else:
                for k in range(j - 1, i - 1, -1):
                    out.extend(self.elementary_swap(k))
                for k in range(i + 1, j):
                    out.extend(self.elementary_swap(k))
        return out

    def reorder(self, ascending: bool = True) -> None:
        """
        Sort the creation block and the annihilation block by mode index.

        Only sign flips are involved: the term must already consist of a
        creation block followed by an annihilation block.

        Raises
        ------
        WrongOperatorSequenceError
            If the term is not split into the two blocks.
        """
        n_create = self.n_create
        if self.sequence != [True] * n_create + [False] * (self.n_ops - n_create):
            raise WrongOperatorSequenceError(
                f"reorder needs creation operators before annihilation operators, got {self}"
            )

        for lo, hi in ((0, n_create), (n_create, self.n_ops)):
            for sweep in range(hi - lo - 1):
                for j in range(lo, hi - 1 - sweep):
                    left, right = self.indices[j], self.indices[j + 1]
                    if (right < left) if ascending else (right > left):
                        self.elementary_swap(j, force_ignore=True)

    def _normal_order_in_place(self) -> List["Term"]:
        target: List[bool] = []
        for created in self.sequence:
            if created:
                target.insert(0, True)
            else:
                target.append(False)

        contractions = self.rearrange(target)
        self.reorder()
        if self.value != 0 and _vanishes(self.sequence, self.indices):
            logger.debug("Normal ordering left a vanishing product %s", self)
            self.value = 0j
        return contractions

    def make_normal_order(self) -> List["Term"]:
        """
        Bring the term to normal order in place.

        Creation operators are moved to the left of annihilation operators
        and each block is sorted by ascending mode index. Contraction terms
        are normal-ordered in turn (worklist, not recursion).

        Returns
        -------
        List[Term]
            All normal-ordered contraction terms, flattened. Together with the
            rewritten term they sum to the original product.
        """
        out: List[Term] = []
        pending = deque(self._normal_order_in_place())
        while pending:
            term = pending.popleft()
            pending.extend(term._normal_order_in_place())
            out.append(term)

        if is_debug_enabled():
            assert_normal_ordered(self)
            for term in out:
                assert_normal_ordered(term)
        return out

    # ------------------------------------------------------------------
    # Action on basis states
    # ------------------------------------------------------------------

    def act_right(self, ket: FockState) -> Tuple[FockState, complex]:
        """
        Apply the operator product to a basis state.

        Operators act from the rightmost to the leftmost. Each one flips its
        mode's occupation; the fermionic sign is tracked as the parity of
        occupied modes below the current mode, updated by scanning the
        modes between consecutive operators.

        Returns
        -------
        (FockState, complex)
            The resulting state and coefficient, or
            ``(ERROR_FOCK_STATE, 0)`` if the product annihilates ``ket``.

        Raises
        ------
        ValueError
            If a mode index does not fit in ``ket``.
        """
        if not ket.is_valid():
            return ERROR_FOCK_STATE, 0j
        if self.indices and max(self.indices) >= ket.n_modes:
            raise ValueError(
                f"{self} addresses mode {max(self.indices)} of a state with {ket.n_modes} modes"
            )

        bra = ket
        sign = 1
        prev = 0
        below = 0  # occupied modes of bra below prev
        for created, mode in zip(reversed(self.sequence), reversed(self.indices)):
            if created == bra[mode]:
                return ERROR_FOCK_STATE, 0j
            if mode > prev:
                below += bra.count_occupied(prev, mode)
            else:
                below -= bra.count_occupied(mode, prev)
            if below % 2:
                sign = -sign
            bra = bra.flip(mode)
            prev = mode
        return bra, self.value * sign

    def get_matrix_element(self, bra: FockState, ket: FockState) -> complex:
        """Return ``<bra| term |ket>``."""
        result, melem = self.act_right(ket)
        return melem if result == bra else 0j

    # ------------------------------------------------------------------
    # Equality and commutators
    # ------------------------------------------------------------------

    def is_exactly_equal(self, other: "Term") -> bool:
        return (
            self.n_ops == other.n_ops
            and self.value == other.value
            and self.sequence == other.sequence
            and self.indices == other.indices
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Term):
            return NotImplemented
        return terms_equal(self, other)

    def __neg__(self) -> "Term":
        negated = self.copy()
        negated.value = -negated.value
        return negated

    def product(self, rhs: "Term") -> TermOutcome:
        """Return the product ``self * rhs`` as an outcome."""
        return Term.build(
            self.n_ops + rhs.n_ops,
            self.sequence + rhs.sequence,
            self.indices + rhs.indices,
            self.value * rhs.value,
        )

    def get_commutator(self, rhs: "Term") -> List["Term"]:
        """
        Return the two halves ``[self * rhs, -(rhs * self)]`` of the commutator.

        A half that vanishes by construction is left out and reported
        through the logger.
        """
        out: List[Term] = []
        for sign, outcome in ((1, self.product(rhs)), (-1, rhs.product(self))):
            if not outcome.ok:
                logger.info(
                    "Commutator [%s, %s] creates a vanishing term: %s",
                    self,
                    rhs,
                    outcome.message,
                )
                continue
            outcome.term.value *= sign
            out.append(outcome.term)
        return out

    def commutes(self, rhs: "Term") -> bool:
        """
        Check whether ``[self, rhs]`` vanishes.

        The surviving halves, together with their contraction terms, are
        normal ordered, reduced and pruned; the terms commute when nothing
        is left.
        """
        return _sums_to_zero(self.get_commutator(rhs))

    @staticmethod
    def reduce(terms: List["Term"]) -> None:
        reduce_terms(terms)

    @staticmethod
    def prune(terms: List["Term"], precision: Optional[float] = None) -> None:
        prune_terms(terms, precision)

    def __str__(self) -> str:
        ops = _render(self.sequence, self.indices)
        return f"{self.value}*{ops}" if ops else f"{self.value}"


def reduce_terms(terms: List[Term]) -> None:
    """
    Merge terms with identical operator strings by summing coefficients.

    The list is modified in place; the first occurrence of each operator
    string keeps its position.
    """
    merged = 0
    i = 0
    while i < len(terms):
        j = i + 1
        while j < len(terms):
            if (
                terms[j].sequence == terms[i].sequence
                and terms[j].indices == terms[i].indices
            ):
                terms[i].value += terms[j].value
                del terms[j]
                merged += 1
            else:
                j += 1
        i += 1
    if merged:
        logger.debug("Merged %d terms, %d left", merged, len(terms))


def prune_terms(terms: List[Term], precision: Optional[float] = None) -> None:
    """
    Drop terms whose coefficient magnitude is below ``precision``.

    The list is modified in place. ``precision`` defaults to the configured
    value (see :mod:`fermalg.config`).
    """
    if precision is None:
        precision = get_config().precision
    terms[:] = [term for term in terms if abs(term.value) >= precision]


def _canonical(term: Term) -> Tuple[Term, List[Term]]:
    core = term.copy()
    contractions = core.make_normal_order()
    reduce_terms(contractions)
    prune_terms(contractions)
    return core, contractions


def terms_equal(lhs: Term, rhs: Term) -> bool:
    """
    Algebraic equality of two terms.

    Exactly identical terms are equal. Otherwise both are brought to
    canonical form (normal order, then reduction and pruning of the
    contraction terms) and compared field by field, contractions in
    generation order.

    Contractions are not sorted, so two terms whose contractions agree only
    up to order compare unequal. Use :meth:`Operator.make_normal_order` on
    the difference for a complete identity test.
    """
    if lhs.is_exactly_equal(rhs):
        return True
    lhs_core, lhs_rest = _canonical(lhs)
    rhs_core, rhs_rest = _canonical(rhs)
    if not lhs_core.is_exactly_equal(rhs_core) or len(lhs_rest) != len(rhs_rest):
        return False
    return all(a.is_exactly_equal(b) for a, b in zip(lhs_rest, rhs_rest))


def _sums_to_zero(terms: Iterable[Term]) -> bool:
    collected: List[Term] = []
    for term in terms:
        core = term.copy()
        collected.extend(core.make_normal_order())
        collected.append(core)
    reduce_terms(collected)
    prune_terms(collected)
    return not collected


__all__ = ["Term", "reduce_terms", "prune_terms", "terms_equal"]
