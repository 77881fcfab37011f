"""Canonical-form and symmetry checks for terms and operators."""

from __future__ import annotations

from typing import Any, Sequence


def _is_sorted(indices: Sequence[int]) -> bool:
    return all(a <= b for a, b in zip(indices, indices[1:]))


def is_normal_ordered(term: Any) -> bool:
    """
    Check whether a term is in normal order.

    A term is normal ordered when all creation operators stand to the left
    of all annihilation operators and each block is sorted by ascending mode
    index.

    Parameters
    ----------
    term:
        Object with ``sequence`` and ``indices`` attributes (a Term).

    Returns
    -------
    bool
        True if the term is in normal order.
    """
    sequence = list(term.sequence)
    n_create = sum(sequence)
    if sequence != [True] * n_create + [False] * (len(sequence) - n_create):
        return False
    indices = list(term.indices)
    return _is_sorted(indices[:n_create]) and _is_sorted(indices[n_create:])


def assert_normal_ordered(term: Any) -> None:
    """
    Assert that a term, or every term of an operator, is in normal order.

    Raises
    ------
    ValueError
        If a term is not normal ordered.
    """
    terms = term.terms if hasattr(term, "terms") else [term]
    for t in terms:
        if not is_normal_ordered(t):
            raise ValueError(f"Term is not normal ordered: {t}")


def is_hermitian(operator: Any) -> bool:
    """
    Check whether an operator equals its Hermitian conjugate.

    The difference ``operator - operator.dagger()`` is brought to normal
    order (which reduces and prunes it with the configured precision) and
    tested for being the zero operator.

    Parameters
    ----------
    operator:
        An Operator.

    Returns
    -------
    bool
        True if the operator is Hermitian.
    """
    difference = operator - operator.dagger()
    difference.make_normal_order()
    return difference.is_zero()


def assert_hermitian(operator: Any) -> None:
    """
    Assert that an operator is Hermitian.

    Raises
    ------
    ValueError
        If the operator differs from its Hermitian conjugate.
    """
    if not is_hermitian(operator):
        raise ValueError(f"Operator is not Hermitian: {operator}")
