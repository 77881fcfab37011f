"""Builders for common fermionic operators and the 1D Hubbard chain."""

from __future__ import annotations

from typing import List, Tuple

from fermalg.fermion import Operator, Term

_SPINS = (0, 1)  # up, down


def _validate_chain_length(num_sites: int) -> None:
    """Validate that num_sites is positive."""
    if num_sites <= 0:
        raise ValueError("num_sites must be positive.")


def _nearest_neighbor_pairs(num_sites: int, periodic: bool) -> List[Tuple[int, int]]:
    """
    Generate nearest-neighbor pairs for a 1D chain.

    The periodic bond (num_sites-1, 0) is only added for chains longer than
    two sites, where it is distinct from the open bond.
    """
    pairs: List[Tuple[int, int]] = [(i, i + 1) for i in range(num_sites - 1)]
    if periodic and num_sites > 2:
        pairs.append((num_sites - 1, 0))
    return pairs


def creation(mode: int, value: complex = 1.0) -> Term:
    """Single creation operator ``value * c^+_mode``."""
    return Term(1, [True], [mode], value)


def annihilation(mode: int, value: complex = 1.0) -> Term:
    """Single annihilation operator ``value * c_mode``."""
    return Term(1, [False], [mode], value)


def number_operator(mode: int, value: complex = 1.0) -> Operator:
    """Occupation number ``value * c^+_mode c_mode``."""
    return Operator.from_terms([Term(2, [True, False], [mode, mode], value)])


def total_number_operator(n_modes: int) -> Operator:
    """Total particle number ``sum_m c^+_m c_m`` over ``n_modes`` modes."""
    return Operator.from_terms(
        [Term(2, [True, False], [mode, mode]) for mode in range(n_modes)]
    )


def hopping(i: int, j: int, t: complex = 1.0) -> Operator:
    """
    Hopping between two modes:

        -t c^+_i c_j - conj(t) c^+_j c_i

    Raises
    ------
    ValueError
        If i == j.
    """
    if i == j:
        raise ValueError(f"hopping needs two distinct modes, got {i} and {j}")
    t = complex(t)
    return Operator.from_terms(
        [
            Term(2, [True, False], [i, j], -t),
            Term(2, [True, False], [j, i], -t.conjugate()),
        ]
    )


def density_density(i: int, j: int, u: complex = 1.0) -> Operator:
    """
    Density-density interaction ``u n_i n_j`` in normal order.

    For ``i == j`` this is ``u n_i`` since ``n_i**2 == n_i``.
    """
    op = Operator.from_terms([Term(4, [True, False, True, False], [i, i, j, j], u)])
    op.make_normal_order()
    return op


def mode_index(site: int, spin: int, num_sites: int) -> int:
    """
    Mode of a (site, spin) pair in block ordering: all spin-up sites, then
    all spin-down sites.

    Raises
    ------
    ValueError
        If site or spin is out of range.
    """
    if not 0 <= site < num_sites:
        raise ValueError(f"site must be in [0, {num_sites}), got {site}")
    if spin not in _SPINS:
        raise ValueError(f"spin must be 0 (up) or 1 (down), got {spin}")
    return spin * num_sites + site


def spin_z_operator(num_sites: int) -> Operator:
    """Total ``S_z = 1/2 sum_i (n_{i,up} - n_{i,down})``."""
    _validate_chain_length(num_sites)
    op = Operator()
    for site in range(num_sites):
        op = op + number_operator(mode_index(site, 0, num_sites), 0.5)
        op = op + number_operator(mode_index(site, 1, num_sites), -0.5)
    return op


def hubbard_chain(
    num_sites: int,
    t: float = 1.0,
    u: float = 1.0,
    mu: float = 0.0,
    periodic: bool = False,
) -> Operator:
    """
    Construct the 1D Hubbard Hamiltonian:

        H = -t sum_{<i,j>, s} (c^+_{i,s} c_{j,s} + h.c.)
            + U sum_i n_{i,up} n_{i,down}
            - mu sum_{i,s} n_{i,s}

    on ``2 * num_sites`` modes in block spin ordering (see :func:`mode_index`).

    Parameters
    ----------
    num_sites:
        Number of lattice sites (must be positive).
    t:
        Hopping amplitude.
    u:
        On-site interaction.
    mu:
        Chemical potential.
    periodic:
        If True, connect the last site to the first.

    Returns
    -------
    Operator
        The Hamiltonian in normal order.
    """
    _validate_chain_length(num_sites)

    hamiltonian = Operator()
    for i, j in _nearest_neighbor_pairs(num_sites, periodic):
        for spin in _SPINS:
            hamiltonian = hamiltonian + hopping(
                mode_index(i, spin, num_sites), mode_index(j, spin, num_sites), t
            )

    for site in range(num_sites):
        up = mode_index(site, 0, num_sites)
        down = mode_index(site, 1, num_sites)
        if u != 0.0:
            hamiltonian = hamiltonian + density_density(up, down, u)
        if mu != 0.0:
            hamiltonian = hamiltonian + number_operator(up, -mu) + number_operator(down, -mu)

    hamiltonian.make_normal_order()
    return hamiltonian
