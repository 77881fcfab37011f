"""Hubbard dimer example: symmetries and the half-filled ground state.

This example builds the two-site Hubbard Hamiltonian in normal order, checks
that it is Hermitian and conserves particle number and S_z, and then
diagonalizes it in the half-filled sector with torch.
"""

from __future__ import annotations

import math

import torch

import fermalg as fa


def main() -> None:
    """Build the Hubbard dimer and report its half-filled ground state."""
    num_sites = 2
    t, u = 1.0, 4.0
    n_modes = 2 * num_sites

    hamiltonian = fa.hubbard_chain(num_sites, t=t, u=u)
    print(f"H has {len(hamiltonian)} normal-ordered terms:")
    for term in hamiltonian:
        print(f"  {term}")

    print(f"Hermitian: {fa.is_hermitian(hamiltonian)}")
    print(f"[H, N] = 0: {hamiltonian.commutes(fa.total_number_operator(n_modes))}")
    print(f"[H, S_z] = 0: {hamiltonian.commutes(fa.spin_z_operator(num_sites))}")

    # Half filling: two electrons on four modes
    sector = [
        fa.FockState.from_index(k, n_modes)
        for k in range(1 << n_modes)
        if bin(k).count("1") == 2
    ]
    dense = fa.operator_to_dense(hamiltonian, sector)
    energies = torch.linalg.eigvalsh(dense)

    exact = u / 2 - math.sqrt(u**2 / 4 + 4 * t**2)
    print(f"\nHalf-filled ground-state energy: {energies[0].item():.6f}")
    print(f"Analytic value: {exact:.6f}")


if __name__ == "__main__":
    main()
