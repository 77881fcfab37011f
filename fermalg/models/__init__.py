"""Ready-made fermionic operators and lattice Hamiltonians."""

from .hubbard import (
    annihilation,
    creation,
    density_density,
    hopping,
    hubbard_chain,
    mode_index,
    number_operator,
    spin_z_operator,
    total_number_operator,
)

__all__ = [
    "creation",
    "annihilation",
    "number_operator",
    "total_number_operator",
    "hopping",
    "density_density",
    "mode_index",
    "spin_z_operator",
    "hubbard_chain",
]
