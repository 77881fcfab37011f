"""Torch interop for handing operators to dense or statevector backends."""

from .dense import (
    fock_to_statevector,
    operator_to_dense,
    statevector_to_fock,
)

__all__ = [
    "operator_to_dense",
    "fock_to_statevector",
    "statevector_to_fock",
]
