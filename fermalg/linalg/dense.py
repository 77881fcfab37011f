"""Dense torch representations of fermionic operators and basis states."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

import torch

from fermalg.fermion import Operator, Term
from fermalg.fock import FockState


def operator_to_dense(
    operator: Union[Operator, Term],
    basis: Sequence[FockState],
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.complex128,
) -> torch.Tensor:
    """
    Matrix of an operator restricted to a list of basis states.

    Entry ``[row, col]`` is ``<basis[row]| operator |basis[col]>``. Results
    of the action that fall outside ``basis`` are discarded, so the basis is
    typically a full Fock space or a particle-number sector supplied by the
    caller.

    Parameters
    ----------
    operator:
        Operator (or a single Term).
    basis:
        Distinct valid basis states, all on the same number of modes.
    device:
        Optional torch device. Defaults to CPU.
    dtype:
        Complex dtype for the matrix (default: complex128).

    Returns
    -------
    torch.Tensor
        Dense matrix of shape ``(len(basis), len(basis))``.

    Raises
    ------
    ValueError:
        If the basis is empty, holds the error state, mixes widths or repeats
        a state.
    """
    if len(basis) == 0:
        raise ValueError("basis must contain at least one state")
    if any(not state.is_valid() for state in basis):
        raise ValueError("basis must not contain the error state")
    widths = {state.n_modes for state in basis}
    if len(widths) != 1:
        raise ValueError(f"basis states must share one width, got {sorted(widths)}")

    position = {state: k for k, state in enumerate(basis)}
    if len(position) != len(basis):
        raise ValueError("basis states must be distinct")

    if isinstance(operator, Term):
        operator = Operator.from_terms([operator])
    if device is None:
        device = torch.device("cpu")

    dim = len(basis)
    matrix = torch.zeros((dim, dim), dtype=dtype, device=device)
    for col, ket in enumerate(basis):
        for bra, melem in operator.act_right(ket).items():
            row = position.get(bra)
            if row is not None:
                matrix[row, col] = melem
    return matrix


def fock_to_statevector(
    state: FockState,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.complex128,
) -> torch.Tensor:
    """
    One-hot statevector of length ``2**n_modes`` for a basis state.

    The amplitude sits at ``state.to_index()`` (mode k is bit k, little-endian).
    """
    if not state.is_valid():
        raise ValueError("the error state has no statevector")
    if device is None:
        device = torch.device("cpu")
    vec = torch.zeros(1 << state.n_modes, dtype=dtype, device=device)
    vec[state.to_index()] = 1.0
    return vec


def statevector_to_fock(vec: torch.Tensor, atol: float = 1e-12) -> FockState:
    """
    Recover the basis state of a statevector with a single nonzero amplitude.

    Raises
    ------
    ValueError:
        If the length is not a power of two or the vector is not a single
        basis state.
    """
    if vec.dim() != 1:
        raise ValueError(f"expected a 1D statevector, got shape {tuple(vec.shape)}")
    dim = vec.shape[0]
    n_modes = int(math.log2(dim)) if dim > 0 else -1
    if n_modes < 0 or (1 << n_modes) != dim:
        raise ValueError(f"statevector length must be a power of two, got {dim}")

    support = torch.nonzero(vec.abs() > atol).flatten().tolist()
    if len(support) != 1:
        raise ValueError(
            f"statevector is not a single basis state ({len(support)} nonzero amplitudes)"
        )
    return FockState.from_index(support[0], n_modes)
