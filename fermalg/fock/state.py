"""Occupation-number basis states for a fixed set of fermionic modes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np


@dataclass(frozen=True, order=True)
class FockState:
    """
    Occupation-number basis state: one occupation bit per mode.

    Mode ``k`` is ``occupations[k]``. States are immutable, hashable and
    totally ordered, so they can be used as dictionary keys; "writes" return
    a new state.

    The ``valid`` flag is False only for :data:`ERROR_FOCK_STATE`, the
    sentinel returned when an operator annihilates a state identically.

    Attributes
    ----------
    occupations:
        Tuple of booleans, True where the mode is occupied.
    valid:
        False for the sentinel, True otherwise.

    Example
    -------
    >>> ket = FockState.from_occupations([0, 1])
    >>> ket[1]
    True
    >>> str(ket.flip(0))
    '|11>'
    """

    occupations: Tuple[bool, ...]
    valid: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.occupations, tuple) or not all(
            isinstance(bit, bool) for bit in self.occupations
        ):
            object.__setattr__(
                self, "occupations", tuple(bool(bit) for bit in self.occupations)
            )

    @classmethod
    def from_occupations(cls, occupations: Iterable[int]) -> "FockState":
        """Create a state from an iterable of 0/1 (or bool) occupations."""
        return cls(tuple(bool(bit) for bit in occupations))

    @classmethod
    def from_index(cls, index: int, n_modes: int) -> "FockState":
        """
        Create a state from its integer label.

        Bit ``k`` of ``index`` is the occupation of mode ``k`` (little-endian),
        matching the computational-basis ordering of statevectors.

        Raises
        ------
        ValueError
            If n_modes is negative or index is outside [0, 2**n_modes).
        """
        if n_modes < 0:
            raise ValueError(f"n_modes must be >= 0, got {n_modes}")
        if index < 0 or index >= (1 << n_modes):
            raise ValueError(
                f"index {index} out of range for {n_modes} modes"
            )
        return cls(tuple(bool((index >> k) & 1) for k in range(n_modes)))

    @classmethod
    def vacuum(cls, n_modes: int) -> "FockState":
        """Return the empty state on ``n_modes`` modes."""
        return cls((False,) * n_modes)

    @property
    def n_modes(self) -> int:
        return len(self.occupations)

    def is_valid(self) -> bool:
        return self.valid

    def __len__(self) -> int:
        return len(self.occupations)

    def __getitem__(self, mode: int) -> bool:
        return self.occupations[mode]

    def set(self, mode: int, occupied: bool) -> "FockState":
        """Return a copy with the occupation of ``mode`` set to ``occupied``."""
        if not 0 <= mode < self.n_modes:
            raise IndexError(f"mode {mode} out of range for {self.n_modes} modes")
        bits = list(self.occupations)
        bits[mode] = bool(occupied)
        return FockState(tuple(bits), self.valid)

    def flip(self, mode: int) -> "FockState":
        """Return a copy with the occupation of ``mode`` inverted."""
        return self.set(mode, not self.occupations[mode])

    def n_particles(self) -> int:
        return sum(self.occupations)

    def count_occupied(self, lo: int, hi: int) -> int:
        """Number of occupied modes with index in ``[lo, hi)``."""
        return sum(self.occupations[lo:hi])

    def to_index(self) -> int:
        """Inverse of :meth:`from_index`."""
        if not self.valid:
            raise ValueError("the error state has no basis index")
        return sum(1 << k for k, bit in enumerate(self.occupations) if bit)

    def to_array(self) -> np.ndarray:
        """Return the occupations as a boolean numpy array."""
        return np.array(self.occupations, dtype=bool)

    def __str__(self) -> str:
        if not self.valid:
            return "|ERROR>"
        return "|" + "".join("1" if bit else "0" for bit in self.occupations) + ">"


ERROR_FOCK_STATE = FockState((), valid=False)
"""Sentinel for a forbidden result (Pauli exclusion); unequal to every valid state."""


__all__ = ["FockState", "ERROR_FOCK_STATE"]
