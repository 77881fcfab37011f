"""Occupation-number (Fock) basis states."""

from .state import ERROR_FOCK_STATE, FockState

__all__ = ["FockState", "ERROR_FOCK_STATE"]
