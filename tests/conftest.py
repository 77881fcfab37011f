"""Pytest configuration and shared fixtures for fermalg tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Helpers for drawing random valid terms and enumerating small Fock bases
"""

import os
from typing import Callable, List

import numpy as np
import pytest
import torch

from fermalg.fermion import Term
from fermalg.fock import FockState


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def full_basis() -> Callable[[int], List[FockState]]:
    """Return a function listing every basis state on ``n_modes`` modes."""

    def _basis(n_modes: int) -> List[FockState]:
        return [FockState.from_index(k, n_modes) for k in range(1 << n_modes)]

    return _basis


@pytest.fixture
def random_term(rng: np.random.Generator) -> Callable[..., Term]:
    """Return a function drawing random non-vanishing terms."""

    def _draw(n_modes: int, max_ops: int = 4) -> Term:
        while True:
            n_ops = int(rng.integers(1, max_ops + 1))
            sequence = [bool(b) for b in rng.integers(0, 2, size=n_ops)]
            indices = [int(i) for i in rng.integers(0, n_modes, size=n_ops)]
            value = complex(rng.normal(), rng.normal())
            outcome = Term.build(n_ops, sequence, indices, value)
            if outcome.ok:
                return outcome.term

    return _draw
