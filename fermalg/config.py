"""Numerical configuration shared by the operator algebra.

Two thresholds govern when a coefficient counts as zero:

- ``precision`` is the default cutoff of :meth:`Operator.prune`, applied after
  normal ordering.
- ``epsilon`` is the cutoff used when accumulating matrix elements in
  :meth:`Operator.act_right`.

The default precision can be overridden with the ``FERMALG_PRECISION``
environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

import numpy as np

_PRECISION_ENV_VAR = "FERMALG_PRECISION"


@dataclass(frozen=True)
class AlgebraConfig:
    """
    Thresholds used to discard numerically negligible coefficients.

    Args:
        precision: Terms with ``abs(value) < precision`` are dropped by
            pruning. Must be positive. Defaults to 1e-8.
        epsilon: Matrix elements with magnitude at or below ``epsilon`` are
            dropped by ``act_right``. Must be positive. Defaults to the
            float64 machine epsilon.
    """

    precision: float = 1e-8
    epsilon: float = float(np.finfo(np.float64).eps)

    def __post_init__(self) -> None:
        if not self.precision > 0.0:
            raise ValueError(f"precision must be positive, got {self.precision}")
        if not self.epsilon > 0.0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")


def _config_from_env() -> AlgebraConfig:
    raw = os.getenv(_PRECISION_ENV_VAR)
    if raw is None:
        return AlgebraConfig()
    try:
        precision = float(raw)
    except ValueError as exc:
        raise ValueError(
            f"{_PRECISION_ENV_VAR} must be a float, got {raw!r}"
        ) from exc
    return AlgebraConfig(precision=precision)


_config: AlgebraConfig = _config_from_env()


def get_config() -> AlgebraConfig:
    """Return the active configuration."""
    return _config


def set_config(config: AlgebraConfig) -> None:
    """
    Replace the active configuration.

    Parameters
    ----------
    config:
        New configuration.

    Raises
    ------
    TypeError
        If config is not an AlgebraConfig.
    """
    if not isinstance(config, AlgebraConfig):
        raise TypeError(f"expected AlgebraConfig, got {type(config).__name__}")
    global _config
    _config = config


@contextmanager
def config_context(**overrides: float) -> Iterator[AlgebraConfig]:
    """
    Context manager that temporarily overrides configuration fields.

    Example
    -------
    >>> with config_context(precision=1e-4) as cfg:
    ...     cfg.precision
    0.0001
    """
    global _config
    prev = _config
    _config = replace(prev, **overrides)
    try:
        yield _config
    finally:
        _config = prev


__all__ = ["AlgebraConfig", "get_config", "set_config", "config_context"]
