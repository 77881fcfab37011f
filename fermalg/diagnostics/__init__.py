"""Diagnostics and debugging utilities for fermalg."""

from .core import (
    assert_hermitian,
    assert_normal_ordered,
    is_hermitian,
    is_normal_ordered,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "is_normal_ordered",
    "assert_normal_ordered",
    "is_hermitian",
    "assert_hermitian",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
