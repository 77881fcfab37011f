"""fermalg - symbolic algebra of fermionic creation and annihilation operators."""

__version__ = "0.1.0"

# Configuration
from .config import AlgebraConfig, config_context, get_config, set_config

# Diagnostics
from .diagnostics import (
    assert_hermitian,
    assert_normal_ordered,
    debug_context,
    is_debug_enabled,
    is_hermitian,
    is_normal_ordered,
    set_debug_enabled,
)

# Operator algebra
from .fermion import (
    FermionAlgebraError,
    Operator,
    Term,
    TermOutcome,
    TermStatus,
    VanishingTermError,
    WrongLabelError,
    WrongOperatorSequenceError,
    prune_terms,
    reduce_terms,
    terms_equal,
)

# Basis states
from .fock import ERROR_FOCK_STATE, FockState

# Dense interop
from .linalg import fock_to_statevector, operator_to_dense, statevector_to_fock

# Models
from .models import (
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
    # Version
    "__version__",
    # Configuration
    "AlgebraConfig",
    "get_config",
    "set_config",
    "config_context",
    # Basis states
    "FockState",
    "ERROR_FOCK_STATE",
    # Operator algebra
    "Term",
    "Operator",
    "reduce_terms",
    "prune_terms",
    "terms_equal",
    "FermionAlgebraError",
    "WrongLabelError",
    "WrongOperatorSequenceError",
    "VanishingTermError",
    "TermStatus",
    "TermOutcome",
    # Diagnostics
    "is_normal_ordered",
    "assert_normal_ordered",
    "is_hermitian",
    "assert_hermitian",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Dense interop
    "operator_to_dense",
    "fock_to_statevector",
    "statevector_to_fock",
    # Models
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
