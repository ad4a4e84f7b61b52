"""Operation catalogue and the argument rules that guard it."""

from safe_unix.policy.catalogue import (
    CATALOGUE,
    MUTATION_TOKENS,
    Operation,
    PolicyDescriptor,
    lookup,
    operation_names,
)

__all__ = [
    "CATALOGUE",
    "MUTATION_TOKENS",
    "Operation",
    "PolicyDescriptor",
    "lookup",
    "operation_names",
]
