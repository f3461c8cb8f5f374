"""
Validation of engine inputs.

Every request passes through these functions before any computation, so
malformed records surface as a single InvalidInput result.
"""

from .input_validator import (
    issues_from_error,
    validate_nodes,
    validate_product,
    validate_vehicle,
    validate_constraints,
    nodes_from_dataframe,
)

__all__ = [
    'issues_from_error',
    'validate_nodes',
    'validate_product',
    'validate_vehicle',
    'validate_constraints',
    'nodes_from_dataframe',
]
