"""Utility modules."""

from .cancellation import CancellationToken, ComputationCancelled, check_cancelled

__all__ = [
    'CancellationToken',
    'ComputationCancelled',
    'check_cancelled',
]
