"""
Utils package initialization.
"""
from .error_handling import handle_error, handle_unlock_failure, validate_csv

__all__ = [
    'handle_error',
    'handle_unlock_failure',
    'validate_csv'
]
