"""
Vault Package - Password-based encryption at rest for sheet content.
"""

from .codec import VaultCodec, VaultRecord, UnlockResult, UnlockFailure, KDF_ITERATIONS
from .store import SecretStore, InMemorySecretStore
from .exceptions import VaultError, VaultRecordMissingError, WrongPasswordOrCorruptError

__all__ = [
    'VaultCodec',
    'VaultRecord',
    'UnlockResult',
    'UnlockFailure',
    'KDF_ITERATIONS',
    'SecretStore',
    'InMemorySecretStore',
    'VaultError',
    'VaultRecordMissingError',
    'WrongPasswordOrCorruptError'
]
