"""
Vault Exceptions

Raised inside the codec and converted into an UnlockResult failure before
they reach the caller.
"""


class VaultError(Exception):
    """Base exception for vault errors."""

    def __init__(self, message: str, vault_ref: str = None):
        super().__init__(message)
        self.vault_ref = vault_ref


class VaultRecordMissingError(VaultError):
    """Raised when the salt/IV record for a locked sheet cannot be found or read."""

    def __init__(self, vault_ref: str = None):
        super().__init__(f"Vault record '{vault_ref}' is missing or unreadable", vault_ref=vault_ref)


class WrongPasswordOrCorruptError(VaultError):
    """Raised when decryption fails: wrong password or damaged ciphertext."""

    def __init__(self, vault_ref: str = None):
        super().__init__("Wrong password or corrupted content", vault_ref=vault_ref)
