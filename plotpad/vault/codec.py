"""
Vault Codec

Password-based envelope encryption for sheet content. A 256-bit key is
derived on demand with PBKDF2-HMAC-SHA256 from the password and a per-lock
salt; content is encrypted with AES-CBC. Only the salt and IV are persisted,
in the secret store, under a vault-record key minted fresh for every lock.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import asyncio
import base64
import json
import logging
import os
import secrets
import time

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .exceptions import VaultRecordMissingError, WrongPasswordOrCorruptError
from .store import SecretStore
from ..models import Sheet

logger = logging.getLogger(__name__)

KDF_ITERATIONS = 10_000
KEY_LENGTH = 32
SALT_LENGTH = 16
IV_LENGTH = 16


@dataclass(frozen=True)
class VaultRecord:
    """Salt and IV needed to re-derive a sheet's key from its password."""
    salt: bytes
    iv: bytes

    @classmethod
    def generate(cls) -> "VaultRecord":
        return cls(salt=os.urandom(SALT_LENGTH), iv=os.urandom(IV_LENGTH))

    def to_json(self) -> str:
        return json.dumps({
            'salt': base64.b64encode(self.salt).decode('ascii'),
            'iv': base64.b64encode(self.iv).decode('ascii')
        })

    @classmethod
    def from_json(cls, raw: str) -> "VaultRecord":
        data = json.loads(raw)
        return cls(salt=base64.b64decode(data['salt']), iv=base64.b64decode(data['iv']))


class UnlockFailure(str, Enum):
    RECORD_MISSING = "record_missing"
    WRONG_PASSWORD_OR_CORRUPT = "wrong_password_or_corrupt"


@dataclass(frozen=True)
class UnlockResult:
    """Decrypted content, or the reason it could not be produced."""
    content: Optional[str] = None
    failure: Optional[UnlockFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def derive_key(password: str, salt: bytes, iterations: int = KDF_ITERATIONS) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password.encode('utf-8'))


def encrypt_text(plaintext: str, key: bytes, iv: bytes) -> str:
    """AES-CBC with PKCS#7 padding; returns base64 ciphertext."""
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext.encode('utf-8')) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode('ascii')


def decrypt_text(ciphertext_b64: str, key: bytes, iv: bytes) -> str:
    """
    Reverse of encrypt_text.

    Raises:
        ValueError: On bad base64, block length, padding or UTF-8
    """
    ciphertext = base64.b64decode(ciphertext_b64, validate=True)
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    plaintext = unpadder.update(padded) + unpadder.finalize()
    return plaintext.decode('utf-8')


class VaultCodec:
    """Locks and unlocks sheet content with a password."""

    def __init__(self, store: SecretStore, iterations: int = KDF_ITERATIONS):
        self.store = store
        self.iterations = iterations

    def new_vault_ref(self, sheet_id: int) -> str:
        """Mint a vault-record key unique across repeated lock cycles."""
        return f"sec-{sheet_id}-{int(time.time() * 1000)}-{secrets.token_hex(4)}"

    async def lock(self, sheet: Sheet, password: str) -> Sheet:
        """
        Encrypt a sheet's content under a password.

        Returns the sheet unchanged when it is already locked or its content
        is blank; otherwise a locked copy. The salt/IV record is written to
        the secret store; the caller persists the returned sheet.
        """
        if sheet.is_encrypted or not sheet.content.strip():
            return sheet

        logger.info(f"Locking sheet id={sheet.id}")
        record = VaultRecord.generate()
        ciphertext = await asyncio.to_thread(self._encrypt, sheet.content, password, record)

        vault_ref = self.new_vault_ref(sheet.id)
        self.store.write(vault_ref, record.to_json())
        return sheet.locked(ciphertext, vault_ref)

    async def unlock(self, sheet: Sheet, password: str) -> UnlockResult:
        """
        Decrypt a sheet's content.

        Never raises for a missing record or a wrong password; the failure is
        reported in the result instead.
        """
        if not sheet.is_encrypted:
            return UnlockResult(content=sheet.content)

        try:
            record = self._load_record(sheet.vault_ref)
            content = await asyncio.to_thread(self._decrypt, sheet.content, password, record, sheet.vault_ref)
        except VaultRecordMissingError as e:
            logger.warning(f"Unlock failed for sheet id={sheet.id}: {e}")
            return UnlockResult(failure=UnlockFailure.RECORD_MISSING)
        except WrongPasswordOrCorruptError as e:
            logger.warning(f"Unlock failed for sheet id={sheet.id}: {e}")
            return UnlockResult(failure=UnlockFailure.WRONG_PASSWORD_OR_CORRUPT)

        return UnlockResult(content=content)

    def release(self, vault_ref: Optional[str]) -> None:
        """Delete a vault record that no sheet references any more."""
        if vault_ref:
            self.store.delete(vault_ref)
            logger.info(f"Released vault record {vault_ref}")

    def _load_record(self, vault_ref: Optional[str]) -> VaultRecord:
        raw = self.store.read(vault_ref) if vault_ref else None
        if raw is None:
            raise VaultRecordMissingError(vault_ref)
        try:
            return VaultRecord.from_json(raw)
        except (ValueError, KeyError, TypeError) as e:
            raise VaultRecordMissingError(vault_ref) from e

    def _encrypt(self, plaintext: str, password: str, record: VaultRecord) -> str:
        key = derive_key(password, record.salt, self.iterations)
        return encrypt_text(plaintext, key, record.iv)

    def _decrypt(self, ciphertext: str, password: str, record: VaultRecord, vault_ref: str) -> str:
        key = derive_key(password, record.salt, self.iterations)
        try:
            return decrypt_text(ciphertext, key, record.iv)
        except ValueError as e:
            raise WrongPasswordOrCorruptError(vault_ref) from e
