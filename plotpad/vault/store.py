"""
Secret store for vault records.

Only salt/IV metadata is ever written here, never a password or derived key.
"""

from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class SecretStore(Protocol):
    def write(self, key: str, value: str) -> None:
        ...

    def read(self, key: str) -> Optional[str]:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemorySecretStore:
    """Process-local secret store, mainly for tests and previews."""

    def __init__(self):
        self._values: Dict[str, str] = {}

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self):
        return list(self._values)
