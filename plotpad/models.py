from dataclasses import dataclass, replace
from typing import Optional, Dict, Any, List, Tuple
from pydantic import BaseModel, Field

from .exceptions import SheetLockedError


@dataclass(frozen=True)
class Sheet:
    """
    A named CSV sheet.

    Immutable: every change returns a new value and persistence is a separate
    step. ``content`` is plaintext CSV when ``is_encrypted`` is false and base64
    ciphertext otherwise; ``vault_ref`` is set exactly when it is encrypted.
    """
    id: int
    name: str
    content: str = ""
    is_encrypted: bool = False
    vault_ref: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def with_name(self, name: str) -> "Sheet":
        return replace(self, name=name)

    def with_content(self, content: str) -> "Sheet":
        if self.is_encrypted:
            raise SheetLockedError(self.id)
        return replace(self, content=content)

    def with_tag(self, tag: str) -> "Sheet":
        return replace(self, tags=self.tags + (tag,))

    def without_tag(self, tag: str) -> "Sheet":
        """Remove the first occurrence of ``tag``, if any."""
        if tag not in self.tags:
            return self
        tags = list(self.tags)
        tags.remove(tag)
        return replace(self, tags=tuple(tags))

    def locked(self, ciphertext: str, vault_ref: str) -> "Sheet":
        return replace(self, content=ciphertext, is_encrypted=True, vault_ref=vault_ref)

    def unlocked(self, content: str) -> "Sheet":
        return replace(self, content=content, is_encrypted=False, vault_ref=None)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on the name or any tag."""
        needle = query.lower()
        return needle in self.name.lower() or any(needle in tag.lower() for tag in self.tags)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'content': self.content,
            'is_encrypted': self.is_encrypted,
            'vault_ref': self.vault_ref,
            'tags': list(self.tags)
        }


# API request/response models

class SheetCreateRequest(BaseModel):
    """Request model for creating a sheet."""
    name: Optional[str] = Field(default=None, description="Display name; defaults to 'Untitled <id>'")


class SheetRenameRequest(BaseModel):
    name: str


class SheetContentRequest(BaseModel):
    content: str = Field(description="Plaintext CSV content")


class TagRequest(BaseModel):
    tag: str


class PasswordRequest(BaseModel):
    password: str


class RelockRequest(BaseModel):
    """Request model for re-encrypting a sheet, optionally with new content or password."""
    password: str = Field(description="Current password")
    new_password: Optional[str] = Field(default=None, description="New password; the current one is kept if omitted")
    content: Optional[str] = Field(default=None, description="New plaintext content; the current content is kept if omitted")


class ChartsRequest(BaseModel):
    password: Optional[str] = Field(default=None, description="Required for encrypted sheets")


class ChartPreviewRequest(BaseModel):
    csv: str = Field(description="Raw CSV text to chart")


class SheetResponse(BaseModel):
    """Response model for a sheet."""
    id: int
    name: str
    content: str
    is_encrypted: bool
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_sheet(cls, sheet: Sheet) -> "SheetResponse":
        return cls(
            id=sheet.id,
            name=sheet.name,
            content=sheet.content,
            is_encrypted=sheet.is_encrypted,
            tags=list(sheet.tags)
        )


class UnlockResponse(BaseModel):
    content: str
