"""
Sheet Service

Sheet lifecycle operations: create, rename, tag, search, edit, lock, unlock,
re-lock, delete and chart generation. Sheets are immutable values; each
operation computes the new value and then persists it explicitly.
"""

from typing import Callable, List, Optional
import logging

from .charts import ChartPipeline, ChartSpec
from .exceptions import SheetNotFoundError, SheetUnlockError
from .models import Sheet
from .storage import SheetRepository, SheetsListener
from .vault import VaultCodec, UnlockResult

logger = logging.getLogger(__name__)


def _require_password(password: Optional[str]) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    return password


class SheetService:
    """Coordinates persistence, the vault and the chart pipeline for sheets."""

    def __init__(self, repository: SheetRepository, codec: VaultCodec, pipeline: ChartPipeline):
        self.repository = repository
        self.codec = codec
        self.pipeline = pipeline

    def _require(self, sheet_id: int) -> Sheet:
        sheet = self.repository.get(sheet_id)
        if sheet is None:
            raise SheetNotFoundError(sheet_id)
        return sheet

    def _save(self, sheet: Sheet) -> Sheet:
        self.repository.put(sheet)
        return sheet

    async def create(self, name: Optional[str] = None) -> Sheet:
        sheet_id = self.repository.next_id()
        name = (name or "").strip() or f"Untitled {sheet_id}"
        logger.info(f"Creating sheet id={sheet_id}")
        return self._save(Sheet(id=sheet_id, name=name))

    async def get(self, sheet_id: int) -> Sheet:
        return self._require(sheet_id)

    async def list_sheets(self) -> List[Sheet]:
        return self.repository.list_all()

    async def search(self, query: str = "") -> List[Sheet]:
        """Sheets whose name or any tag contains ``query``, ignoring case."""
        sheets = self.repository.list_all()
        if not query:
            return sheets
        return [sheet for sheet in sheets if sheet.matches(query)]

    async def rename(self, sheet_id: int, name: str) -> Sheet:
        name = (name or "").strip()
        if not name:
            raise ValueError("Sheet name cannot be empty")
        return self._save(self._require(sheet_id).with_name(name))

    async def add_tag(self, sheet_id: int, tag: str) -> Sheet:
        tag = (tag or "").strip()
        if not tag:
            raise ValueError("Tag cannot be empty")
        return self._save(self._require(sheet_id).with_tag(tag))

    async def remove_tag(self, sheet_id: int, tag: str) -> Sheet:
        return self._save(self._require(sheet_id).without_tag(tag))

    async def update_content(self, sheet_id: int, content: str) -> Sheet:
        """
        Replace plaintext content.

        Raises:
            SheetLockedError: If the sheet is encrypted
        """
        return self._save(self._require(sheet_id).with_content(content))

    async def lock(self, sheet_id: int, password: str) -> Sheet:
        """Encrypt a sheet; a no-op for locked or blank sheets."""
        sheet = self._require(sheet_id)
        locked = await self.codec.lock(sheet, _require_password(password))
        if locked is sheet:
            logger.info(f"Lock skipped for sheet id={sheet_id}: already locked or empty")
            return sheet
        return self._save(locked)

    async def unlock(self, sheet_id: int, password: str) -> UnlockResult:
        """Decrypt a sheet's content without changing what is stored."""
        return await self.codec.unlock(self._require(sheet_id), password or "")

    async def relock(
        self,
        sheet_id: int,
        password: str,
        new_password: Optional[str] = None,
        content: Optional[str] = None
    ) -> Sheet:
        """
        Re-encrypt a sheet under a fresh vault record.

        Verifies ``password`` first, optionally swaps in new plaintext content
        and/or a new password, then deletes the vault record it replaced.

        Raises:
            SheetUnlockError: If the current password does not unlock the sheet
            ValueError: If the replacement content is blank
        """
        sheet = self._require(sheet_id)
        target_password = _require_password(new_password or password)
        if content is not None and not content.strip():
            raise ValueError("Re-locked content cannot be empty")

        if sheet.is_encrypted:
            result = await self.codec.unlock(sheet, password or "")
            if not result.ok:
                raise SheetUnlockError(sheet_id, result.failure)
            plain = sheet.unlocked(content if content is not None else result.content)
        else:
            plain = sheet.with_content(content) if content is not None else sheet

        relocked = await self.codec.lock(plain, target_password)
        self._save(relocked)
        if sheet.vault_ref and sheet.vault_ref != relocked.vault_ref:
            self.codec.release(sheet.vault_ref)
        return relocked

    async def delete(self, sheet_id: int) -> None:
        """Delete a sheet and the vault record it owns."""
        sheet = self._require(sheet_id)
        self.repository.delete(sheet_id)
        self.codec.release(sheet.vault_ref)
        logger.info(f"Deleted sheet id={sheet_id}")

    async def generate_charts(self, sheet_id: int, password: Optional[str] = None) -> List[ChartSpec]:
        """
        Generate charts for a sheet, unlocking it first when encrypted.

        Raises:
            ValueError: If the sheet is encrypted and no password is given
            SheetUnlockError: If the password does not unlock the sheet
        """
        sheet = self._require(sheet_id)
        content = sheet.content
        if sheet.is_encrypted:
            result = await self.codec.unlock(sheet, _require_password(password))
            if not result.ok:
                raise SheetUnlockError(sheet_id, result.failure)
            content = result.content
        return await self.pipeline.generate(content)

    def subscribe(self, listener: SheetsListener) -> Callable[[], None]:
        """Register a callback receiving the full sheet list after every change."""
        return self.repository.subscribe(listener)
