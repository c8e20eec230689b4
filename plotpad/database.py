"""
SQLAlchemy-backed sheet repository and secret store.
"""

from typing import Callable, List, Optional
import logging

from sqlalchemy import create_engine, Engine, String, Text, Boolean, JSON, Integer, select, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from .config import get_config
from .models import Sheet
from .storage import ChangeNotifier, SheetsListener

# Configure logging
logger = logging.getLogger(__name__)

# Initialize engine as None
_engine: Optional[Engine] = None


class Base(DeclarativeBase):
    pass


class SheetRecord(Base):
    __tablename__ = "sheets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text, default="")
    is_encrypted: Mapped[bool] = mapped_column(Boolean, default=False)
    vault_ref: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    tags: Mapped[list] = mapped_column(JSON, default=list)

    def to_sheet(self) -> Sheet:
        return Sheet(
            id=self.id,
            name=self.name,
            content=self.content or "",
            is_encrypted=bool(self.is_encrypted),
            vault_ref=self.vault_ref,
            tags=tuple(self.tags or ())
        )


class VaultRecordRow(Base):
    __tablename__ = "vault_records"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text)


def get_db_engine(db_url: str = None) -> Engine:
    """Get or create the database engine."""
    global _engine
    url = db_url or get_config().DATABASE_URL
    if _engine is None or (db_url and str(_engine.url) != url):
        _engine = create_engine(url, pool_pre_ping=True)
    return _engine


def init_db(engine: Engine) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(engine)
    logger.info(f"Database tables ready on {engine.url.get_backend_name()}")


class SqlSheetRepository:
    """Sheet repository over a SQLAlchemy engine."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._Session = sessionmaker(bind=engine, expire_on_commit=False)
        self._notifier = ChangeNotifier()
        self._last_issued = 0

    def get(self, sheet_id: int) -> Optional[Sheet]:
        with self._Session() as session:
            record = session.get(SheetRecord, sheet_id)
            return record.to_sheet() if record else None

    def put(self, sheet: Sheet) -> None:
        with self._Session.begin() as session:
            session.merge(SheetRecord(
                id=sheet.id,
                name=sheet.name,
                content=sheet.content,
                is_encrypted=sheet.is_encrypted,
                vault_ref=sheet.vault_ref,
                tags=list(sheet.tags)
            ))
        self._notifier.notify(self.list_all())

    def delete(self, sheet_id: int) -> None:
        with self._Session.begin() as session:
            record = session.get(SheetRecord, sheet_id)
            if record is None:
                return
            session.delete(record)
        self._notifier.notify(self.list_all())

    def next_id(self) -> int:
        with self._Session() as session:
            current = session.scalar(select(func.max(SheetRecord.id))) or 0
        self._last_issued = max(current, self._last_issued) + 1
        return self._last_issued

    def list_all(self) -> List[Sheet]:
        with self._Session() as session:
            records = session.scalars(select(SheetRecord).order_by(SheetRecord.id)).all()
            return [record.to_sheet() for record in records]

    def subscribe(self, listener: SheetsListener) -> Callable[[], None]:
        return self._notifier.subscribe(listener)


class SqlSecretStore:
    """Secret store keeping vault records in their own table."""

    def __init__(self, engine: Engine):
        self._Session = sessionmaker(bind=engine)

    def write(self, key: str, value: str) -> None:
        with self._Session.begin() as session:
            session.merge(VaultRecordRow(key=key, value=value))

    def read(self, key: str) -> Optional[str]:
        with self._Session() as session:
            row = session.get(VaultRecordRow, key)
            return row.value if row else None

    def delete(self, key: str) -> None:
        with self._Session.begin() as session:
            row = session.get(VaultRecordRow, key)
            if row is not None:
                session.delete(row)


__all__ = ['get_db_engine', 'init_db', 'SqlSheetRepository', 'SqlSecretStore']
