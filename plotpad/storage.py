"""
Sheet persistence interface and an in-memory implementation.
"""

from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable
import itertools
import logging

from .models import Sheet

logger = logging.getLogger(__name__)

SheetsListener = Callable[[List[Sheet]], None]


@runtime_checkable
class SheetRepository(Protocol):
    def get(self, sheet_id: int) -> Optional[Sheet]:
        ...

    def put(self, sheet: Sheet) -> None:
        ...

    def delete(self, sheet_id: int) -> None:
        ...

    def next_id(self) -> int:
        ...

    def list_all(self) -> List[Sheet]:
        ...

    def subscribe(self, listener: SheetsListener) -> Callable[[], None]:
        ...


class ChangeNotifier:
    """Calls listeners with the current sheet list after every write."""

    def __init__(self):
        self._listeners: List[SheetsListener] = []

    def subscribe(self, listener: SheetsListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, sheets: List[Sheet]) -> None:
        for listener in list(self._listeners):
            try:
                listener(sheets)
            except Exception as e:
                logger.error(f"Sheet listener failed: {e}")


class InMemorySheetRepository:
    """Dictionary-backed repository."""

    def __init__(self):
        self._sheets: Dict[int, Sheet] = {}
        self._ids = itertools.count(1)
        self._notifier = ChangeNotifier()

    def get(self, sheet_id: int) -> Optional[Sheet]:
        return self._sheets.get(sheet_id)

    def put(self, sheet: Sheet) -> None:
        self._sheets[sheet.id] = sheet
        self._notifier.notify(self.list_all())

    def delete(self, sheet_id: int) -> None:
        if self._sheets.pop(sheet_id, None) is not None:
            self._notifier.notify(self.list_all())

    def next_id(self) -> int:
        sheet_id = next(self._ids)
        while sheet_id in self._sheets:
            sheet_id = next(self._ids)
        return sheet_id

    def list_all(self) -> List[Sheet]:
        return [self._sheets[k] for k in sorted(self._sheets)]

    def subscribe(self, listener: SheetsListener) -> Callable[[], None]:
        return self._notifier.subscribe(listener)
