"""
Fallback Selector

Model-free directive choice used when suggestions produce no charts.
"""

from typing import List
import logging

from .models import ChartKind, ChartDirective, TypedColumn
from .exceptions import NoNumericDataError

logger = logging.getLogger(__name__)


class FallbackSelector:
    """Picks a histogram over the first column holding any numeric value."""

    def select(self, columns: List[TypedColumn]) -> List[ChartDirective]:
        try:
            column = self._first_numeric_column(columns)
        except NoNumericDataError as e:
            logger.info(str(e))
            return []

        logger.info(f"Falling back to a histogram of '{column.name}'")
        return [ChartDirective(
            kind=ChartKind.HISTOGRAM,
            x=column.name,
            title=f"{column.name} distribution"
        )]

    def _first_numeric_column(self, columns: List[TypedColumn]) -> TypedColumn:
        for column in columns:
            if column.numeric_count > 0:
                return column
        raise NoNumericDataError()
