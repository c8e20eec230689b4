"""
CSV Profiler

Parses raw sheet text into a header plus data rows and infers whether each
column is numeric or categorical.
"""

from dataclasses import dataclass
from typing import Dict, List, Any, Optional
import csv
import io
import re
import logging

import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from .models import ColumnKind, TypedColumn, ChartSettings
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> Optional[float]:
    """Parse a cell as a locale-invariant number, or return None."""
    if value is None:
        return None
    text = str(value).strip()
    if not _NUMBER_PATTERN.fullmatch(text):
        return None
    return float(text)


def is_number(value: Any) -> bool:
    return parse_number(value) is not None


def normalize_line_breaks(text: str) -> str:
    """
    Turn literal ``\\n`` escape sequences in stored text into real line breaks.

    Applied to the whole text, so a literal ``\\n`` inside a quoted cell also
    becomes a line break within that cell.
    """
    return text.replace("\\n", "\n")


@dataclass
class SheetTable:
    """Header, data rows and typed columns from one profiling pass."""
    header: List[str]
    rows: List[List[str]]
    columns: List[TypedColumn]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column_index(self, name: str) -> int:
        """Index of the first header cell equal to ``name``, or -1."""
        try:
            return self.header.index(name)
        except ValueError:
            return -1

    def column_values(self, index: int) -> List[str]:
        return [row[index] for row in self.rows]

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the profile for debugging and analysis endpoints."""
        return {
            'row_count': self.row_count,
            'column_count': len(self.columns),
            'columns': [
                {'name': c.name, 'kind': c.kind.value, 'numeric_values': c.numeric_count}
                for c in self.columns
            ],
            'numeric_columns': [c.name for c in self.columns if c.is_numeric],
            'categorical_columns': [c.name for c in self.columns if not c.is_numeric]
        }


class CsvProfiler:
    """Parses sheet CSV text and infers column kinds."""

    def __init__(self, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()

    def profile(self, text: str) -> SheetTable:
        """
        Parse CSV text into a typed table.

        Args:
            text: Raw sheet content (plaintext CSV)

        Returns:
            SheetTable with header, data rows and typed columns

        Raises:
            MalformedInputError: If fewer than a header and one data row result
        """
        frame = self._read_frame(text or "")
        if len(frame) < self.settings.min_rows:
            raise MalformedInputError(len(frame), self.settings.min_rows)

        header = [str(cell) for cell in frame.iloc[0].tolist()]
        data = frame.iloc[1:].reset_index(drop=True)

        numeric_mask = data.map(is_number)
        columns = []
        for position, name in enumerate(header):
            column_mask = numeric_mask.iloc[:, position]
            kind = ColumnKind.NUMERIC if bool(column_mask.all()) else ColumnKind.CATEGORICAL
            columns.append(TypedColumn(name=name, kind=kind, numeric_count=int(column_mask.sum())))

        logger.debug(f"Profiled {len(data)} rows x {len(header)} columns")
        return SheetTable(header=header, rows=data.values.tolist(), columns=columns)

    def _read_frame(self, text: str) -> pd.DataFrame:
        """Read every cell as a string; short rows are padded, long rows skipped."""
        try:
            frame = pd.read_csv(
                io.StringIO(normalize_line_breaks(text)),
                header=None,
                sep=",",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                quoting=csv.QUOTE_MINIMAL,
                engine="python",
                on_bad_lines="skip",
            )
        except EmptyDataError:
            return pd.DataFrame()
        except ParserError as e:
            logger.warning(f"Could not parse sheet CSV: {e}")
            return pd.DataFrame()
        return frame.fillna("")
