"""
Chart Deriver

Resolves chart directives against a profiled table and computes the concrete
plottable series for each chart kind.
"""

from typing import Dict, List, Optional
import math
import logging

import numpy as np

from .models import (
    ChartKind, ChartDirective, ChartSpec, ChartSettings, DirectiveOutcome, Aggregation,
    ChartPoint, BarValue, PieSlice, RadarAxis
)
from .profiler import SheetTable, parse_number
from .exceptions import ChartGenerationError, UnresolvedColumnError, DirectiveShapeError

logger = logging.getLogger(__name__)


class ChartDeriver:
    """Computes plottable series from directives."""

    def __init__(self, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()

    def derive_all(self, table: SheetTable, directives: List[ChartDirective]) -> List[DirectiveOutcome]:
        """
        Derive every directive independently.

        A failing directive is recorded in its outcome and logged; it never
        stops the remaining directives.
        """
        outcomes = []
        for directive in directives:
            try:
                spec = self.derive(table, directive)
                outcomes.append(DirectiveOutcome(directive=directive, spec=spec))
            except ChartGenerationError as e:
                logger.warning(f"Dropped {directive.kind.value} directive {directive.to_dict()}: {e}")
                outcomes.append(DirectiveOutcome(directive=directive, error=str(e)))
            except Exception as e:
                logger.error(f"Error deriving {directive.kind.value} chart: {str(e)}")
                outcomes.append(DirectiveOutcome(directive=directive, error=str(e)))
        return outcomes

    def derive_specs(self, table: SheetTable, directives: List[ChartDirective]) -> List[ChartSpec]:
        """Derive directives and keep only the successful specs."""
        return [outcome.spec for outcome in self.derive_all(table, directives) if outcome.ok]

    def derive(self, table: SheetTable, directive: ChartDirective) -> Optional[ChartSpec]:
        """
        Derive a single directive.

        Returns:
            ChartSpec, or None when the directive resolves but yields no data

        Raises:
            UnresolvedColumnError: If a referenced column is not in the header
            DirectiveShapeError: If the directive is incomplete for its kind
        """
        derivers = {
            ChartKind.SCATTER: self._derive_scatter,
            ChartKind.LINE: self._derive_line,
            ChartKind.BAR: self._derive_bar,
            ChartKind.HISTOGRAM: self._derive_histogram,
            ChartKind.PIE: self._derive_pie,
            ChartKind.RADAR: self._derive_radar
        }
        deriver = derivers.get(directive.kind)
        if deriver is None:
            raise DirectiveShapeError(f"unsupported chart kind {directive.kind}")
        return deriver(table, directive)

    def _title(self, directive: ChartDirective) -> str:
        title = (directive.title or "").strip()
        return title if title else directive.kind.default_title

    def _resolve(self, table: SheetTable, name: Optional[str], directive: ChartDirective, role: str) -> int:
        if not name:
            raise DirectiveShapeError(f"{directive.kind.value} chart requires '{role}'", chart_type=directive.kind.value)
        index = table.column_index(name)
        if index < 0:
            raise UnresolvedColumnError(name, chart_type=directive.kind.value)
        return index

    def _points(self, table: SheetTable, directive: ChartDirective) -> List[ChartPoint]:
        xi = self._resolve(table, directive.x, directive, "x")
        yi = self._resolve(table, directive.y, directive, "y")
        points = []
        for row in table.rows:
            x, y = parse_number(row[xi]), parse_number(row[yi])
            if x is not None and y is not None:
                points.append(ChartPoint(x, y))
        return points

    def _derive_scatter(self, table: SheetTable, directive: ChartDirective) -> Optional[ChartSpec]:
        points = self._points(table, directive)
        if not points:
            return None
        return ChartSpec(kind=ChartKind.SCATTER, title=self._title(directive), points=points)

    def _derive_line(self, table: SheetTable, directive: ChartDirective) -> Optional[ChartSpec]:
        # sorted() is stable, so equal x values keep source order
        points = sorted(self._points(table, directive), key=lambda p: p.x)
        if not points:
            return None
        return ChartSpec(kind=ChartKind.LINE, title=self._title(directive), points=points)

    def _grouped(self, table: SheetTable, directive: ChartDirective) -> Dict[str, float]:
        """Group rows by the raw x string and aggregate each bucket, ascending by key."""
        xi = self._resolve(table, directive.x, directive, "x")
        yi = self._resolve(table, directive.y, directive, "y") if directive.y else -1

        buckets: Dict[str, List[float]] = {}
        for row in table.rows:
            value = parse_number(row[yi]) if yi >= 0 else None
            buckets.setdefault(row[xi], []).append(value if value is not None else 1.0)

        return {key: self._aggregate(buckets[key], directive.agg) for key in sorted(buckets)}

    def _aggregate(self, values: List[float], agg: Optional[Aggregation]) -> float:
        if agg == Aggregation.SUM:
            return float(sum(values))
        if agg == Aggregation.AVERAGE:
            return float(sum(values) / len(values)) if values else 0.0
        # An empty bucket counts as one implicit unit
        return float(len(values)) if values else 1.0

    def _derive_bar(self, table: SheetTable, directive: ChartDirective) -> Optional[ChartSpec]:
        groups = self._grouped(table, directive)
        if not groups:
            return None
        bars = [BarValue(key, value) for key, value in groups.items()]
        return ChartSpec(kind=ChartKind.BAR, title=self._title(directive), bars=bars)

    def _derive_pie(self, table: SheetTable, directive: ChartDirective) -> Optional[ChartSpec]:
        groups = self._grouped(table, directive)
        if not groups:
            return None
        slices = [PieSlice(key, value) for key, value in groups.items()]
        return ChartSpec(kind=ChartKind.PIE, title=self._title(directive), slices=slices)

    def _derive_histogram(self, table: SheetTable, directive: ChartDirective) -> Optional[ChartSpec]:
        xi = self._resolve(table, directive.x, directive, "x")
        parsed = [parse_number(cell) for cell in table.column_values(xi)]
        values = np.sort(np.array([v for v in parsed if v is not None], dtype=float))
        if values.size == 0:
            return None

        bin_count = max(self.settings.min_histogram_bins, int(round(math.sqrt(values.size))))
        low, high = float(values[0]), float(values[-1])
        width = (high - low) / bin_count

        if width == 0:
            indices = np.zeros(values.size, dtype=int)
        else:
            indices = np.clip(np.floor((values - low) / width).astype(int), 0, bin_count - 1)
        counts = np.bincount(indices, minlength=bin_count)

        points = [
            ChartPoint(low + (i + 0.5) * width, float(counts[i]))
            for i in range(bin_count)
        ]
        return ChartSpec(kind=ChartKind.HISTOGRAM, title=self._title(directive), points=points)

    def _derive_radar(self, table: SheetTable, directive: ChartDirective) -> Optional[ChartSpec]:
        cols = list(directive.cols or ())
        if not self.settings.min_radar_columns <= len(cols) <= self.settings.max_radar_columns:
            raise DirectiveShapeError(
                f"radar chart needs {self.settings.min_radar_columns} to "
                f"{self.settings.max_radar_columns} columns, got {len(cols)}",
                chart_type=directive.kind.value
            )
        indices = [self._resolve(table, name, directive, "cols") for name in cols]

        sums = np.zeros(len(indices))
        count = 0
        for row in table.rows:
            values = [parse_number(row[i]) for i in indices]
            # A row with any non-numeric member is excluded from every axis
            if any(v is None for v in values):
                continue
            sums += values
            count += 1

        if count == 0:
            return None
        axes = [RadarAxis(name, float(total / count)) for name, total in zip(cols, sums)]
        return ChartSpec(kind=ChartKind.RADAR, title=self._title(directive), axes=axes)
