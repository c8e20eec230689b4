"""
Charts Package - Chart Generation for PlotPad Sheets

This package turns raw sheet CSV into plottable chart specs. A language model
proposes chart directives; when it proposes nothing usable, a deterministic
fallback picks a histogram over the first column with numeric data.

Core Components:
- ChartPipeline: Main interface for chart generation
- CsvProfiler: Parses CSV and infers column kinds
- SuggestionClient: Asks the model for chart directives
- FallbackSelector: Model-free directive choice
- ChartDeriver: Computes series for each directive
- ChartFigureBuilder: Builds Plotly figure JSON from specs

Usage:
    from plotpad.charts import ChartPipeline

    pipeline = ChartPipeline(service)
    specs = await pipeline.generate(csv_text)
"""

from .pipeline import ChartPipeline
from .profiler import CsvProfiler, SheetTable
from .suggestions import SuggestionClient
from .fallback import FallbackSelector
from .deriver import ChartDeriver
from .figures import ChartFigureBuilder
from .models import (
    ChartKind, ColumnKind, Aggregation, TypedColumn, ChartDirective, ChartSpec,
    DirectiveOutcome, ChartSettings, ChartData, ChartResponse
)
from .exceptions import ChartGenerationError, MalformedInputError

__all__ = [
    'ChartPipeline',
    'CsvProfiler',
    'SheetTable',
    'SuggestionClient',
    'FallbackSelector',
    'ChartDeriver',
    'ChartFigureBuilder',
    'ChartKind',
    'ColumnKind',
    'Aggregation',
    'TypedColumn',
    'ChartDirective',
    'ChartSpec',
    'DirectiveOutcome',
    'ChartSettings',
    'ChartData',
    'ChartResponse',
    'ChartGenerationError',
    'MalformedInputError'
]
