"""
Chart Pipeline

Main coordinator for chart generation: profile the sheet, ask the model for
directives, derive them, and fall back to a heuristic when nothing usable
comes back.
"""

from typing import Dict, List, Any, Optional
import asyncio
import time
import logging

from .models import ChartKind, ChartSpec, ChartSettings, ChartData
from .profiler import CsvProfiler
from .deriver import ChartDeriver
from .suggestions import SuggestionClient
from .fallback import FallbackSelector
from .figures import ChartFigureBuilder
from .exceptions import MalformedInputError
from ..llm import TextGenerationService

logger = logging.getLogger(__name__)


class ChartPipeline:
    """Orchestrates CSV profiling, suggestion, fallback and derivation."""

    def __init__(self, service: Optional[TextGenerationService] = None, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()
        self.profiler = CsvProfiler(self.settings)
        self.suggestions = SuggestionClient(service, self.settings)
        self.fallback = FallbackSelector()
        self.deriver = ChartDeriver(self.settings)
        self.figures = ChartFigureBuilder()

    async def generate(self, csv_text: str) -> List[ChartSpec]:
        """
        Generate charts for plaintext CSV.

        Args:
            csv_text: Raw sheet content

        Returns:
            Chart specs; empty when the table is too small or holds no numeric
            data and the model suggested nothing usable
        """
        start_time = time.time()

        try:
            table = await asyncio.to_thread(self.profiler.profile, csv_text)
        except MalformedInputError as e:
            logger.info(f"Sheet not eligible for charts: {e}")
            return []

        specs: List[ChartSpec] = []
        directives = await self.suggestions.suggest(table.columns)
        if directives:
            specs = await asyncio.to_thread(self.deriver.derive_specs, table, directives)

        if not specs:
            fallback_directives = self.fallback.select(table.columns)
            if fallback_directives:
                specs = await asyncio.to_thread(self.deriver.derive_specs, table, fallback_directives)

        logger.info(
            f"Generated {len(specs)} chart(s) from {table.row_count} rows "
            f"in {(time.time() - start_time) * 1000:.0f}ms"
        )
        return specs

    def render(self, specs: List[ChartSpec]) -> List[ChartData]:
        """Attach Plotly figures to specs; a spec that fails to render is skipped."""
        charts = []
        for spec in specs:
            try:
                figure = self.figures.build(spec)
            except Exception as e:
                logger.error(f"Error rendering {spec.kind.value} chart: {str(e)}")
                continue
            charts.append(ChartData(
                kind=spec.kind.value,
                title=spec.title,
                spec=spec.to_dict(),
                plotly_json=figure['plotly_json'],
                data_summary=figure['data_summary']
            ))
        return charts

    async def analyze(self, csv_text: str) -> Dict[str, Any]:
        """
        Profile CSV without calling the model.

        Returns:
            Dictionary with the column profile and the fallback directive
        """
        try:
            table = await asyncio.to_thread(self.profiler.profile, csv_text)
        except MalformedInputError as e:
            return {
                "eligible": False,
                "reason": str(e),
                "profile": {},
                "fallback": []
            }

        fallback = self.fallback.select(table.columns)
        return {
            "eligible": True,
            "reason": "Sheet has a header and data rows",
            "profile": table.summary(),
            "fallback": [directive.to_dict() for directive in fallback]
        }

    def get_chart_capabilities(self) -> Dict[str, Any]:
        """Get information about chart generation capabilities."""
        return {
            "supported_chart_types": [kind.value for kind in ChartKind],
            "settings": {
                "min_rows": self.settings.min_rows,
                "min_histogram_bins": self.settings.min_histogram_bins,
                "radar_columns": [self.settings.min_radar_columns, self.settings.max_radar_columns],
                "max_recommendations": self.settings.max_chart_recommendations,
                "suggestion_timeout": self.settings.suggestion_timeout
            },
            "suggestions_enabled": self.suggestions.service is not None
        }
