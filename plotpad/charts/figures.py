"""
Chart Figure Builder

Turns derived ChartSpecs into Plotly figure JSON for clients to render.
"""

from typing import Dict, Any
import json
import logging

import plotly.graph_objects as go

from .models import ChartKind, ChartSpec
from .exceptions import ChartGenerationError

logger = logging.getLogger(__name__)


class ChartFigureBuilder:
    """Builds Plotly figures from chart specs."""

    def build(self, spec: ChartSpec) -> Dict[str, Any]:
        """
        Build a figure for a chart spec.

        Args:
            spec: Derived chart spec

        Returns:
            Dictionary with ``plotly_json`` and ``data_summary``
        """
        builders = {
            ChartKind.SCATTER: self._build_scatter,
            ChartKind.LINE: self._build_line,
            ChartKind.HISTOGRAM: self._build_histogram,
            ChartKind.BAR: self._build_bar,
            ChartKind.PIE: self._build_pie,
            ChartKind.RADAR: self._build_radar
        }
        builder = builders.get(spec.kind)
        if builder is None:
            raise ChartGenerationError(f"Unsupported chart type: {spec.kind}", chart_type=str(spec.kind))

        fig, data_summary = builder(spec)
        fig.update_layout(
            title=spec.title,
            height=400,
            plot_bgcolor='white',
            font=dict(size=12)
        )
        return {
            "plotly_json": json.loads(fig.to_json()),
            "data_summary": data_summary
        }

    def _point_summary(self, spec: ChartSpec) -> Dict[str, Any]:
        xs = [p.x for p in spec.points]
        ys = [p.y for p in spec.points]
        return {
            "data_points": len(spec.points),
            "x_range": [min(xs), max(xs)] if xs else None,
            "y_range": [min(ys), max(ys)] if ys else None
        }

    def _build_scatter(self, spec: ChartSpec):
        fig = go.Figure(go.Scatter(
            x=[p.x for p in spec.points],
            y=[p.y for p in spec.points],
            mode='markers'
        ))
        return fig, self._point_summary(spec)

    def _build_line(self, spec: ChartSpec):
        fig = go.Figure(go.Scatter(
            x=[p.x for p in spec.points],
            y=[p.y for p in spec.points],
            mode='lines+markers'
        ))
        return fig, self._point_summary(spec)

    def _build_histogram(self, spec: ChartSpec):
        # Bins are already counted; draw them as a line over bin centers
        fig = go.Figure(go.Scatter(
            x=[p.x for p in spec.points],
            y=[p.y for p in spec.points],
            mode='lines+markers'
        ))
        summary = self._point_summary(spec)
        summary["bins"] = len(spec.points)
        summary["total_count"] = sum(p.y for p in spec.points)
        return fig, summary

    def _build_bar(self, spec: ChartSpec):
        fig = go.Figure(go.Bar(
            x=[b.label for b in spec.bars],
            y=[b.value for b in spec.bars]
        ))
        fig.update_layout(xaxis_tickangle=-45, showlegend=False)
        values = [b.value for b in spec.bars]
        return fig, {
            "total_categories": len(values),
            "total_value": sum(values),
            "max_value": max(values) if values else None
        }

    def _build_pie(self, spec: ChartSpec):
        fig = go.Figure(go.Pie(
            labels=[s.label for s in spec.slices],
            values=[s.value for s in spec.slices],
            sort=False
        ))
        fig.update_traces(textposition='inside', textinfo='percent+label')
        total = sum(s.value for s in spec.slices)
        return fig, {
            "total_categories": len(spec.slices),
            "total_value": total,
            "category_breakdown": [
                {
                    "category": s.label,
                    "value": s.value,
                    "percentage": round(s.value / total * 100, 1) if total else 0.0
                }
                for s in spec.slices
            ]
        }

    def _build_radar(self, spec: ChartSpec):
        labels = spec.axis_labels
        values = [a.value for a in spec.axes]
        # Repeat the first axis to close the polygon
        fig = go.Figure(go.Scatterpolar(
            r=values + values[:1],
            theta=labels + labels[:1],
            fill='toself'
        ))
        fig.update_layout(polar=dict(radialaxis=dict(visible=True)), showlegend=False)
        return fig, {
            "axes": len(labels),
            "means": dict(zip(labels, values))
        }
