"""
Chart Generation Data Models

Internal data models for the chart generation system.
These are separate from API models to maintain clean separation of concerns.
"""

from typing import Dict, List, Any, Optional, Tuple, NamedTuple
from enum import Enum
from dataclasses import dataclass, field
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator

from .exceptions import DirectiveShapeError


class ColumnKind(str, Enum):
    """Inferred column types."""
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class ChartKind(str, Enum):
    """Supported chart types."""
    SCATTER = "scatter"
    LINE = "line"
    BAR = "bar"
    HISTOGRAM = "histogram"
    PIE = "pie"
    RADAR = "radar"

    @property
    def default_title(self) -> str:
        return self.value.capitalize()


class Aggregation(str, Enum):
    """Per-group aggregations for bar and pie charts."""
    SUM = "sum"
    AVERAGE = "average"
    COUNT = "count"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Aggregation"]:
        """Parse an aggregation keyword; ``avg`` is accepted for ``average``."""
        if value is None:
            return None
        keyword = value.strip().lower()
        if keyword == "avg":
            return cls.AVERAGE
        try:
            return cls(keyword)
        except ValueError:
            raise DirectiveShapeError(f"unknown aggregation '{value}'")


@dataclass(frozen=True)
class TypedColumn:
    """A header column with its inferred kind."""
    name: str
    kind: ColumnKind
    numeric_count: int = 0

    @property
    def is_numeric(self) -> bool:
        return self.kind == ColumnKind.NUMERIC


@dataclass(frozen=True)
class ChartDirective:
    """Abstract instruction describing what to plot, before data resolution."""
    kind: ChartKind
    x: Optional[str] = None
    y: Optional[str] = None
    cols: Optional[Tuple[str, ...]] = None
    agg: Optional[Aggregation] = None
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'kind': self.kind.value,
            'x': self.x,
            'y': self.y,
            'cols': list(self.cols) if self.cols is not None else None,
            'agg': self.agg.value if self.agg else None,
            'title': self.title
        }


class ChartPoint(NamedTuple):
    x: float
    y: float


class BarValue(NamedTuple):
    label: str
    value: float


class PieSlice(NamedTuple):
    label: str
    value: float


class RadarAxis(NamedTuple):
    label: str
    value: float


@dataclass
class ChartSpec:
    """Plottable output for one directive."""
    kind: ChartKind
    title: str
    points: List[ChartPoint] = field(default_factory=list)
    bars: List[BarValue] = field(default_factory=list)
    slices: List[PieSlice] = field(default_factory=list)
    axes: List[RadarAxis] = field(default_factory=list)

    @property
    def axis_labels(self) -> List[str]:
        return [axis.label for axis in self.axes]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            'kind': self.kind.value,
            'title': self.title,
            'points': [list(p) for p in self.points],
            'bars': [{'label': b.label, 'value': b.value} for b in self.bars],
            'slices': [{'label': s.label, 'value': s.value} for s in self.slices],
            'axes': [{'label': a.label, 'value': a.value} for a in self.axes]
        }


@dataclass
class DirectiveOutcome:
    """Result of deriving one directive: a spec, an error, or neither (no data)."""
    directive: ChartDirective
    spec: Optional[ChartSpec] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.spec is not None


class DirectivePayload(BaseModel):
    """One directive object as produced by the suggestion model."""
    model_config = ConfigDict(extra="ignore")

    kind: str = Field(validation_alias=AliasChoices("kind", "type"))
    x: Optional[str] = None
    y: Optional[str] = None
    cols: Optional[List[str]] = None
    agg: Optional[str] = None
    title: Optional[str] = None

    @field_validator("x", "y", "agg", "title", mode="before")
    @classmethod
    def _null_tokens_as_missing(cls, value):
        if isinstance(value, str) and value.strip().upper() in ("", "NULL", "NONE"):
            return None
        return value

    @field_validator("cols", mode="before")
    @classmethod
    def _null_cols_as_missing(cls, value):
        if isinstance(value, str) and value.strip().upper() in ("", "NULL", "NONE"):
            return None
        return value

    @field_validator("kind")
    @classmethod
    def _normalize_kind(cls, value: str) -> str:
        return value.strip().lower()

    def to_directive(self) -> Optional[ChartDirective]:
        """
        Convert to a ChartDirective.

        Returns:
            None for an unrecognized chart kind

        Raises:
            DirectiveShapeError: If a required field is missing or invalid
        """
        try:
            kind = ChartKind(self.kind)
        except ValueError:
            return None

        if kind == ChartKind.RADAR:
            if not self.cols:
                raise DirectiveShapeError("radar chart requires 'cols'", chart_type=kind.value)
        elif not self.x:
            raise DirectiveShapeError(f"{kind.value} chart requires 'x'", chart_type=kind.value)

        return ChartDirective(
            kind=kind,
            x=self.x,
            y=self.y,
            cols=tuple(self.cols) if self.cols is not None else None,
            agg=Aggregation.parse(self.agg),
            title=self.title
        )


class ChartSettings:
    """Configuration settings for chart generation."""

    def __init__(self):
        # Data eligibility thresholds
        self.min_rows = 2

        # Chart type limits
        self.min_histogram_bins = 5
        self.min_radar_columns = 3
        self.max_radar_columns = 6

        # Suggestion settings
        self.max_chart_recommendations = 3
        self.suggestion_timeout = 60  # seconds


# API Models for Chart Endpoints
# These are kept here to maintain isolation of chart functionality

class ChartData(BaseModel):
    """Chart data model for API responses."""
    kind: str = Field(description="Type of chart (scatter, line, bar, histogram, pie, radar)")
    title: str = Field(description="Chart title")
    spec: Dict[str, Any] = Field(description="Plottable series for the chart")
    plotly_json: Dict[str, Any] = Field(default_factory=dict, description="Plotly figure JSON")
    data_summary: Dict[str, Any] = Field(default_factory=dict, description="Summary statistics about the series")


class ChartResponse(BaseModel):
    """Chart response model for API responses."""
    charts: List[ChartData] = Field(default_factory=list, description="Generated charts")
    recommendations: int = Field(default=0, description="Number of charts generated")
