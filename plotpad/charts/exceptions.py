"""
Chart Generation Exceptions

Custom exceptions for the chart generation system. None of these escape the
pipeline: each is contained at the scope that raised it.
"""


class ChartGenerationError(Exception):
    """Base exception for chart generation errors."""

    def __init__(self, message: str, chart_type: str = None, data_size: int = None):
        super().__init__(message)
        self.chart_type = chart_type
        self.data_size = data_size


class MalformedInputError(ChartGenerationError):
    """Raised when the CSV text has fewer rows than a header plus one data row."""

    def __init__(self, data_size: int, minimum_required: int = 2):
        super().__init__(
            f"Insufficient rows: {data_size} (minimum {minimum_required} required)",
            data_size=data_size
        )
        self.minimum_required = minimum_required


class UnresolvedColumnError(ChartGenerationError):
    """Raised when a directive references a column missing from the header."""

    def __init__(self, column: str, chart_type: str = None):
        super().__init__(f"Column '{column}' not found in header", chart_type=chart_type)
        self.column = column


class DirectiveShapeError(ChartGenerationError):
    """Raised when a directive is incomplete or carries invalid options."""

    def __init__(self, message: str, chart_type: str = None):
        super().__init__(f"Invalid directive: {message}", chart_type=chart_type)


class SuggestionUnavailableError(ChartGenerationError):
    """Raised when the model response yields no usable directive list."""

    def __init__(self, reason: str):
        super().__init__(f"No chart suggestions available: {reason}")
        self.reason = reason


class NoNumericDataError(ChartGenerationError):
    """Raised when no column holds any numeric value to fall back on."""

    def __init__(self):
        super().__init__("No numeric data available for a fallback chart")
