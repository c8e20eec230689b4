# Prompt for chart suggestions over a profiled sheet
PROMPT_CHART_SUGGESTIONS = """You are a data-visualization expert. Propose at most {max_charts} charts that reveal patterns in this table.
Return ONLY a JSON array of chart objects matching the schema below. Do not include any prose.

Columns:
{columns}

Schema:
{{"kind": "scatter|line|bar|histogram|pie|radar",
 "x": "column name",
 "y": "column name or null",
 "cols": ["column name", ...],
 "agg": "sum|average|count or null",
 "title": "string"}}

Rules:
- Use column names exactly as listed.
- scatter and line need numeric "x" and "y".
- histogram needs a numeric "x".
- bar and pie group rows by "x"; "y" and "agg" are optional.
- radar needs 3 to 6 numeric columns in "cols".
"""


def get_chart_suggestion_prompt(columns: str, max_charts: int = 3) -> str:
    """Get the prompt asking for chart directives over the given column listing."""
    if not columns:
        raise ValueError("Column listing cannot be empty")
    return PROMPT_CHART_SUGGESTIONS.format(columns=columns, max_charts=max_charts)
