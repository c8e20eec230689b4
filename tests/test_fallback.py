from plotpad.charts import FallbackSelector, ChartKind


def test_picks_first_column_with_any_number(profiler):
    table = profiler.profile("name,mixed,score\nann,x,1\nbob,2,3")
    directive, = FallbackSelector().select(table.columns)
    assert directive.kind == ChartKind.HISTOGRAM
    assert directive.x == "mixed"
    assert directive.title == "mixed distribution"


def test_all_categorical_table_has_no_fallback(profiler, categorical_csv):
    table = profiler.profile(categorical_csv)
    assert FallbackSelector().select(table.columns) == []
