import pytest

from plotpad.charts import ChartFigureBuilder, ChartKind, ChartSpec
from plotpad.charts.models import ChartPoint, BarValue, PieSlice, RadarAxis


@pytest.fixture
def builder():
    return ChartFigureBuilder()


def test_scatter_figure(builder):
    spec = ChartSpec(kind=ChartKind.SCATTER, title="Points", points=[ChartPoint(1, 2), ChartPoint(3, 4)])
    figure = builder.build(spec)
    trace = figure["plotly_json"]["data"][0]
    assert trace["mode"] == "markers"
    assert figure["plotly_json"]["layout"]["title"]["text"] == "Points"
    assert figure["data_summary"]["y_range"] == [2, 4]


def test_histogram_summary(builder):
    spec = ChartSpec(kind=ChartKind.HISTOGRAM, title="Hist", points=[ChartPoint(0.5, 2), ChartPoint(1.5, 3)])
    summary = builder.build(spec)["data_summary"]
    assert summary["bins"] == 2
    assert summary["total_count"] == 5


def test_bar_figure(builder):
    spec = ChartSpec(kind=ChartKind.BAR, title="Bars", bars=[BarValue("a", 2.0), BarValue("b", 5.0)])
    figure = builder.build(spec)
    assert figure["plotly_json"]["data"][0]["type"] == "bar"
    assert figure["data_summary"]["max_value"] == 5.0


def test_pie_keeps_slice_order(builder):
    spec = ChartSpec(kind=ChartKind.PIE, title="Share", slices=[PieSlice("a", 1.0), PieSlice("b", 3.0)])
    figure = builder.build(spec)
    trace = figure["plotly_json"]["data"][0]
    assert trace["labels"] == ["a", "b"]
    assert trace["sort"] is False
    assert [c["percentage"] for c in figure["data_summary"]["category_breakdown"]] == [25.0, 75.0]


def test_radar_closes_polygon(builder):
    axes = [RadarAxis("A", 1.0), RadarAxis("B", 2.0), RadarAxis("C", 3.0)]
    figure = builder.build(ChartSpec(kind=ChartKind.RADAR, title="Radar", axes=axes))
    trace = figure["plotly_json"]["data"][0]
    assert trace["theta"] == ["A", "B", "C", "A"]
    assert figure["data_summary"]["means"] == {"A": 1.0, "B": 2.0, "C": 3.0}
