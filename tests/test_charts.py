from core.charts import build_chart, chart_subtitle, to_vega_spec
from core.projection import project, series_specs
from core.selection import ChartSelection


def _spec(dataset, selection):
    records = project(dataset, selection)
    return to_vega_spec(build_chart(records, series_specs(selection), selection.kind, x_title=selection.x))


def test_bar_chart_spec(sales_dataset):
    spec = _spec(sales_dataset, ChartSelection(x="month", y=("revenue", "units"), kind="bar"))
    mark = spec["mark"]
    assert (mark["type"] if isinstance(mark, dict) else mark) == "bar"
    assert spec["encoding"]["x"]["field"] == "name"
    assert spec["encoding"]["x"]["sort"] == ["Jan", "Feb", "Mar"]
    assert spec["encoding"]["color"]["scale"]["domain"] == ["revenue", "units"]
    assert "xOffset" in spec["encoding"]


def test_line_chart_spec(sales_dataset):
    spec = _spec(sales_dataset, ChartSelection(x="month", y=("units",), kind="line"))
    assert spec["mark"]["type"] == "line"
    assert "xOffset" not in spec["encoding"]


def test_chart_data_is_long_form(sales_dataset):
    spec = _spec(sales_dataset, ChartSelection(x="month", y=("revenue", "units")))
    values = next(iter(spec["datasets"].values()))
    assert len(values) == 6
    assert values[0]["series"] == "revenue"
    assert values[1]["series"] == "units"


def test_chart_subtitle():
    assert chart_subtitle(ChartSelection(x="month", y=("revenue", "units"))) == "revenue, units by month"
