import pytest

from core.csv_parser import parse_csv
from core.dataset import Dataset
from core.errors import InvalidSelectionError, ProjectionError
from core.projection import format_label, project, series_specs, table_payload
from core.selection import ChartSelection


@pytest.fixture
def abc_dataset():
    return parse_csv("a,b\n1,x\n2,y\n3,z")


def test_project_example(abc_dataset):
    records = project(abc_dataset, ChartSelection(x="a", y=("a",)))
    assert records == [{"name": "1", "a": 1.0}, {"name": "2", "a": 2.0}, {"name": "3", "a": 3.0}]


@pytest.mark.parametrize("selection", [ChartSelection(), ChartSelection(x="a"), ChartSelection(y=("a",))])
def test_project_returns_empty_when_not_renderable(abc_dataset, selection):
    assert project(abc_dataset, selection) == []
    assert project(Dataset.empty(), selection) == []


def test_project_preserves_row_order():
    ds = parse_csv("k,v\nz,3\na,1\nm,2")
    records = project(ds, ChartSelection(x="k", y=("v",)))
    assert [r["name"] for r in records] == ["z", "a", "m"]
    assert [r["v"] for r in records] == [3.0, 1.0, 2.0]


def test_project_multiple_y_columns(sales_dataset):
    records = project(sales_dataset, ChartSelection(x="month", y=("revenue", "units")))
    assert records[0] == {"name": "Jan", "revenue": 1200.5, "units": 10.0}


def test_project_strict_rejects_text_in_numeric_column():
    ds = parse_csv("k,v\na,1\nb,oops")
    with pytest.raises(ProjectionError) as excinfo:
        project(ds, ChartSelection(x="k", y=("v",)))
    assert excinfo.value.column == "v"
    assert excinfo.value.row == 3


def test_project_passthrough_keeps_raw_value():
    ds = parse_csv("k,v\na,1\nb,oops")
    records = project(ds, ChartSelection(x="k", y=("v",)), strict=False)
    assert records[1] == {"name": "b", "v": "oops"}


def test_project_rejects_columns_outside_dataset(abc_dataset):
    with pytest.raises(InvalidSelectionError):
        project(abc_dataset, ChartSelection(x="missing", y=("a",)))


@pytest.mark.parametrize(
    "value,expected",
    [(1.0, "1"), (-2.0, "-2"), (2.5, "2.5"), (1234567.0, "1234567"), (1e21, "1e+21"), ("Jan", "Jan")],
)
def test_format_label(value, expected):
    assert format_label(value) == expected


def test_series_specs_cycle_palette():
    specs = series_specs(ChartSelection(x="k", y=tuple(f"c{i}" for i in range(6))))
    assert [s["column"] for s in specs] == ["c0", "c1", "c2", "c3", "c4", "c5"]
    assert specs[0]["color"] == specs[5]["color"]
    assert specs[2]["name"] == "c2"


def test_table_payload(abc_dataset):
    payload = table_payload(abc_dataset)
    assert payload["columns"] == [{"key": "a", "label": "a"}, {"key": "b", "label": "b"}]
    assert payload["rows"][2] == {"a": 3.0, "b": "z"}
