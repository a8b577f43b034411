import pytest

from core.csv_parser import parse_csv
from core.selection import SelectionState

SALES_CSV = """month,region,revenue,units
Jan,North,1200.5,10
Feb,North,980,8
Mar,South,1500,12
"""


@pytest.fixture
def sales_text():
    return SALES_CSV


@pytest.fixture
def sales_dataset():
    return parse_csv(SALES_CSV)


@pytest.fixture
def sales_state():
    state = SelectionState(strict=True)
    state.load_text(SALES_CSV)
    return state
