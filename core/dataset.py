from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import pandas as pd

# A cell is either a finite float (Number) or the trimmed source text (Text).
Cell = Union[float, str]
Row = Dict[str, Cell]


def is_number(value: object) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


@dataclass(frozen=True)
class Dataset:
    """Parsed CSV content. Never mutated; a new upload produces a new Dataset."""

    columns: Tuple[str, ...] = ()
    rows: Tuple[Row, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "Dataset":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def records(self) -> List[Row]:
        return [dict(row) for row in self.rows]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.records(), columns=list(self.columns))
