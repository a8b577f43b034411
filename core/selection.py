from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Literal, Mapping, Optional, Tuple

from core.csv_parser import parse_csv
from core.dataset import Dataset
from core.errors import InvalidSelectionError
from core.inference import numeric_columns

logger = logging.getLogger(__name__)

ChartKind = Literal["bar", "line"]
CHART_KINDS: Tuple[str, ...] = ("bar", "line")


@dataclass(frozen=True)
class ChartSelection:
    x: Optional[str] = None
    y: Tuple[str, ...] = ()
    kind: ChartKind = "bar"

    @property
    def renderable(self) -> bool:
        return bool(self.x) and len(self.y) > 0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": list(self.y), "kind": self.kind, "renderable": self.renderable}


class SelectionState:
    """Dataset plus chart selection owned by a single page or API app.

    Both are replaced wholesale on every transition. With ``strict`` an
    unknown X column or chart kind raises ``InvalidSelectionError``;
    otherwise it is ignored. Invalid Y columns are always dropped.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict
        self.dataset: Dataset = Dataset.empty()
        self.selection: ChartSelection = ChartSelection()

    @property
    def columns(self) -> List[str]:
        return list(self.dataset.columns)

    @property
    def numeric_columns(self) -> List[str]:
        return numeric_columns(self.dataset)

    def set_dataset(self, dataset: Dataset) -> None:
        numeric = numeric_columns(dataset)
        x = dataset.columns[0] if dataset.columns else None
        y = (numeric[0],) if numeric else ()
        self.dataset = dataset
        self.selection = ChartSelection(x=x, y=y, kind=self.selection.kind)
        logger.info(
            "Loaded dataset: %d rows, %d columns, default x=%s y=%s",
            dataset.row_count,
            dataset.column_count,
            x,
            list(y),
        )

    def load_text(self, text: str) -> Dataset:
        # parse_csv raises before anything is replaced
        dataset = parse_csv(text)
        self.set_dataset(dataset)
        return dataset

    def set_x(self, column: str) -> None:
        if column not in self.dataset.columns:
            if self.strict:
                raise InvalidSelectionError(f"Unknown column '{column}'", column=column)
            logger.debug("Ignoring unknown x column %r", column)
            return
        self.selection = replace(self.selection, x=column)

    def set_y(self, columns: Iterable[str]) -> None:
        numeric = set(numeric_columns(self.dataset))
        kept: List[str] = []
        for col in columns:
            if col in numeric and col not in kept:
                kept.append(col)
            elif col not in numeric:
                logger.debug("Dropping non-numeric y column %r", col)
        self.selection = replace(self.selection, y=tuple(kept))

    def set_kind(self, kind: str) -> None:
        if kind not in CHART_KINDS:
            if self.strict:
                raise InvalidSelectionError(f"Unknown chart kind '{kind}'")
            logger.debug("Ignoring unknown chart kind %r", kind)
            return
        self.selection = replace(self.selection, kind=kind)

    def clear(self) -> None:
        self.dataset = Dataset.empty()
        self.selection = ChartSelection(kind=self.selection.kind)

    def apply(self, raw: Mapping[str, Any]) -> ChartSelection:
        """Apply ``{"x", "y", "kind"}`` input; missing or None keys are left alone.

        In strict mode a failing transition leaves the selection as it was.
        """
        before = self.selection
        try:
            if raw.get("x") is not None:
                self.set_x(str(raw["x"]))
            if raw.get("y") is not None:
                y = raw["y"]
                self.set_y([y] if isinstance(y, str) else [str(c) for c in y])
            if raw.get("kind") is not None:
                self.set_kind(str(raw["kind"]))
        except InvalidSelectionError:
            self.selection = before
            raise
        return self.selection
