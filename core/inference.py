from __future__ import annotations

from typing import List

from core.dataset import Dataset, is_number


def numeric_columns(dataset: Dataset) -> List[str]:
    """Columns whose first-row value is a number.

    Only the first row is inspected; later rows are never consulted, so a
    column that starts with text stays non-numeric even if the rest are numbers.
    """
    if dataset.is_empty:
        return []
    first = dataset.rows[0]
    return [col for col in dataset.columns if is_number(first.get(col))]
