"""A filtering and sorting view over a table model."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from typing import Any

from fluentkit.tablemodel import TableModel

__all__ = ["SortOrder", "SortProxyModel"]

Filter = Callable[[int], bool]
Comparator = Callable[[int, int], bool]


class SortOrder(Enum):
    ASCENDING = auto()
    DESCENDING = auto()


class _SortKey:
    __slots__ = ("row", "before")

    def __init__(self, row: int, before: Callable[[int, int], bool]) -> None:
        self.row = row
        self.before = before

    def __lt__(self, other: _SortKey) -> bool:
        return self.before(self.row, other.row)


class SortProxyModel:
    """Presents a table model's rows filtered and sorted by user callbacks.

    The filter receives a source row index; the comparator receives two source
    row indices. The view is recomputed from the source on every access.
    """

    def __init__(self, model: TableModel | None = None) -> None:
        self.model = model
        self._filter: Filter | None = None
        self._comparator: Comparator | None = None
        self._sort_column = -1
        self._sort_order = SortOrder.ASCENDING

    @property
    def sort_order(self) -> SortOrder:
        return self._sort_order

    @property
    def sort_column(self) -> int:
        return self._sort_column

    @property
    def row_count(self) -> int:
        return len(self._mapping())

    @property
    def rows(self) -> list[dict[str, Any]]:
        model = self.model
        if model is None:
            return []
        return [model.get_row(source) for source in self._mapping()]

    def _accepts(self, source_row: int) -> bool:
        if self._filter is None:
            return True
        return bool(self._filter(source_row))

    def _less_than(self, left: int, right: int) -> bool:
        if self._comparator is None:
            return True
        flag = bool(self._comparator(left, right))
        return not flag if self._sort_order is SortOrder.ASCENDING else flag

    def _mapping(self) -> list[int]:
        if self.model is None:
            return []
        rows = [row for row in range(self.model.row_count) if self._accepts(row)]
        if self._sort_column < 0:
            return rows
        if self._sort_order is SortOrder.ASCENDING:
            before = self._less_than
        else:
            def before(left: int, right: int) -> bool:
                return self._less_than(right, left)
        return sorted(rows, key=lambda row: _SortKey(row, before))

    def set_comparator(self, comparator: Comparator | None) -> None:
        """Install a comparator (None to unsort) and re-sort in the opposite order."""
        self._comparator = comparator
        self._sort_column = -1 if comparator is None else 0
        self._sort_order = (
            SortOrder.DESCENDING
            if self._sort_order is SortOrder.ASCENDING
            else SortOrder.ASCENDING
        )

    def set_filter(self, filter_func: Filter | None) -> None:
        self._filter = filter_func

    def map_to_source(self, row_index: int) -> int:
        """Source row shown at proxy position ``row_index``."""
        mapping = self._mapping()
        if not 0 <= row_index < len(mapping):
            raise IndexError(f"proxy row {row_index} out of range 0..{len(mapping) - 1}")
        return mapping[row_index]

    def _source(self) -> TableModel:
        if self.model is None:
            raise IndexError("no source model")
        return self.model

    def get_row(self, row_index: int) -> dict[str, Any]:
        source = self.map_to_source(row_index)
        return self._source().get_row(source)

    def set_row(self, row_index: int, value: dict[str, Any]) -> None:
        source = self.map_to_source(row_index)
        self._source().set_row(source, value)

    def insert_row(self, row_index: int, value: dict[str, Any]) -> None:
        source = self.map_to_source(row_index)
        self._source().insert_row(source, value)

    def remove_row(self, row_index: int, rows: int = 1) -> None:
        source = self.map_to_source(row_index)
        self._source().remove_row(source, rows)