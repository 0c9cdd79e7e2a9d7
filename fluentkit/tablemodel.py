"""A list-of-rows table model with change notifications."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from enum import IntEnum
from typing import Any

__all__ = ["Role", "TableModel"]

Listener = Callable[[str, int, int], None]


class Role(IntEnum):
    """Data roles a view may ask the model for."""

    ROW_MODEL = 0x0101
    COLUMN_MODEL = 0x0102


class TableModel:
    """Rows are dicts; columns are described by ``column_source`` dicts.

    Listeners receive ``(kind, first, last)`` where kind is one of
    "reset", "inserted", "removed" or "changed".
    """

    def __init__(
        self,
        rows: Iterable[Mapping[str, Any]] = (),
        column_source: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        self._rows: list[dict[str, Any]] = [dict(row) for row in rows]
        self.column_source: list[dict[str, Any]] = [dict(col) for col in column_source]
        self._listeners: list[Listener] = []

    @property
    def rows(self) -> list[dict[str, Any]]:
        return list(self._rows)

    @rows.setter
    def rows(self, value: Iterable[Mapping[str, Any]]) -> None:
        self._rows = [dict(row) for row in value]
        self._emit("reset", 0, len(self._rows) - 1)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return len(self.column_source)

    def __len__(self) -> int:
        return len(self._rows)

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a change listener; return a function that removes it."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, kind: str, first: int, last: int) -> None:
        for listener in list(self._listeners):
            listener(kind, first, last)

    def _check_row(self, row_index: int) -> None:
        if not 0 <= row_index < len(self._rows):
            raise IndexError(f"row {row_index} out of range 0..{len(self._rows) - 1}")

    def data(self, row: int, column: int, role: Role) -> Any:
        """Return the row dict or column dict for ``role``; None for other roles."""
        if role == Role.ROW_MODEL:
            self._check_row(row)
            return self._rows[row]
        if role == Role.COLUMN_MODEL:
            if not 0 <= column < len(self.column_source):
                raise IndexError(f"column {column} out of range")
            return self.column_source[column]
        return None

    def role_names(self) -> dict[Role, str]:
        return {Role.ROW_MODEL: "rowModel", Role.COLUMN_MODEL: "columnModel"}

    def clear(self) -> None:
        self._rows.clear()
        self._emit("reset", 0, -1)

    def get_row(self, row_index: int) -> dict[str, Any]:
        self._check_row(row_index)
        return self._rows[row_index]

    def set_row(self, row_index: int, row: Mapping[str, Any]) -> None:
        self._check_row(row_index)
        self._rows[row_index] = dict(row)
        self._emit("changed", row_index, row_index)

    def insert_row(self, row_index: int, row: Mapping[str, Any]) -> None:
        if not 0 <= row_index <= len(self._rows):
            raise IndexError(f"insert position {row_index} out of range 0..{len(self._rows)}")
        self._rows.insert(row_index, dict(row))
        self._emit("inserted", row_index, row_index)

    def remove_row(self, row_index: int, rows: int = 1) -> None:
        if rows < 1:
            raise ValueError(f"rows must be at least 1, got {rows}")
        if row_index < 0 or row_index + rows > len(self._rows):
            raise IndexError(f"cannot remove {rows} row(s) at {row_index}")
        del self._rows[row_index:row_index + rows]
        self._emit("removed", row_index, row_index + rows - 1)

    def append_row(self, row: Mapping[str, Any]) -> None:
        self.insert_row(len(self._rows), row)