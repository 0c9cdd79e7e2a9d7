"""A flattened tree model: rows are the visible nodes of a tree, in pre-order."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

__all__ = ["TreeNode", "TreeModel"]


class TreeNode:
    """One node of the tree: its data, depth, expansion and check state."""

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        depth: int = 0,
        parent: TreeNode | None = None,
        *,
        is_expanded: bool = True,
        checked: bool = False,
    ) -> None:
        self.data: dict[str, Any] = dict(data or {})
        self.depth = depth
        self.parent = parent
        self.is_expanded = is_expanded
        self.children: list[TreeNode] = []
        self._checked = checked

    def __repr__(self) -> str:
        return f"TreeNode(depth={self.depth}, data={self.data!r})"

    @property
    def checked(self) -> bool:
        """A leaf's own flag; a branch is checked when all its children are."""
        if not self.children:
            return self._checked
        return all(child.checked for child in self.children)

    @checked.setter
    def checked(self, value: bool) -> None:
        self._checked = bool(value)

    def has_children(self) -> bool:
        return bool(self.children)

    def has_next_node_by_index(self, index: int) -> bool:
        """Whether the ancestor at depth ``index`` has a later sibling."""
        node = self
        for _ in range(self.depth - index):
            if node.parent is None:
                raise ValueError(f"node has no ancestor at depth {index}")
            node = node.parent
        if node.parent is None:
            raise ValueError("node has no parent")
        siblings = node.parent.children
        return siblings.index(node) != len(siblings) - 1

    def hide_line_footer(self) -> bool:
        """True when this is the last child or the next sibling has children."""
        if self.parent is None:
            return False
        siblings = self.parent.children
        position = siblings.index(self)
        if position == len(siblings) - 1:
            return True
        return siblings[position + 1].has_children()

    def is_shown(self) -> bool:
        """True when every ancestor is expanded."""
        node = self.parent
        while node is not None:
            if not node.is_expanded:
                return False
            node = node.parent
        return True


def _walk(nodes: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """Yield the given nodes and all their descendants in pre-order."""
    stack = list(nodes)
    stack.reverse()
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class TreeModel:
    """Holds a tree built from nested dicts and the list of rows currently shown."""

    def __init__(self, column_source: Iterable[Mapping[str, Any]] = ()) -> None:
        self.column_source: list[dict[str, Any]] = [dict(col) for col in column_source]
        self.data_source_size = 0
        self._rows: list[TreeNode] = []
        self._data_source: list[TreeNode] = []
        self._root = TreeNode()

    @property
    def rows(self) -> list[TreeNode]:
        return list(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return len(self.column_source)

    def __len__(self) -> int:
        return len(self._rows)

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._rows):
            raise IndexError(f"row {row} out of range 0..{len(self._rows) - 1}")

    def set_data(self, data: Iterable[TreeNode]) -> None:
        """Replace the shown rows with the given nodes."""
        self._rows = list(data)

    def set_data_source(self, data: Iterable[Mapping[str, Any]]) -> None:
        """Build the tree from dicts whose optional "children" key nests more dicts."""
        self._root = TreeNode()
        self._data_source = []
        stack: list[tuple[Mapping[str, Any], int, TreeNode]] = [
            (item, 0, self._root) for item in reversed(list(data))
        ]
        while stack:
            item, depth, parent = stack.pop()
            node = TreeNode(item, depth, parent)
            parent.children.append(node)
            self._data_source.append(node)
            children = item.get("children") or []
            stack.extend((child, depth + 1, node) for child in reversed(list(children)))
        self._rows = list(self._data_source)
        self.data_source_size = len(self._data_source)

    def remove_rows(self, row: int, count: int) -> None:
        """Remove ``count`` shown rows from ``row``; out-of-range requests do nothing."""
        if row < 0 or row + count > len(self._rows) or count == 0:
            return
        del self._rows[row:row + count]

    def insert_rows(self, row: int, data: Iterable[TreeNode]) -> None:
        """Insert nodes as shown rows at ``row``; out-of-range requests do nothing."""
        nodes = list(data)
        if row < 0 or row > len(self._rows) or not nodes:
            return
        self._rows[row:row] = nodes

    def get_row(self, row: int) -> TreeNode:
        self._check_row(row)
        return self._rows[row]

    def set_row(self, row: int, data: Mapping[str, Any]) -> None:
        self._check_row(row)
        self._rows[row].data = dict(data)

    def check_row(self, row: int, checked: bool) -> None:
        """Check a leaf, or every leaf below a branch."""
        node = self.get_row(row)
        if node.has_children():
            for item in _walk(node.children):
                if not item.has_children():
                    item.checked = checked
        else:
            node.checked = checked

    def collapse(self, row: int) -> None:
        node = self.get_row(row)
        if not node.is_expanded:
            return
        node.is_expanded = False
        count = 0
        for following in self._rows[row + 1:]:
            if following.depth <= node.depth:
                break
            count += 1
        self.remove_rows(row + 1, count)

    def expand(self, row: int) -> None:
        node = self.get_row(row)
        if node.is_expanded:
            return
        node.is_expanded = True
        shown = [item for item in _walk(node.children) if item.is_shown()]
        self.insert_rows(row + 1, shown)

    def hit_has_children_expanded(self, row: int) -> bool:
        node = self.get_row(row)
        return node.has_children() and node.is_expanded

    def get_node(self, row: int) -> TreeNode:
        return self.get_row(row)

    def all_expand(self) -> None:
        rows = []
        for item in _walk(self._root.children):
            if item.has_children():
                item.is_expanded = True
            rows.append(item)
        self._rows = rows

    def all_collapse(self) -> None:
        for item in _walk(self._root.children):
            if item.has_children():
                item.is_expanded = False
        self._rows = list(self._root.children)

    def selection_model(self) -> list[TreeNode]:
        """All nodes, in tree order, that are checked."""
        return [node for node in self._data_source if node.checked]