import pytest

from fluentkit.treemodel import TreeModel, TreeNode

SOURCE = [
    {
        "title": "a",
        "children": [
            {"title": "a1"},
            {"title": "a2", "children": [{"title": "a2x"}]},
        ],
    },
    {"title": "b"},
]


@pytest.fixture
def model():
    tree = TreeModel()
    tree.set_data_source(SOURCE)
    return tree


def titles(nodes):
    return [node.data["title"] for node in nodes]


def test_data_source_preorder(model):
    assert titles(model.rows) == ["a", "a1", "a2", "a2x", "b"]
    assert model.data_source_size == len(model.rows)
    assert [node.depth for node in model.rows] == [0, 1, 1, 2, 0]


def test_collapse_and_expand_round_trip(model):
    before = model.rows
    model.collapse(0)
    assert titles(model.rows) == ["a", "b"]
    assert model.get_node(0).is_expanded is False
    model.expand(0)
    assert model.rows == before


def test_expand_skips_hidden_descendants(model):
    model.collapse(2)
    assert titles(model.rows) == ["a", "a1", "a2", "b"]
    model.collapse(0)
    model.expand(0)
    assert titles(model.rows) == ["a", "a1", "a2", "b"]


def test_check_branch_checks_leaves(model):
    model.check_row(0, True)
    assert model.get_row(0).checked is True
    assert titles(model.selection_model()) == ["a", "a1", "a2", "a2x"]
    model.check_row(0, False)
    assert model.selection_model() == []


def test_check_leaf(model):
    model.check_row(4, True)
    assert titles(model.selection_model()) == ["b"]


def test_branch_not_checked_when_one_leaf_unchecked(model):
    model.check_row(1, True)
    assert model.get_row(0).checked is False
    assert titles(model.selection_model()) == ["a1"]


def test_all_collapse_and_all_expand(model):
    model.all_collapse()
    assert titles(model.rows) == ["a", "b"]
    assert model.get_row(0).is_expanded is False
    model.all_expand()
    assert titles(model.rows) == ["a", "a1", "a2", "a2x", "b"]
    assert all(node.is_shown() for node in model.rows)


def test_hit_has_children_expanded(model):
    assert model.hit_has_children_expanded(0) is True
    assert model.hit_has_children_expanded(1) is False
    model.collapse(0)
    assert model.hit_has_children_expanded(0) is False


def test_hide_line_footer(model):
    rows = model.rows
    assert rows[1].hide_line_footer() is True
    assert rows[2].hide_line_footer() is True
    assert rows[0].hide_line_footer() is False
    assert rows[4].hide_line_footer() is True


def test_has_next_node_by_index(model):
    leaf = model.get_row(3)
    assert leaf.has_next_node_by_index(0) is True
    assert leaf.has_next_node_by_index(1) is False


def test_remove_rows_out_of_range_is_ignored(model):
    before = model.rows
    model.remove_rows(4, 5)
    model.remove_rows(-1, 1)
    model.remove_rows(0, 0)
    assert model.rows == before


def test_insert_and_remove_rows(model):
    extra = TreeNode({"title": "z"})
    model.insert_rows(1, [extra])
    assert titles(model.rows)[:3] == ["a", "z", "a1"]
    model.remove_rows(1, 1)
    assert extra not in model.rows
    model.insert_rows(99, [extra])
    assert extra not in model.rows


def test_get_row_out_of_range(model):
    with pytest.raises(IndexError):
        model.get_row(len(model.rows))
    with pytest.raises(IndexError):
        model.get_row(-1)


def test_set_row_replaces_data(model):
    model.set_row(1, {"title": "renamed"})
    assert model.get_row(1).data == {"title": "renamed"}


def test_set_data_replaces_rows(model):
    nodes = [TreeNode({"title": "x"}), TreeNode({"title": "y"})]
    model.set_data(nodes)
    assert model.rows == nodes
    assert model.row_count == len(nodes)