import pytest
from kumiki.node import Node
from kumiki.numbering import apply_numbering, clone_node, clone_nodes, repeat_nodes


####
# Placeholder Substitution Tests
####

@pytest.mark.ci
def test_single_placeholder_is_not_padded():
    assert apply_numbering("item$", 0) == "item1"
    assert apply_numbering("item$", 11) == "item12"


@pytest.mark.ci
def test_placeholder_run_pads_to_its_length():
    assert apply_numbering("item$$", 0) == "item01"
    assert apply_numbering("item$$$", 41) == "item042"


@pytest.mark.ci
def test_number_wider_than_run_is_not_truncated():
    assert apply_numbering("$$", 122) == "123"


@pytest.mark.ci
def test_independent_runs_share_the_index():
    assert apply_numbering("row$-col$$-$", 2) == "row3-col03-3"


@pytest.mark.ci
def test_value_without_placeholder_is_unchanged():
    assert apply_numbering("plain", 5) == "plain"


@pytest.mark.ci
@pytest.mark.parametrize("count", [1, 9, 10, 99, 100, 250])
@pytest.mark.parametrize("width", [1, 2, 3, 4])
def test_numbered_values_stay_in_range(count, width):
    for index in range(count):
        value = apply_numbering("$" * width, index)
        assert value.isdigit()
        assert len(value) >= width
        assert 1 <= int(value) <= count
        assert len(value) == max(width, len(str(int(value))))


####
# Cloning Tests
####

def sample_node() -> Node:
    return Node(
        tag="li$",
        id="item$",
        classes=["c$$", "fixed"],
        attributes={"data-n": "$", "hidden": True},
        text="Item $",
        children=[Node(tag="a", attributes={"href": "#s$"})],
    )


@pytest.mark.ci
def test_clone_without_index_is_equal_but_disjoint():
    original = sample_node()
    copy = clone_node(original)
    assert copy == original
    assert copy is not original
    assert copy.classes is not original.classes
    assert copy.attributes is not original.attributes
    assert copy.children[0] is not original.children[0]

    copy.classes.append("extra")
    copy.children[0].attributes["href"] = "#changed"
    assert original.classes == ["c$$", "fixed"]
    assert original.children[0].attributes == {"href": "#s$"}


@pytest.mark.ci
def test_clone_with_index_numbers_whole_subtree():
    copy = clone_node(sample_node(), 1)
    assert copy.tag == "li$"
    assert copy.id == "item2"
    assert copy.classes == ["c02", "fixed"]
    assert copy.attributes == {"data-n": "2", "hidden": True}
    assert copy.text == "Item 2"
    assert copy.children[0].attributes == {"href": "#s2"}


@pytest.mark.ci
def test_clone_nodes_copies_each_node():
    nodes = [Node(tag="a"), Node(tag="b")]
    copies = clone_nodes(nodes)
    assert copies == nodes
    assert all(copy is not node for copy, node in zip(copies, nodes))


@pytest.mark.ci
def test_repeat_nodes_orders_by_repetition():
    nodes = [Node(tag="dt", classes=["t$"]), Node(tag="dd", classes=["d$"])]
    repeated = repeat_nodes(nodes, 3)
    assert [(node.tag, node.classes[0]) for node in repeated] == [
        ("dt", "t1"), ("dd", "d1"),
        ("dt", "t2"), ("dd", "d2"),
        ("dt", "t3"), ("dd", "d3"),
    ]
    # the source sequence is left untouched
    assert nodes[0].classes == ["t$"]


@pytest.mark.ci
def test_repeated_nodes_share_no_state():
    repeated = repeat_nodes([Node(tag="li", children=[Node(tag="span")])], 2)
    repeated[0].children[0].classes.append("only-first")
    assert repeated[1].children[0].classes == []
