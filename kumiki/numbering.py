"""
Cloning and `$` numbering of repeated subtrees.

Every clone is a full structural copy, so siblings produced by a
multiplier never share classes, attributes or children with each other.
"""
import re

from kumiki.constants import NUMBERING_PLACEHOLDER
from kumiki.node import AttributeValue, Node

PLACEHOLDER_RUN = re.compile(re.escape(NUMBERING_PLACEHOLDER) + "+")


def apply_numbering(value: str, index: int) -> str:
    """
    Replace each run of `$` with the 1-based repetition number, zero
    padded to the run's length.

    >>> apply_numbering("item$$", 0)
    'item01'
    """
    number = str(index + 1)
    return PLACEHOLDER_RUN.sub(lambda match: number.zfill(len(match.group())), value)


def _number_attribute(value: AttributeValue, index: int | None) -> AttributeValue:
    if value is True or index is None:
        return value
    return apply_numbering(value, index)


def clone_node(node: Node, index: int | None = None) -> Node:
    """Deep copy `node`; numbers the whole subtree when `index` is given."""
    def number(value: str) -> str:
        return value if index is None else apply_numbering(value, index)

    return Node(
        tag=node.tag,
        id=number(node.id) if node.id is not None else None,
        classes=[number(name) for name in node.classes],
        attributes={
            name: _number_attribute(value, index)
            for name, value in node.attributes.items()
        },
        text=number(node.text) if node.text is not None else None,
        children=[clone_node(child, index) for child in node.children],
    )


def clone_nodes(nodes: list[Node]) -> list[Node]:
    return [clone_node(node) for node in nodes]


def repeat_nodes(nodes: list[Node], count: int) -> list[Node]:
    """Clone the whole sequence `count` times, in repetition order."""
    repeated: list[Node] = []
    for index in range(count):
        repeated.extend(clone_node(node, index) for node in nodes)
    return repeated


def count_nodes(nodes: list[Node]) -> int:
    """Number of nodes in the forest, descendants included."""
    return sum(1 + count_nodes(node.children) for node in nodes)
