from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, TextIO
import sys

from kumiki.constants import DEFAULT_TAG


# `True` marks a flag attribute: present, without a value
AttributeValue = str | Literal[True]


@dataclass
class Node:
    tag: str = DEFAULT_TAG
    id: str | None = None
    classes: list[str] = field(default_factory=list)
    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    text: str | None = None
    children: list['Node'] = field(default_factory=list)

    def __repr__(self) -> str:
        attrs = " ".join(
            name if value is True else f'{name}="{value}"'
            for name, value in self.attribute_pairs()
        )
        if attrs:
            return f"<{self.tag} {attrs}>"
        return f"<{self.tag}>"

    def attribute_pairs(self) -> Iterator[tuple[str, AttributeValue]]:
        """Yield attributes in output order: id, class, then the rest."""
        if self.id is not None:
            yield ("id", self.id)
        if self.classes:
            yield ("class", " ".join(self.classes))
        yield from self.attributes.items()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"tag": self.tag}
        if self.id is not None:
            data["id"] = self.id
        data["classes"] = list(self.classes)
        data["attributes"] = dict(self.attributes)
        if self.text is not None:
            data["text"] = self.text
        data["children"] = [child.to_dict() for child in self.children]
        return data


def print_tree(
    nodes: list[Node], indent: int = 0, file: TextIO | None = None
) -> None:
    out = file or sys.stdout
    for node in nodes:
        line = " " * indent + repr(node)
        if node.text:
            line += f" {node.text!r}"
        print(line, file=out)
        print_tree(node.children, indent + 2, file=out)
