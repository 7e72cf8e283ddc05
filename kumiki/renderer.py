from dataclasses import dataclass, field
from enum import Enum

import structlog

from kumiki.constants import DEFAULT_INDENT, DEFAULT_NEWLINE
from kumiki.node import Node

logger = structlog.get_logger()


ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
}

ATTRIBUTE_ENTITIES = {
    **ENTITIES,
    '"': "&quot;",
}


class RenderMode(Enum):
    FORMATTED = 1
    COMPACT = 2


@dataclass
class EntityEscaper:
    """
    Replaces single characters with their entity references.

    All patterns are applied in one pass, so an inserted `&amp;` is never
    escaped a second time.
    """
    table: dict[int, str] = field(default_factory=dict)

    def add_pattern(self, char: str, replacement: str) -> None:
        if len(char) != 1:
            raise ValueError(f"Escape patterns must be single characters: {char!r}")
        self.table[ord(char)] = replacement

    def replace_all(self, text: str) -> str:
        return text.translate(self.table)


text_escaper = EntityEscaper()
for char, replacement in ENTITIES.items():
    text_escaper.add_pattern(char, replacement)

attribute_escaper = EntityEscaper()
for char, replacement in ATTRIBUTE_ENTITIES.items():
    attribute_escaper.add_pattern(char, replacement)


def escape_text(text: str) -> str:
    return text_escaper.replace_all(text)


def escape_attribute(value: str) -> str:
    return attribute_escaper.replace_all(value)


@dataclass
class OutputOptions:
    indent: str = DEFAULT_INDENT
    base_indent: str = ""
    newline: str = DEFAULT_NEWLINE
    mode: RenderMode = RenderMode.FORMATTED


@dataclass
class Renderer:
    nodes: list[Node]
    options: OutputOptions = field(default_factory=OutputOptions)

    def render(self) -> str:
        if self.options.mode == RenderMode.COMPACT:
            output = "".join(self.render_compact(node) for node in self.nodes)
            output = self.options.base_indent + output
        elif self.options.mode == RenderMode.FORMATTED:
            lines: list[str] = []
            for node in self.nodes:
                lines.extend(self.render_lines(node, 0))
            output = self.options.newline.join(
                self.options.base_indent + line for line in lines
            )
        else:
            raise ValueError("Unsupported render mode")

        logger.debug("nodes_rendered", roots=len(self.nodes), size=len(output))
        return output

    def attribute_str(self, node: Node) -> str:
        attrs: list[str] = []
        for name, value in node.attribute_pairs():
            if value is True:
                attrs.append(name)
            else:
                attrs.append(f'{name}="{escape_attribute(value)}"')
        return " ".join(attrs)

    def open_tag(self, node: Node) -> str:
        attrs = self.attribute_str(node)
        if attrs:
            return f"<{node.tag} {attrs}>"
        return f"<{node.tag}>"

    def close_tag(self, node: Node) -> str:
        return f"</{node.tag}>"

    def render_lines(self, node: Node, level: int) -> list[str]:
        """Render `node` at `level`, one entry per output line."""
        prefix = self.options.indent * level
        inner_prefix = self.options.indent * (level + 1)
        open_tag = self.open_tag(node)
        close_tag = self.close_tag(node)

        if not node.children:
            if not node.text:
                return [f"{prefix}{open_tag}{close_tag}"]
            if "\n" not in node.text:
                return [f"{prefix}{open_tag}{escape_text(node.text)}{close_tag}"]

        lines = [prefix + open_tag]
        if node.text:
            text_lines = node.text.split("\n")
            if text_lines[-1] == "":
                text_lines.pop()
            for text_line in text_lines:
                # blank lines carry no indentation
                lines.append(inner_prefix + escape_text(text_line) if text_line else "")
        for child in node.children:
            lines.extend(self.render_lines(child, level + 1))
        lines.append(prefix + close_tag)
        return lines

    def render_compact(self, node: Node) -> str:
        parts = [self.open_tag(node)]
        if node.text:
            parts.append(escape_text(node.text))
        parts.extend(self.render_compact(child) for child in node.children)
        parts.append(self.close_tag(node))
        return "".join(parts)


def render(nodes: list[Node], options: OutputOptions | None = None) -> str:
    return Renderer(nodes=nodes, options=options or OutputOptions()).render()
