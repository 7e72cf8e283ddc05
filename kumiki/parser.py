from dataclasses import dataclass
from typing import NoReturn

import structlog

from kumiki.constants import (
    IDENTIFIER_PUNCTUATION, MAX_ELEMENTS, MAX_NESTING_DEPTH,
)
from kumiki.errors import AbbreviationError, ErrorKind
from kumiki.node import Node
from kumiki.numbering import clone_nodes, count_nodes, repeat_nodes

logger = structlog.get_logger()

# characters that end an element body
ELEMENT_STOP_CHARS = frozenset(">+*)")

ATTRIBUTE_SEPARATORS = frozenset(" ,")
QUOTES = frozenset("\"'")
DIGITS = frozenset("0123456789")


def is_identifier_char(c: str) -> bool:
    return c.isalnum() or c in IDENTIFIER_PUNCTUATION


@dataclass
class AbbreviationParser:
    """
    Recursive descent parser over a single abbreviation.

    Precedence, loosest first: `+` siblings, `>` children, `*n`
    repetition, then groups and elements.
    """
    source: str
    pos: int = 0
    # open terms on the current parse path, bounded to keep recursion shallow
    depth: int = 0

    def parse(self) -> list[Node]:
        if not self.source.strip():
            raise AbbreviationError(ErrorKind.EMPTY_ABBREVIATION, position=0)

        nodes = self.parse_expression(frozenset())
        self.skip_whitespace()
        if not self.at_end():
            self.fail(ErrorKind.UNEXPECTED_CHARACTER)

        logger.debug(
            "abbreviation_parsed", abbreviation=self.source, roots=len(nodes)
        )
        return nodes

    ####
    # Cursor helpers
    ####

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self) -> str:
        if self.at_end():
            return ""
        return self.source[self.pos]

    def advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        return c

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.peek().isspace():
            self.pos += 1

    def fail(
        self,
        kind: ErrorKind,
        position: int | None = None,
        message: str = "",
    ) -> NoReturn:
        if position is None:
            position = self.pos
        if not message and kind == ErrorKind.UNEXPECTED_CHARACTER \
                and position < len(self.source):
            message = f"Unexpected character {self.source[position]!r}"
        raise AbbreviationError(kind, message=message, position=position)

    def check_size(self, size: int, position: int) -> None:
        if size > MAX_ELEMENTS:
            self.fail(
                ErrorKind.INVALID_MULTIPLIER,
                position=position,
                message=f"Abbreviation expands to more than {MAX_ELEMENTS} elements",
            )

    def read_identifier(self) -> str:
        start = self.pos
        while not self.at_end() and is_identifier_char(self.peek()):
            self.pos += 1
        return self.source[start:self.pos]

    ####
    # Combinators
    ####

    def parse_expression(self, terminators: frozenset[str]) -> list[Node]:
        nodes = self.parse_term(terminators)
        while True:
            c = self.peek()
            if c == "+":
                self.advance()
                nodes.extend(self.parse_term(terminators))
            elif self.at_end() or c in terminators:
                return nodes
            elif self.source[self.pos:].isspace():
                # trailing whitespace, the caller decides whether it is allowed
                return nodes
            else:
                # point at the offending character, not the whitespace before it
                self.skip_whitespace()
                self.fail(ErrorKind.UNEXPECTED_CHARACTER)

    def parse_term(self, terminators: frozenset[str]) -> list[Node]:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            self.fail(ErrorKind.NESTING_TOO_DEEP)

        nodes = self.parse_primary(terminators)

        if self.peek() == "*":
            start = self.pos
            count = self.parse_multiplier()
            self.check_size(count_nodes(nodes) * count, start)
            nodes = repeat_nodes(nodes, count)

        if self.peek() == ">":
            start = self.pos
            self.advance()
            children = self.parse_expression(terminators | {")"})
            self.check_size(
                count_nodes(nodes) + len(nodes) * count_nodes(children), start
            )
            for parent in nodes:
                parent.children.extend(clone_nodes(children))

        self.depth -= 1
        return nodes

    def parse_primary(self, terminators: frozenset[str]) -> list[Node]:
        if self.peek() != "(":
            return [self.parse_element()]

        start = self.pos
        self.advance()
        nodes = self.parse_expression(terminators | {")"})
        # the inner expression only stops early at ')' or trailing whitespace
        if self.peek() != ")":
            self.fail(ErrorKind.UNCLOSED_GROUP, position=start)
        self.advance()
        return nodes

    def parse_multiplier(self) -> int:
        start = self.pos
        self.advance()  # '*'
        digits_start = self.pos
        while not self.at_end() and self.peek() in DIGITS:
            self.pos += 1
        digits = self.source[digits_start:self.pos]
        if len(digits) > len(str(MAX_ELEMENTS)):
            self.fail(
                ErrorKind.INVALID_MULTIPLIER,
                position=start,
                message=f"Multiplier count exceeds {MAX_ELEMENTS}",
            )
        if not digits or int(digits) < 1:
            self.fail(ErrorKind.INVALID_MULTIPLIER, position=start)
        return int(digits)

    ####
    # Element body
    ####

    def parse_element(self) -> Node:
        start = self.pos
        node = Node()

        while not self.at_end():
            c = self.peek()
            if c in ELEMENT_STOP_CHARS or c.isspace():
                break
            elif is_identifier_char(c):
                node.tag = self.read_identifier()
            elif c == "#":
                if node.id is not None:
                    self.fail(ErrorKind.DUPLICATE_ID)
                self.advance()
                name = self.read_identifier()
                if not name:
                    self.fail(ErrorKind.EXPECTED_IDENTIFIER,
                              message="Expected id name")
                node.id = name
            elif c == ".":
                self.advance()
                name = self.read_identifier()
                if not name:
                    self.fail(ErrorKind.EXPECTED_IDENTIFIER,
                              message="Expected class name")
                node.classes.append(name)
            elif c == "[":
                self.parse_attributes(node)
            elif c == "{":
                text = self.parse_text()
                node.text = text if node.text is None else node.text + text
            else:
                self.fail(ErrorKind.UNEXPECTED_CHARACTER)

        if self.pos == start:
            if self.at_end():
                self.fail(ErrorKind.UNEXPECTED_END)
            self.fail(ErrorKind.UNEXPECTED_CHARACTER)
        return node

    def parse_attributes(self, node: Node) -> None:
        start = self.pos
        self.advance()  # '['

        while True:
            while not self.at_end() and self.peek() in ATTRIBUTE_SEPARATORS:
                self.pos += 1
            if self.at_end():
                self.fail(ErrorKind.UNCLOSED_ATTRIBUTES, position=start)
            if self.peek() == "]":
                self.advance()
                return

            name_start = self.pos
            name = self.read_identifier()
            if not name:
                self.fail(ErrorKind.UNEXPECTED_CHARACTER)

            if self.peek() != "=":
                if name in ("id", "class"):
                    self.fail(ErrorKind.EXPECTED_ATTRIBUTE_VALUE)
                node.attributes[name] = True
                continue

            self.advance()  # '='
            if self.peek() in QUOTES:
                value = self.parse_quoted_value()
            else:
                value = self.parse_unquoted_value()

            # id and class share the slots filled by `#` and `.`
            if name == "id":
                if node.id is not None:
                    self.fail(ErrorKind.DUPLICATE_ID, position=name_start)
                node.id = value
            elif name == "class":
                node.classes.extend(value.split())
            else:
                # a repeated name overwrites the earlier value
                node.attributes[name] = value

    def parse_quoted_value(self) -> str:
        start = self.pos
        quote = self.advance()
        chars: list[str] = []

        while not self.at_end():
            c = self.advance()
            if c == quote:
                return "".join(chars)
            if c == "\\" and not self.at_end() \
                    and self.peek() in (quote, "\\"):
                chars.append(self.advance())
            else:
                chars.append(c)

        self.fail(ErrorKind.UNCLOSED_QUOTE, position=start)

    def parse_unquoted_value(self) -> str:
        start = self.pos
        while not self.at_end() \
                and self.peek() not in ATTRIBUTE_SEPARATORS \
                and self.peek() != "]":
            self.pos += 1
        value = self.source[start:self.pos]
        if not value:
            self.fail(ErrorKind.EXPECTED_ATTRIBUTE_VALUE)
        return value

    def parse_text(self) -> str:
        start = self.pos
        self.advance()  # '{'
        chars: list[str] = []

        while not self.at_end():
            c = self.advance()
            if c == "}":
                return "".join(chars)
            if c == "\\":
                if self.at_end():
                    break
                chars.append(self.advance())
            else:
                chars.append(c)

        self.fail(ErrorKind.UNCLOSED_TEXT, position=start)


def parse_abbreviation(abbreviation: str) -> list[Node]:
    return AbbreviationParser(source=abbreviation).parse()
