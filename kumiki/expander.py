from dataclasses import dataclass
from typing import Any

import structlog

from kumiki.errors import AbbreviationError
from kumiki.node import Node
from kumiki.parser import parse_abbreviation
from kumiki.renderer import OutputOptions, Renderer

logger = structlog.get_logger()


@dataclass
class Expansion:
    html: str
    nodes: list[Node]

    def to_dict(self) -> dict[str, Any]:
        return {
            "html": self.html,
            "nodes": [node.to_dict() for node in self.nodes],
        }


def expand(abbreviation: str, options: OutputOptions | None = None) -> Expansion:
    """
    Expand `abbreviation` into markup.

    Raises:
        AbbreviationError: the abbreviation is empty or malformed. Nothing
            is rendered in that case.
    """
    try:
        nodes = parse_abbreviation(abbreviation)
    except AbbreviationError as e:
        logger.info(
            "abbreviation_rejected",
            kind=e.kind.name,
            position=e.position,
        )
        raise

    html = Renderer(nodes=nodes, options=options or OutputOptions()).render()
    return Expansion(html=html, nodes=nodes)


def try_expand(
    abbreviation: str, options: OutputOptions | None = None
) -> Expansion | AbbreviationError:
    """Like `expand`, but returns the error instead of raising it."""
    try:
        return expand(abbreviation, options)
    except AbbreviationError as e:
        return e
