from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    EMPTY_ABBREVIATION = "Abbreviation is empty"
    UNEXPECTED_CHARACTER = "Unexpected character"
    UNEXPECTED_END = "Unexpected end of abbreviation"
    UNCLOSED_GROUP = "Unclosed group"
    UNCLOSED_ATTRIBUTES = "Unclosed attribute set"
    UNCLOSED_TEXT = "Unclosed text segment"
    UNCLOSED_QUOTE = "Unclosed quoted attribute value"
    DUPLICATE_ID = "Element already has an id"
    INVALID_MULTIPLIER = "Expected a positive multiplier count"
    EXPECTED_ATTRIBUTE_VALUE = "Expected attribute value"
    EXPECTED_IDENTIFIER = "Expected identifier"
    NESTING_TOO_DEEP = "Abbreviation is nested too deeply"


@dataclass(eq=False)
class AbbreviationError(Exception):
    """
    Raised for any abbreviation that cannot be expanded.

    `position` is the character offset the parser stopped at, when one
    is meaningful.
    """
    kind: ErrorKind
    message: str = ""
    position: int | None = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.kind.value

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} at position {self.position}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.name.lower(),
            "message": self.message,
            "position": self.position,
        }
