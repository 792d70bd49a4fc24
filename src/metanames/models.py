# Shared data models for metanames.
# Lives in its own module to avoid circular imports between the parsers,
# the naming facade and the cli.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from metanames.rules import NameRules

T = TypeVar("T")


class ErrorKind(str, Enum):
    empty_input = "empty-input"
    part_overflow = "part-overflow"
    malformed_part_prefix = "malformed-part-prefix"
    unterminated_attribute_block = "unterminated-attribute-block"
    malformed_attribute_token = "malformed-attribute-token"
    missing_assignment = "missing-assignment"
    suffix_attribute_adjacency_violation = "suffix-attribute-adjacency-violation"
    invalid_date_component = "invalid-date-component"
    empty_attribute_block = "empty-attribute-block"


class NameKind(str, Enum):
    name = "name"
    part = "part"
    date = "date"


class Schema(str, Enum):
    general = "general"
    music = "music"
    dict = "dict"


@dataclass(frozen=True)
class ParseError:
    kind: ErrorKind
    message: str
    # Offset into the text handed to the failing parser, when one is known.
    position: Optional[int] = None

    def __str__(self) -> str:
        if self.position is None:
            return f"{self.kind.value}: {self.message}"
        return f"{self.kind.value} at {self.position}: {self.message}"


class NameParseError(ValueError):
    # Raised by ParseResult.unwrap() for callers that prefer exceptions.
    def __init__(self, error: ParseError):
        self.error = error
        super().__init__(str(error))


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    # Outcome of a parse: exactly one of value / error is meaningful.
    value: Optional[T] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise NameParseError(self.error)
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        position: Optional[int] = None,
    ) -> "ParseResult[T]":
        return cls(error=ParseError(kind=kind, message=message, position=position))

    def with_offset(self, offset: int) -> "ParseResult[T]":
        # Shift a failure position when a sub-parser worked on a slice.
        if self.error is None or self.error.position is None or offset == 0:
            return self
        err = self.error
        return ParseResult(
            error=ParseError(kind=err.kind, message=err.message, position=err.position + offset)
        )


@dataclass(frozen=True)
class Options:
    kind: NameKind
    schema: Schema
    rules: NameRules
