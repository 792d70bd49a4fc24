# Attribute block parsing and formatting for metanames.
# An attribute block is "{k=v;k=v}"; parsers here only ever see the body
# between the start and end characters.
#
# Attribute types share no base class. Anything with a produce_fragments()
# method can be formatted, and any callable shaped like AttributeParser can
# be handed to the naming facade.

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    TypeVar,
    runtime_checkable,
)

from metanames.dates import format_datetime, parse_datetime_fragment
from metanames.models import ErrorKind, ParseResult
from metanames.rules import DEFAULT_RULES, NameRules
from metanames.tokens import for_each_token

logger = logging.getLogger(__name__)

A = TypeVar("A")

# Favourite levels.
FAV_NONE = ""
FAV_LIKED = "1"
FAV_FAVOURITE = "2"


@runtime_checkable
class AttributeValue(Protocol):
    def produce_fragments(self, rules: NameRules) -> Iterator[str]:
        """Yield one "key=value" string per set attribute, in canonical order."""
        ...


AttributeParser = Callable[[str, NameRules], ParseResult[A]]


class EmptyAttributes:
    # A name with no attribute block at all. Formats to nothing, unlike an
    # attribute value with no fields set, which formats to "{}".
    _instance: Optional["EmptyAttributes"] = None

    def __new__(cls) -> "EmptyAttributes":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def produce_fragments(self, rules: NameRules) -> Iterator[str]:
        return iter(())

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY_ATTRIBUTES"

    def __str__(self) -> str:
        return ""


EMPTY_ATTRIBUTES = EmptyAttributes()


def format_attribute_block(
    attributes: Optional[AttributeValue],
    rules: NameRules = DEFAULT_RULES,
) -> str:
    if attributes is None or attributes is EMPTY_ATTRIBUTES:
        return ""
    body = rules.attribute_delimiter.join(attributes.produce_fragments(rules))
    return f"{rules.attribute_start}{body}{rules.attribute_end}"


def parse_attribute_pairs(
    text: str,
    rules: NameRules = DEFAULT_RULES,
) -> ParseResult[List[Tuple[str, str, int]]]:
    """Split an attribute block body into (key, value, offset) triples.

    Every token must be a key character, "=" and a value (possibly empty).
    The scan stops at the first token that is not. offset is where the
    token starts in text.
    """
    pairs: List[Tuple[str, str, int]] = []
    failure: List[ParseResult] = []
    offset = 0

    def visit(token: str) -> bool:
        nonlocal offset
        if len(token) < 2:
            failure.append(
                ParseResult.failure(
                    ErrorKind.malformed_attribute_token,
                    f"attribute {token!r} is too short",
                    offset,
                )
            )
            return False
        if token[1] != "=":
            failure.append(
                ParseResult.failure(
                    ErrorKind.missing_assignment,
                    f"attribute {token!r} has no '=' after its key",
                    offset + 1,
                )
            )
            return False
        pairs.append((token[0], token[2:], offset))
        offset += len(token) + 1
        return True

    if not for_each_token(text, rules.attribute_delimiter, visit):
        logger.debug("Bad attribute block %r: %s", text, failure[0].error)
        return failure[0]
    return ParseResult.success(pairs)


def _is_blank(text: str) -> bool:
    return not text or text.isspace()


# Key character -> field name, in formatting order.
_GENERAL_KEYS = (
    ("a", "author"),
    ("b", "group"),
    ("d", "date"),
    ("f", "favourite"),
    ("p", "person"),
    ("t", "tags"),
    ("v", "variation"),
    ("z", "attention_required"),
)

_MUSIC_KEYS = (
    ("a", "artist"),
    ("b", "album"),
    ("d", "date"),
    ("f", "favourite"),
    ("t", "tags"),
    ("v", "variation"),
    ("z", "attention_required"),
)


def _parse_fixed(cls, keys, text: str, rules: NameRules) -> ParseResult:
    # Shared by the fixed-schema types: map known keys onto dataclass fields.
    # Unknown keys are ignored; a repeated key keeps its last value.
    if _is_blank(text):
        return ParseResult.success(EMPTY_ATTRIBUTES)

    result = parse_attribute_pairs(text, rules)
    if not result.ok:
        return result

    fields_by_key = dict(keys)
    values = {}
    for key, value, offset in result.value:
        name = fields_by_key.get(key)
        if name is None:
            continue
        # Positions below are relative to the body, past "k=".
        value_start = offset + 2
        if name == "date":
            parsed = parse_datetime_fragment(value, rules)
            if not parsed.ok:
                return parsed.with_offset(value_start)
            if parsed.value.consumed != len(value):
                return ParseResult.failure(
                    ErrorKind.invalid_date_component,
                    f"unexpected text after date in {value!r}",
                    value_start + parsed.value.consumed,
                )
            values[name] = parsed.value.value
        elif name == "favourite":
            if not value:
                return ParseResult.failure(
                    ErrorKind.malformed_attribute_token,
                    "favourite needs a value",
                    offset,
                )
            values[name] = value[0]
        elif name == "attention_required":
            values[name] = True
        else:
            values[name] = value

    return ParseResult.success(cls(**values))


def _fixed_fragments(obj, keys, rules: NameRules) -> Iterator[str]:
    for key, name in keys:
        value = getattr(obj, name)
        if name == "date":
            if value is not None:
                yield f"{key}={format_datetime(value, rules)}"
        elif name == "attention_required":
            if value:
                yield f"{key}=1"
        elif value:
            yield f"{key}={value}"


def _is_set(value) -> bool:
    return value is not None and value != "" and value is not False


def _propagate(obj, other):
    changes = {
        f.name: getattr(obj, f.name)
        for f in dataclasses.fields(obj)
        if _is_set(getattr(obj, f.name))
    }
    return dataclasses.replace(other, **changes)


@dataclass(frozen=True)
class Attributes:
    """General purpose attributes.

    Keys: a=author, b=group, d=date, f=favourite, p=person, t=tags,
    v=variation, z=attention required.
    """

    author: Optional[str] = None
    group: Optional[str] = None
    date: Optional[datetime] = None
    favourite: str = FAV_NONE
    person: Optional[str] = None
    tags: Optional[str] = None
    variation: Optional[str] = None
    attention_required: bool = False

    def produce_fragments(self, rules: NameRules = DEFAULT_RULES) -> Iterator[str]:
        return _fixed_fragments(self, _GENERAL_KEYS, rules)

    def propagate(self, other: "Attributes") -> "Attributes":
        # Copy of other with every field set on self taking precedence.
        return _propagate(self, other)

    @classmethod
    def try_parse(cls, text: str, rules: NameRules = DEFAULT_RULES) -> ParseResult:
        return _parse_fixed(cls, _GENERAL_KEYS, text, rules)

    def __str__(self) -> str:
        return format_attribute_block(self)


@dataclass(frozen=True)
class MusicAttributes:
    """Attributes describing a piece of music.

    Keys: a=artist, b=album, d=release date, f=favourite, t=tags/genres,
    v=variation, z=attention required.
    """

    artist: Optional[str] = None
    album: Optional[str] = None
    date: Optional[datetime] = None
    favourite: str = FAV_NONE
    tags: Optional[str] = None
    variation: Optional[str] = None
    attention_required: bool = False

    def produce_fragments(self, rules: NameRules = DEFAULT_RULES) -> Iterator[str]:
        return _fixed_fragments(self, _MUSIC_KEYS, rules)

    def propagate(self, other: "MusicAttributes") -> "MusicAttributes":
        return _propagate(self, other)

    @classmethod
    def try_parse(cls, text: str, rules: NameRules = DEFAULT_RULES) -> ParseResult:
        return _parse_fixed(cls, _MUSIC_KEYS, text, rules)

    def __str__(self) -> str:
        return format_attribute_block(self)


class DictAttributes:
    # Free-form attributes: single character keys to string values,
    # kept in insertion order.

    def __init__(self, attributes: Optional[Mapping[str, str]] = None):
        self.attributes: Dict[str, str] = {}
        for key, value in (attributes or {}).items():
            self[key] = value

    def __getitem__(self, key: str) -> str:
        return self.attributes[key]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str) or len(key) != 1:
            raise ValueError(f"attribute keys must be a single character, got {key!r}")
        self.attributes[key] = value

    def __delitem__(self, key: str) -> None:
        del self.attributes[key]

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DictAttributes):
            return NotImplemented
        return list(self.attributes.items()) == list(other.attributes.items())

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"DictAttributes({self.attributes!r})"

    def __str__(self) -> str:
        return format_attribute_block(self)

    def produce_fragments(self, rules: NameRules = DEFAULT_RULES) -> Iterator[str]:
        for key, value in self.attributes.items():
            yield f"{key}={value}"

    @classmethod
    def try_parse(cls, text: str, rules: NameRules = DEFAULT_RULES) -> ParseResult:
        # An empty block means the caller found "{}"; there is nothing to map.
        if _is_blank(text):
            logger.debug("Empty attribute block for open mapping")
            return ParseResult.failure(
                ErrorKind.empty_attribute_block,
                "attribute block has no attributes",
                0,
            )

        result = parse_attribute_pairs(text, rules)
        if not result.ok:
            return result
        return ParseResult.success(cls({key: value for key, value, _ in result.value}))
