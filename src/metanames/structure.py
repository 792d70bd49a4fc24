# Structural splitting of names into title, attribute block and suffix.
# Works on whatever follows a part or date prefix.
#
# This module is pure logic and must remain side-effect free.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from metanames.models import ErrorKind, ParseResult
from metanames.rules import DEFAULT_RULES, NameRules

logger = logging.getLogger(__name__)


class Span(NamedTuple):
    # Half-open range into a string.
    start: int
    stop: int

    def of(self, text: str) -> str:
        return text[self.start : self.stop]


@dataclass(frozen=True)
class FoundParts:
    text: str
    title: Span
    # Body of the attribute block, start/end characters excluded.
    attributes: Optional[Span] = None
    # Includes the leading suffix delimiter.
    suffix: Optional[Span] = None

    @property
    def title_text(self) -> str:
        return self.title.of(self.text)

    @property
    def attributes_text(self) -> Optional[str]:
        return self.attributes.of(self.text) if self.attributes is not None else None

    @property
    def suffix_text(self) -> str:
        return self.suffix.of(self.text) if self.suffix is not None else ""


def find_parts(text: str, rules: NameRules = DEFAULT_RULES) -> ParseResult[FoundParts]:
    """Locate the title, attribute block and suffix of text.

    With an attribute block, the title is everything before it and the only
    thing allowed after it is a suffix starting right at the block's end.
    That suffix is taken whole, so ".tar.gz" stays together. Suffix
    delimiters inside the title or the block never start a suffix.

    Without an attribute block, the last suffix delimiter splits title and
    suffix.
    """
    length = len(text)
    attr_start = text.find(rules.attribute_start)

    if attr_start != -1:
        attr_end = text.find(rules.attribute_end, attr_start + 1)
        if attr_end == -1:
            logger.debug("Unterminated attribute block in %r", text)
            return ParseResult.failure(
                ErrorKind.unterminated_attribute_block,
                f"no {rules.attribute_end!r} after {rules.attribute_start!r}",
                attr_start,
            )

        suffix = None
        after = attr_end + 1
        if after < length:
            if text[after] != rules.suffix_delimiter:
                logger.debug("Text after attribute block is not a suffix in %r", text)
                return ParseResult.failure(
                    ErrorKind.suffix_attribute_adjacency_violation,
                    f"suffix must start with {rules.suffix_delimiter!r} right after the attribute block",
                    after,
                )
            suffix = Span(after, length)

        return ParseResult.success(
            FoundParts(
                text=text,
                title=Span(0, attr_start),
                attributes=Span(attr_start + 1, attr_end),
                suffix=suffix,
            )
        )

    suffix_start = text.rfind(rules.suffix_delimiter)
    if suffix_start == -1:
        return ParseResult.success(FoundParts(text=text, title=Span(0, length)))

    return ParseResult.success(
        FoundParts(
            text=text,
            title=Span(0, suffix_start),
            suffix=Span(suffix_start, length),
        )
    )
