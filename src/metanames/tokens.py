# Delimiter-based token scanning for metanames.
# Scanning yields positions into the original text so callers only copy
# the tokens they keep.

from __future__ import annotations

from typing import Callable, Iterator, Optional, Tuple


def iter_token_spans(
    text: str,
    separator: str,
    start: int = 0,
    stop: Optional[int] = None,
) -> Iterator[Tuple[int, int]]:
    # Yield (start, stop) for every token between separators, left to right.
    # Empty tokens between adjacent separators and a trailing empty token
    # are yielded too, so "a;;b;" gives four tokens.
    if stop is None:
        stop = len(text)
    begin = start
    while True:
        end = text.find(separator, begin, stop)
        if end == -1:
            yield begin, stop
            return
        yield begin, end
        begin = end + 1


def iter_tokens(text: str, separator: str) -> Iterator[str]:
    for begin, end in iter_token_spans(text, separator):
        yield text[begin:end]


def for_each_token(text: str, separator: str, visit: Callable[[str], Optional[bool]]) -> bool:
    """Call visit for each token until it returns False.

    Returns True when every token was visited, False when visit stopped
    the scan early. A visit returning None keeps going.
    """
    for token in iter_tokens(text, separator):
        if visit(token) is False:
            return False
    return True
