# Unit tests for metanames.tokens.
# These tests validate token boundaries and early termination.

from __future__ import annotations

from metanames.tokens import for_each_token, iter_token_spans, iter_tokens


def test_iter_tokens_keeps_empty_and_trailing_tokens() -> None:
    assert list(iter_tokens("a;;b;", ";")) == ["a", "", "b", ""]


def test_iter_tokens_without_separator_yields_whole_text() -> None:
    assert list(iter_tokens("abc", ";")) == ["abc"]
    assert list(iter_tokens("", ";")) == [""]


def test_iter_token_spans_point_into_original_text() -> None:
    text = "a=1;bb=2"
    spans = list(iter_token_spans(text, ";"))
    assert spans == [(0, 3), (4, 8)]
    assert [text[s:e] for s, e in spans] == ["a=1", "bb=2"]


def test_iter_token_spans_respects_bounds() -> None:
    assert list(iter_token_spans("{a;b}", ";", start=1, stop=4)) == [(1, 2), (3, 4)]


def test_iter_tokens_is_lazy() -> None:
    it = iter_tokens("x;y;z", ";")
    assert next(it) == "x"
    assert next(it) == "y"


def test_for_each_token_stops_when_visit_returns_false() -> None:
    seen = []

    def visit(token: str) -> bool:
        seen.append(token)
        return token != "stop"

    assert for_each_token("a;stop;c", ";", visit) is False
    assert seen == ["a", "stop"]


def test_for_each_token_runs_to_completion() -> None:
    seen = []
    assert for_each_token("a;b", ";", seen.append) is True
    assert seen == ["a", "b"]
