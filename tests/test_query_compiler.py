"""
Tests for the text query compiler.
"""

import pytest

from kbase.core.db.search.compiler import (
    compile_text_query,
    is_universal,
    quote_token,
    tokenize,
)


def test_two_tokens_become_or_of_prefix_phrases():
    assert compile_text_query("foo bar") == '"foo"* OR "bar"*'


def test_single_token():
    assert compile_text_query("python") == '"python"*'


@pytest.mark.parametrize("raw", ["", "   ", "\t\n ", None])
def test_blank_input_is_universal(raw):
    """Blank queries compile to the wildcard that means 'no text constraint'."""
    predicate = compile_text_query(raw)
    assert predicate == "*"
    assert is_universal(predicate)


def test_runs_of_whitespace_do_not_produce_empty_tokens():
    assert compile_text_query("  foo \t  bar\n") == '"foo"* OR "bar"*'
    assert tokenize("  a  b ") == ["a", "b"]


def test_embedded_quotes_are_doubled():
    assert quote_token('say"hi') == '"say""hi"*'
    assert compile_text_query('a"b c') == '"a""b"* OR "c"*'


def test_fts_operators_are_quoted_as_plain_tokens():
    """AND/NOT/NEAR and column filters lose their meaning once quoted."""
    predicate = compile_text_query("cats AND NOT title:dogs")
    assert predicate == '"cats"* OR "AND"* OR "NOT"* OR "title:dogs"*'


def test_every_token_appears_in_order():
    tokens = ["alpha", "b-c", "d.e", "ünïcode"]
    predicate = compile_text_query(" ".join(tokens))
    assert not is_universal(predicate)
    assert predicate.split(" OR ") == [f'"{t}"*' for t in tokens]
