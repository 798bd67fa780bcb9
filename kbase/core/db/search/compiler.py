"""
Text query compiler for FTS5 MATCH expressions.
"""

from typing import List

from ..constants import UNIVERSAL_MATCH


def tokenize(raw_query: str) -> List[str]:
    """Split a raw query on whitespace, dropping empty tokens."""
    return [token for token in raw_query.split() if token]


def quote_token(token: str) -> str:
    """
    Quote a token as an FTS5 prefix phrase.

    Embedded double quotes are doubled, so ``say"hi`` becomes
    ``"say""hi"*``. The trailing ``*`` makes the token match itself or any
    word it is a prefix of.
    """
    escaped = token.replace('"', '""')
    return f'"{escaped}"*'


def compile_text_query(raw_query: str) -> str:
    """
    Compile free-form text into an FTS5 MATCH expression.

    Every token becomes a quoted prefix phrase and tokens are joined with
    OR, so a document matches when any token matches.

    Parameters
    ----------
    raw_query : str
        User-entered query text

    Returns
    -------
    str
        MATCH expression, or ``*`` when the query has no tokens

    Example
    -------
    >>> compile_text_query("foo bar")
    '"foo"* OR "bar"*'
    >>> compile_text_query("   ")
    '*'
    """
    tokens = tokenize(raw_query or "")
    if not tokens:
        return UNIVERSAL_MATCH
    return " OR ".join(quote_token(token) for token in tokens)


def is_universal(predicate: str) -> bool:
    """True when a compiled predicate places no constraint on text."""
    return predicate == UNIVERSAL_MATCH
