"""
Parameterized SQL assembly from immutable fragments.

A ``Fragment`` couples a piece of SQL with exactly the parameters its
``?`` placeholders bind, so text and parameters can only ever move
together. ``StatementBuilder`` collects fragments per clause and renders
them in one pass, which keeps parameter order identical to placeholder
order no matter which optional filters are present.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Fragment:
    """
    SQL text plus the parameters for its placeholders.

    Raises
    ------
    ValueError
        If the number of ``?`` placeholders differs from the number of
        parameters.
    """

    sql: str
    params: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        placeholders = self.sql.count("?")
        if placeholders != len(self.params):
            raise ValueError(
                f"fragment has {placeholders} placeholders but "
                f"{len(self.params)} parameters: {self.sql!r}"
            )

    def __add__(self, other: "Fragment") -> "Fragment":
        if not isinstance(other, Fragment):
            return NotImplemented
        return Fragment(self.sql + other.sql, self.params + other.params)

    @classmethod
    def join(cls, separator: str, fragments: Iterable["Fragment"]) -> "Fragment":
        """Concatenate fragments, keeping their parameters in the same order."""
        sql_parts: List[str] = []
        params: List[Any] = []
        for fragment in fragments:
            sql_parts.append(fragment.sql)
            params.extend(fragment.params)
        return cls(separator.join(sql_parts), tuple(params))

    @classmethod
    def wrap(cls, prefix: str, inner: "Fragment", suffix: str) -> "Fragment":
        """Surround a fragment with parameter-free SQL."""
        return cls(prefix + inner.sql + suffix, inner.params)


def in_list(column: str, values: Sequence[Any]) -> Fragment:
    """
    Build ``column IN (?, ?, ...)`` for a non-empty sequence of values.

    Raises
    ------
    ValueError
        If ``values`` is empty; ``IN ()`` is not valid SQLite.
    """
    if not values:
        raise ValueError(f"empty value list for {column} IN (...)")
    placeholders = ",".join(["?"] * len(values))
    return Fragment(f"{column} IN ({placeholders})", tuple(values))


def _as_fragment(clause: Union[str, Fragment]) -> Fragment:
    return clause if isinstance(clause, Fragment) else Fragment(clause)


class StatementBuilder:
    """
    Assemble a SELECT statement clause by clause.

    Clauses render in SQL order (select, joins, where, group by, having,
    order by, limit) regardless of the order the builder methods were
    called in. WHERE conditions are conjoined in the order they were added.

    Example
    -------
    >>> stmt = (
    ...     StatementBuilder("SELECT i.id FROM items i")
    ...     .where(Fragment("i.workspace_id = ?", ("ws-1",)))
    ...     .limit(10)
    ...     .build()
    ... )
    >>> stmt.params
    ('ws-1', 10)
    """

    def __init__(self, select: Union[str, Fragment]):
        self._select = _as_fragment(select)
        self._joins: List[Fragment] = []
        self._where: List[Fragment] = []
        self._group_by: Optional[Fragment] = None
        self._having: Optional[Fragment] = None
        self._order_by: Optional[Fragment] = None
        self._limit: Optional[Fragment] = None

    def join(self, clause: Union[str, Fragment]) -> "StatementBuilder":
        self._joins.append(_as_fragment(clause))
        return self

    def where(self, condition: Union[str, Fragment]) -> "StatementBuilder":
        self._where.append(_as_fragment(condition))
        return self

    def group_by(self, columns: str) -> "StatementBuilder":
        self._group_by = Fragment(f"GROUP BY {columns}")
        return self

    def having(self, condition: Union[str, Fragment]) -> "StatementBuilder":
        self._having = _as_fragment(condition)
        return self

    def order_by(self, columns: str) -> "StatementBuilder":
        self._order_by = Fragment(f"ORDER BY {columns}")
        return self

    def limit(self, limit: int) -> "StatementBuilder":
        self._limit = Fragment("LIMIT ?", (limit,))
        return self

    @property
    def conditions(self) -> Tuple[Fragment, ...]:
        """WHERE conditions added so far, in emission order."""
        return tuple(self._where)

    def build(self) -> Fragment:
        """Render the statement and its parameters in a single pass."""
        parts: List[Fragment] = [self._select, *self._joins]
        if self._where:
            parts.append(Fragment.wrap("WHERE ", Fragment.join(" AND ", self._where), ""))
        if self._group_by is not None:
            parts.append(self._group_by)
        if self._having is not None:
            parts.append(Fragment.wrap("HAVING ", self._having, ""))
        if self._order_by is not None:
            parts.append(self._order_by)
        if self._limit is not None:
            parts.append(self._limit)
        return Fragment.join("\n", parts)
