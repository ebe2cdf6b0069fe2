"""
Parameterized statement construction.

Caller-controlled values only ever travel as bound parameters named
``p1 .. pN``. Numbering is contiguous and follows the order in which clauses
are appended, so a statement's placeholders always match its parameters
whichever optional filters were present.
"""
import re
from dataclasses import dataclass, field

from sqlalchemy import bindparam, text

from portal.errors import InvalidUpdate

PLACEHOLDER = re.compile(r':(p\d+)\b')
LIKE_ESCAPE = '!'


def like_pattern(term):
    """Case-folded substring pattern with LIKE wildcards in the term escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace('%', LIKE_ESCAPE + '%')
        .replace('_', LIKE_ESCAPE + '_')
    )
    return f'%{escaped.lower()}%'


@dataclass
class Statement:
    sql: str
    params: dict = field(default_factory=dict)
    types: dict = field(default_factory=dict)

    @property
    def placeholders(self):
        names = set(PLACEHOLDER.findall(self.sql))
        return sorted(names, key=lambda name: int(name[1:]))

    @property
    def values(self):
        """Bound values in placeholder order."""
        return [self.params[name] for name in sorted(self.params, key=lambda name: int(name[1:]))]

    def clause(self):
        clause = text(self.sql)
        typed = [bindparam(name, type_=type_) for name, type_ in self.types.items() if type_ is not None]
        if typed:
            clause = clause.bindparams(*typed)
        return clause


class Binder:
    """Accumulates bound values and hands out the next placeholder."""

    def __init__(self, params=None, types=None):
        self.params = dict(params or {})
        self.types = dict(types or {})

    def bind(self, value, type_=None):
        name = f'p{len(self.params) + 1}'
        self.params[name] = value
        if type_ is not None:
            self.types[name] = type_
        return f':{name}'

    def copy(self):
        return Binder(self.params, self.types)


class SelectQuery:
    """SELECT with an explicit predicate list and parameter accumulator.

    ``page()`` and ``count()`` share one predicate list and one set of bound
    values; only ``page()`` appends LIMIT and OFFSET, always as the final two
    parameters.
    """

    def __init__(self, columns, source, predicates=()):
        self.columns = columns
        self.source = source
        self.predicates = list(predicates)
        self.order_by = []
        self._binder = Binder()

    def where(self, template, *values, type_=None):
        """Append ``template`` with each ``{n}`` replaced by a fresh placeholder.

        A template may repeat ``{0}`` to compare several columns against the
        same bound value.
        """
        placeholders = [self._binder.bind(value, type_) for value in values]
        self.predicates.append(template.format(*placeholders))
        return self

    def order(self, *terms):
        self.order_by.extend(terms)
        return self

    @property
    def where_sql(self):
        if not self.predicates:
            return ''
        return ' WHERE ' + ' AND '.join(self.predicates)

    def select(self):
        """Statement without ordering or pagination, for single-row lookups."""
        sql = f'SELECT {self.columns} FROM {self.source}{self.where_sql}'
        return Statement(sql, dict(self._binder.params), dict(self._binder.types))

    def page(self, limit, offset):
        binder = self._binder.copy()
        sql = f'SELECT {self.columns} FROM {self.source}{self.where_sql}'
        if self.order_by:
            sql += ' ORDER BY ' + ', '.join(self.order_by)
        sql += f' LIMIT {binder.bind(int(limit))} OFFSET {binder.bind(int(offset))}'
        return Statement(sql, binder.params, binder.types)

    def count(self):
        sql = f'SELECT COUNT(*) AS total FROM {self.source}{self.where_sql}'
        return Statement(sql, dict(self._binder.params), dict(self._binder.types))


def build_update(table, patch, allowed, key, touch=True):
    """UPDATE ``table`` from the allow-listed subset of ``patch``.

    ``allowed`` maps mutable column names to their SQL type (or None). Keys of
    ``patch`` outside it never reach the statement. Raises InvalidUpdate when
    nothing mutable remains.
    """
    binder = Binder()
    assignments = []
    for column, type_ in allowed.items():
        if column in patch:
            assignments.append(f'{column} = {binder.bind(patch[column], type_)}')
    if not assignments:
        raise InvalidUpdate()
    if touch:
        assignments.append('updated_at = CURRENT_TIMESTAMP')
    sql = f'UPDATE {table} SET {", ".join(assignments)} WHERE id = {binder.bind(key)}'
    return Statement(sql, binder.params, binder.types)


def build_delete(table, key):
    binder = Binder()
    return Statement(f'DELETE FROM {table} WHERE id = {binder.bind(key)}', binder.params)
