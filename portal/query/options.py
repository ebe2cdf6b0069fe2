import math
from dataclasses import dataclass, field, replace
from datetime import date

from flask import current_app

from portal.errors import ValidationError


@dataclass(frozen=True)
class QueryOptions:
    """Filter and pagination options for one list call.

    ``filters`` come from the caller, ``forced`` from the policy engine. On a
    key present in both the forced value wins.
    """
    filters: dict = field(default_factory=dict)
    forced: dict = field(default_factory=dict)
    limit: int = 10
    offset: int = 0

    def effective_filters(self):
        merged = {k: v for k, v in self.filters.items() if v is not None and v != ''}
        merged.update(self.forced)
        return merged

    def with_forced(self, forced):
        if not forced:
            return self
        return replace(self, forced={**self.forced, **forced})


@dataclass
class Page:
    items: list
    total: int
    limit: int
    offset: int

    @property
    def total_pages(self):
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self):
        return {
            'total': self.total,
            'totalPages': self.total_pages,
            'currentPage': self.offset // self.limit + 1,
            'limit': self.limit,
            'hasNext': self.offset + self.limit < self.total,
            'hasPrev': self.offset > 0,
        }


def parse_int(value, name):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(errors=[f'{name} must be an integer'])


def parse_date(value, name):
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(errors=[f'{name} must be a date in YYYY-MM-DD format'])


def parse_bool(value, name):
    lowered = str(value).strip().lower()
    if lowered in ('true', '1', 'yes'):
        return True
    if lowered in ('false', '0', 'no'):
        return False
    raise ValidationError(errors=[f'{name} must be true or false'])


def options_from_args(args, fields, default_limit=None):
    """
    Build QueryOptions from request query parameters.

    ``fields`` maps accepted filter names to a parser (``str``, ``int``,
    ``date`` or ``bool``); other parameters are ignored. Pagination accepts
    ``limit`` with either ``offset`` or a 1-based ``page``.
    """
    parsers = {str: lambda v, n: v.strip(), int: parse_int, date: parse_date, bool: parse_bool}
    errors = []
    filters = {}
    for name, kind in fields.items():
        raw = args.get(name)
        if raw is None or raw == '':
            continue
        try:
            filters[name] = parsers[kind](raw, name)
        except ValidationError as e:
            errors.extend(e.errors)

    max_limit = current_app.config.get('MAX_PAGE_LIMIT', 100)
    limit = default_limit or current_app.config.get('DEFAULT_PAGE_LIMIT', 10)
    offset = 0
    try:
        if args.get('limit'):
            limit = parse_int(args.get('limit'), 'limit')
            if limit < 1 or limit > max_limit:
                errors.append(f'limit must be between 1 and {max_limit}')
        if args.get('offset'):
            offset = parse_int(args.get('offset'), 'offset')
            if offset < 0:
                errors.append('offset cannot be negative')
        elif args.get('page'):
            page = parse_int(args.get('page'), 'page')
            if page < 1:
                errors.append('page must be 1 or greater')
            else:
                offset = (page - 1) * limit
    except ValidationError as e:
        errors.extend(e.errors)

    if errors:
        raise ValidationError(errors=errors)
    return QueryOptions(filters=filters, limit=limit, offset=offset)
