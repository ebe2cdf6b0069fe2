from .builder import Statement, SelectQuery, build_update, build_delete, like_pattern
from .options import QueryOptions, Page, options_from_args
from .resources import build_list_query, build_lookup_query

__all__ = [
    "Statement",
    "SelectQuery",
    "build_update",
    "build_delete",
    "like_pattern",
    "QueryOptions",
    "Page",
    "options_from_args",
    "build_list_query",
    "build_lookup_query",
]
