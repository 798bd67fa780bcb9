"""
Search module for the item index.

Provides the text query compiler, filtered search, tag-set matching,
tag-overlap similarity, and FTS index maintenance.
"""

from .compiler import compile_text_query, is_universal
from .filtered import build_search_statement, search_filtered
from .fts import FTSManager, project_tag_names, sync_item_tags
from .predicate import Fragment, StatementBuilder, in_list
from .similar import find_similar
from .tags import TagMatchMode, match_tags, search_by_tags, tag_membership_condition

__all__ = [
    "compile_text_query",
    "is_universal",
    "build_search_statement",
    "search_filtered",
    "FTSManager",
    "project_tag_names",
    "sync_item_tags",
    "Fragment",
    "StatementBuilder",
    "in_list",
    "find_similar",
    "TagMatchMode",
    "match_tags",
    "search_by_tags",
    "tag_membership_condition",
]
