"""
Database constants for the knowledge base.

These constants configure FTS5 ranking weights, result limits,
and other search-related configuration values.
"""

# BM25 weights for items_fts columns
# Higher weights = more important in search ranking
# Column order: item_id (unindexed), title, content, tags
BM25_WEIGHTS = (0.0, 10.0, 1.0, 3.0)

# Compiled predicate for an empty query: match everything
UNIVERSAL_MATCH = "*"

# Result limits
DEFAULT_SEARCH_LIMIT = 50
DEFAULT_SIMILAR_LIMIT = 10
MAX_SEARCH_LIMIT = 200
