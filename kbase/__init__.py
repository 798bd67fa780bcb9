"""
kbase: a personal knowledge base with faceted search and tag similarity.
"""

__version__ = "0.1.0"
