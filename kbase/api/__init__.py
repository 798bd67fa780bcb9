"""REST API for the knowledge base."""
