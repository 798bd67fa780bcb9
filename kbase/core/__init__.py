"""Core storage, search and domain models."""
