"""Services layered over the database for the API and CLI."""
