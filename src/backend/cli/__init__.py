"""Command-line interface for the pool capacity advisor."""
