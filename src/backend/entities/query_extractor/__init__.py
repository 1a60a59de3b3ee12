"""Query Extractor package for pulling KQL queries out of model output."""

from .extractor import clean_query, extract_queries

__all__ = ["clean_query", "extract_queries"]
