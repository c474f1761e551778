"""Semantic document ingestion and search over embedding models and vector collections."""

__version__ = "0.1.0"
