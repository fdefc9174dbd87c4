"""Extract fields from Crossref JSONL.gz data files into CSV, and rewrite index file paths."""

__version__ = "0.1.0"
__all__ = ["__version__"]