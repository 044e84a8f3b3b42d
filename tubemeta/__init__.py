"""Movie metadata scrapers, with translation, query parsing and bearer token helpers."""

__version__ = "0.1.0"