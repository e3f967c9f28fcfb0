"""esquery - Placeholder substitution for search-engine string query templates."""

__version__ = "0.1.0"
