"""recordkeeper: queryable, paginated audit record trail."""

__version__ = "1.0.0"
