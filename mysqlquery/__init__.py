"""MySQL Query Tool - run ad-hoc SQL against a MySQL server."""

__version__ = "1.0.0"
