"""Multi-tenant REST API for occupational hearing-test records."""

__version__ = "1.0.0"
