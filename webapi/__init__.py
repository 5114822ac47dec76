"""In-memory users REST API."""

__version__ = "0.1.0"
