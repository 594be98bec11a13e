"""Implementation package behind the assertkit public API."""

__version__ = "0.1.0"
