"""Vehicle ownership reconciliation backend."""

__version__ = "1.0.0"
