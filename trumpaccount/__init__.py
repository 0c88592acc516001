"""Trump Account growth, tax and withdrawal projections."""

__version__ = "0.1.0"
