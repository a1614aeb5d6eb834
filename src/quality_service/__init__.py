"""Aggregate heterogeneous code-quality analyzers into one quality verdict."""

__version__ = "0.1.0"
