"""Resolve human-supplied versions to concrete git refs."""

__version__ = "0.3.0"
