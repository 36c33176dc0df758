"""Tiranga - the tricolour, unfurled one column at a time."""

__version__ = "0.1.0"
