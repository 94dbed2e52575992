"""Decorators, unit formatting, ETA and speed estimates, and bar ordering helpers for terminal progress bars."""

__version__ = "0.1.0"