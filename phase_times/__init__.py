"""Binned compiler phase timing profiles from SSA phase-time build logs."""

__version__ = "0.1.0"
