"""Courier - terminal mail client, message composition core."""

__version__ = "0.1.0"
