"""Textual interface for the compose session."""

from .app import CourierApp
from .compose_screen import ComposeScreen

__all__ = ["CourierApp", "ComposeScreen"]
