"""Domain validation utilities."""

from .compose import ComposeValidator, ValidationResult
from .recipients import RecipientParser

__all__ = ["ComposeValidator", "RecipientParser", "ValidationResult"]
