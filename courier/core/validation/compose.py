"""Pre-send validation of compose fields."""

from dataclasses import dataclass, field
from typing import Dict

from courier.core.models import FieldSet
from courier.utils.logging import get_logger

from .recipients import RecipientParser

logger = get_logger(__name__)

TO_REQUIRED = "At least one recipient is required"
TO_INVALID = "Invalid email address format"
SUBJECT_EMPTY = "Subject is empty (optional)"

# Entries that are reported alongside errors but never block sending
WARNING_FIELDS = frozenset({"subject"})


@dataclass
class ValidationResult:
    """Outcome of a validation pass.

    ``errors`` holds both blocking errors and the non-blocking subject
    warning, keyed by field name.
    """

    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def blocking(self) -> Dict[str, str]:
        return {k: v for k, v in self.errors.items() if k not in WARNING_FIELDS}

    @property
    def warnings(self) -> Dict[str, str]:
        return {k: v for k, v in self.errors.items() if k in WARNING_FIELDS}

    @property
    def is_valid(self) -> bool:
        return not self.blocking

    def __bool__(self) -> bool:
        return self.is_valid


class ComposeValidator:
    """Validate required fields before a send attempt"""

    @staticmethod
    def validate(fields: FieldSet) -> ValidationResult:
        """Check recipients and subject.

        Args:
            fields: Current compose field values

        Returns:
            ValidationResult; ``is_valid`` is False only for blocking errors
        """
        result = ValidationResult()

        to_value = fields.to.strip()
        if not to_value:
            result.errors["to"] = TO_REQUIRED
        elif not RecipientParser.parse(to_value):
            result.errors["to"] = TO_INVALID

        if not fields.subject.strip():
            result.errors["subject"] = SUBJECT_EMPTY

        if result.errors:
            logger.debug(f"Validation issues: {sorted(result.errors)}")

        return result
