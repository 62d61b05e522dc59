"""
Validation Context

Responsibilities:
- Checks raw user input for admissibility, field by field
- Checks generated drafts for Markdown well-formedness
- Checks that drafts contain every required section of their template

Owns: Validation result structures, heading patterns, warning wording
Never: Modifies drafts or templates
"""

from docsmith.contexts.validation.validator import (
    CRITICAL_WARNING_PREFIX,
    DraftValidationResult,
    InputValidationResult,
    Validator,
)

__all__ = [
    "CRITICAL_WARNING_PREFIX",
    "DraftValidationResult",
    "InputValidationResult",
    "Validator",
]
