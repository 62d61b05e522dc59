"""
Input admissibility and draft structure validation.

Two independent checks:
- validate_input(): per-field errors for raw user input, never short-circuiting
- validate_draft(): Markdown well-formedness plus required-section coverage
  of a generated draft against its template

Both return result objects; neither raises for invalid content.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from docsmith.contexts.templating.template_data_structure import Template
from docsmith.contexts.validation.logger import _log_debug, log_draft_validation_result
from docsmith.contexts.validation.markdown_patterns import (
    count_code_fences,
    has_heading,
    has_section_heading,
)
from docsmith.user_input import DOCUMENT_TONES

# Prefix marking warnings that outrank a generic missing-section warning
CRITICAL_WARNING_PREFIX = "CRITICAL:"

# Title fragments that identify the Assumptions/Risks section
ASSUMPTIONS_RISKS_KEYWORDS = ("assumption", "risk")

INPUT_FIELD_MESSAGES = {
    "project_summary": "Project summary is required.",
    "core_requirements": "Core requirements are required.",
    "document_tone": "Document tone is required.",
    "deliverable_type": "Deliverable type is required.",
}
INVALID_TONE_MESSAGE = f"Document tone must be one of: {', '.join(DOCUMENT_TONES)}."


@dataclass
class InputValidationResult:
    """
    Result of user input validation.

    Attributes:
        is_valid: True iff errors is empty
        errors: Field name -> message
    """

    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass
class DraftValidationResult:
    """
    Result of a structural draft check.

    Attributes:
        is_valid: True iff warnings is empty
        warnings: Ordered warning messages
    """

    is_valid: bool
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_warnings(cls, warnings: List[str]) -> "DraftValidationResult":
        return cls(is_valid=not warnings, warnings=list(warnings))


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def missing_section_warning(title: str) -> str:
    """
    Warning for a required section missing from a draft.

    Assumptions/Risks sections get a distinguished CRITICAL warning.
    """
    lowered = title.lower()
    if any(keyword in lowered for keyword in ASSUMPTIONS_RISKS_KEYWORDS):
        return (
            f'{CRITICAL_WARNING_PREFIX} The "Assumptions/Risks" section is missing '
            f'(expected "{title}"). This section is essential for making the '
            f"project's assumptions and risks explicit."
        )
    return f"Missing required section: {title}"


class Validator:
    """Validates raw user input and generated drafts."""

    def validate_input(self, form_data: Mapping[str, Any]) -> InputValidationResult:
        """
        Check raw form data for admissibility.

        Every field is checked; errors are collected, not short-circuited.

        Args:
            form_data: Mapping with project_summary, core_requirements,
                       document_tone, and deliverable_type

        Returns:
            InputValidationResult with one entry per failing field
        """
        errors = {}

        for field_name, message in INPUT_FIELD_MESSAGES.items():
            if _is_blank(form_data.get(field_name)):
                errors[field_name] = message

        tone = form_data.get("document_tone")
        if "document_tone" not in errors and tone not in DOCUMENT_TONES:
            errors["document_tone"] = INVALID_TONE_MESSAGE

        if errors:
            _log_debug(f"Input rejected: {sorted(errors)}")

        return InputValidationResult(is_valid=not errors, errors=errors)

    def validate_markdown(self, content: str) -> DraftValidationResult:
        """
        Check basic Markdown well-formedness.

        Empty content short-circuits with a single warning. Otherwise warns
        when there is no heading line and when code fences are unbalanced.
        """
        if _is_blank(content):
            return DraftValidationResult.from_warnings(["Draft content is empty."])

        warnings = []

        if not has_heading(content):
            warnings.append("Markdown document has no headings.")

        if count_code_fences(content) % 2 != 0:
            warnings.append("Markdown document has an unclosed code block.")

        return DraftValidationResult.from_warnings(warnings)

    def check_required_sections(self, draft: str, template: Template) -> DraftValidationResult:
        """
        Check that every required section has a heading in the draft.

        Sections are checked common then specific. A heading of any level
        matches if its text starts with the section title, bare or wrapped in
        bold markers, compared case-insensitively.
        """
        draft = draft or ""
        warnings = [
            missing_section_warning(section.title)
            for section in template.required_sections
            if not has_section_heading(draft, section.title)
        ]
        return DraftValidationResult.from_warnings(warnings)

    def validate_draft(self, draft: str, template: Template) -> DraftValidationResult:
        """
        Full structural validation of a draft against its template.

        Returns:
            Markdown warnings followed by section warnings; valid iff none
        """
        warnings = []
        warnings.extend(self.validate_markdown(draft).warnings)
        warnings.extend(self.check_required_sections(draft, template).warnings)

        result = DraftValidationResult.from_warnings(warnings)
        log_draft_validation_result(template.type, result)
        return result
