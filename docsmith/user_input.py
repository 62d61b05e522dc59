"""User-supplied inputs for document generation."""

from dataclasses import dataclass
from typing import Any, Mapping

# Accepted document tones and how they read in a prompt
DOCUMENT_TONES = ("formal", "technical", "concise")

TONE_DESCRIPTIONS = {
    "formal": "formal and ceremonial",
    "technical": "technical and detailed",
    "concise": "concise and essential",
}
DEFAULT_TONE_DESCRIPTION = "professional"


def describe_tone(tone: str) -> str:
    """Human-readable tone description, falling back to 'professional' for unknown tones."""
    return TONE_DESCRIPTIONS.get(tone, DEFAULT_TONE_DESCRIPTION)


@dataclass(frozen=True)
class UserInput:
    """
    Structured inputs a document is generated from.

    Attributes:
        project_summary: What the project is
        core_requirements: What the project must achieve
        document_tone: One of DOCUMENT_TONES
    """

    project_summary: str
    core_requirements: str
    document_tone: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UserInput":
        """
        Build UserInput from raw form data.

        Values are kept exactly as entered; missing values become empty
        strings. Extra keys (e.g., deliverable_type) are ignored. Run
        Validator.validate_input() first; this does no checking.
        """
        return cls(
            project_summary=str(data.get("project_summary") or ""),
            core_requirements=str(data.get("core_requirements") or ""),
            document_tone=str(data.get("document_tone") or ""),
        )
