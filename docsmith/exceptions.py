"""Custom exceptions for docsmith with template references and boundary status codes."""

from pathlib import Path
from typing import Dict, Optional


class DocsmithError(Exception):
    """
    Base exception for docsmith errors surfaced to callers.

    Attributes:
        status_code: Status a transport layer should map this error to
    """

    status_code: int = 500


class TemplateNotFoundError(DocsmithError):
    """
    Exception raised when no schema exists for a requested template type.

    Attributes:
        type_name: Template type that was requested (e.g., 'type1')
        template_path: Path where the schema was expected
    """

    status_code = 404

    def __init__(self, type_name: str, template_path: Optional[Path] = None):
        self.type_name = type_name
        self.template_path = template_path

        message = f"Template not found for type '{type_name}'"
        if template_path:
            message += f" at {template_path}"

        super().__init__(message)


class TemplateMalformedError(DocsmithError):
    """
    Exception raised when a template schema exists but fails parsing or validation.

    This is a configuration defect, kept distinct from TemplateNotFoundError.

    Attributes:
        message: Field-specific description of the defect
        type_name: Template type being loaded, if known
        template_path: Path to the schema file, if known
        original_error: Underlying parser error, if any
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.type_name = type_name
        self.template_path = template_path
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if type_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Type: {type_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class InputValidationError(DocsmithError, ValueError):
    """
    Exception raised when user input fails validation.

    Carries the complete per-field error mapping, never just the first failure.
    """

    status_code = 400

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Input validation failed for: {fields}")


class GenerationFailedError(DocsmithError):
    """Exception raised when deterministic draft synthesis itself fails."""

    pass


class BackendUnavailableError(DocsmithError):
    """
    Exception raised when no generative backend can be built.

    Covers a missing provider SDK, a missing API key, an unknown provider
    name, and an invalid request budget. Raised only while constructing a
    backend; once a DraftGenerator holds a backend, its failures fall back
    to demo synthesis instead.
    """

    status_code = 503
