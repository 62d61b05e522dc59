"""
Draft pipeline orchestration.

Wires the three contexts together for a caller such as a CLI or HTTP layer:
TemplateManager -> Validator.validate_input -> DraftGenerator -> Validator.validate_draft.
Components are passed in explicitly; the pipeline keeps no state between calls.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from docsmith.contexts.drafting.draft_generator import DraftGenerator
from docsmith.contexts.templating.template_data_structure import Template, TemplateSummary
from docsmith.contexts.templating.template_manager import TemplateManager
from docsmith.contexts.validation.validator import (
    DraftValidationResult,
    InputValidationResult,
    Validator,
)
from docsmith.exceptions import InputValidationError
from docsmith.user_input import UserInput


@dataclass
class DraftResult:
    """
    Outcome of a full pipeline run.

    Attributes:
        template: Template the draft was generated for
        user_input: Input the draft was generated from
        draft: Generated Markdown document
        warnings: Structural warnings from validate_draft()
        used_backend: True if the generative backend produced the draft
    """

    template: Template
    user_input: UserInput
    draft: str
    warnings: List[str] = field(default_factory=list)
    used_backend: bool = False

    @property
    def metadata(self) -> Dict[str, Any]:
        """Metadata a persistence layer stores alongside the draft."""
        return {
            "deliverable_type": self.template.type,
            "document_tone": self.user_input.document_tone,
            "used_backend": self.used_backend,
        }


class DraftPipeline:
    """
    Caller-facing surface of docsmith.

    Args:
        template_manager: Template schema store access
        draft_generator: Draft synthesis (with or without a backend)
        validator: Input and draft validation
    """

    def __init__(
        self,
        template_manager: TemplateManager,
        draft_generator: DraftGenerator,
        validator: Validator,
    ):
        self.template_manager = template_manager
        self.draft_generator = draft_generator
        self.validator = validator

    def list_templates(self) -> List[TemplateSummary]:
        return self.template_manager.list_templates()

    def load_template(self, type_name: str) -> Template:
        return self.template_manager.load_template(type_name)

    def validate_input(self, form_data: Mapping[str, Any]) -> InputValidationResult:
        return self.validator.validate_input(form_data)

    def generate_draft(
        self, user_input: UserInput, template: Template, use_backend: bool = False
    ) -> str:
        return self.draft_generator.generate_draft(user_input, template, use_backend)

    def validate_draft(self, draft: str, template: Template) -> DraftValidationResult:
        return self.validator.validate_draft(draft, template)

    def run(self, form_data: Mapping[str, Any], use_backend: bool = False) -> DraftResult:
        """
        Validate input, load the template, generate, and validate the draft.

        Args:
            form_data: Raw input with project_summary, core_requirements,
                       document_tone, and deliverable_type
            use_backend: Try the generative backend first

        Returns:
            DraftResult with the draft and its structural warnings

        Raises:
            InputValidationError: With every failing field
            TemplateNotFoundError: If deliverable_type has no template
            TemplateMalformedError: If the template schema is defective
            GenerationFailedError: If demo synthesis fails
        """
        input_result = self.validate_input(form_data)
        if not input_result.is_valid:
            raise InputValidationError(input_result.errors)

        template = self.load_template(str(form_data["deliverable_type"]).strip())
        user_input = UserInput.from_mapping(form_data)

        outcome = self.draft_generator.compose_draft(user_input, template, use_backend)
        draft_result = self.validate_draft(outcome.content, template)

        return DraftResult(
            template=template,
            user_input=user_input,
            draft=outcome.content,
            warnings=draft_result.warnings,
            used_backend=outcome.used_backend,
        )
