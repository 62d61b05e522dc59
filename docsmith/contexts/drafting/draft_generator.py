"""
Draft generation from user input and a loaded template.

Uses a generative backend when one is requested and available, and otherwise
synthesizes demo content section by section. Backend failure is never visible
to callers: it is logged and absorbed into the deterministic fallback.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from docsmith.contexts.drafting.logger import (
    _log_debug,
    _log_error,
    _log_success,
    log_backend_fallback,
    log_generation_start,
)
from docsmith.contexts.drafting.section_topics import TOPICS_BY_TAG, classify_section
from docsmith.contexts.templating.template_data_structure import Section, Template
from docsmith.exceptions import GenerationFailedError
from docsmith.user_input import UserInput, describe_tone
from docsmith.utils.llm import LLMProvider
from docsmith.utils.timestamp import now_readable

PROMPTS_PATH = Path(__file__).parent / "prompts"

PROMPT_TEMPLATE = "draft_prompt.md.jinja"
DEMO_DOCUMENT_TEMPLATE = "demo_document.md.jinja"

SYSTEM_PROMPT = (
    "You are an AWS Solutions Architect writing technical deliverables. "
    "Respond with the finished Markdown document only."
)


@dataclass
class DraftOutcome:
    """
    Result of one draft generation.

    Attributes:
        content: Generated Markdown document
        used_backend: True if the generative backend produced the content
        backend_name: Provider name when the backend was used
    """

    content: str
    used_backend: bool = False
    backend_name: Optional[str] = None


@dataclass
class _SectionBlock:
    title: str
    body: str


class DraftGenerator:
    """
    Produces Markdown drafts for a template.

    Args:
        backend: Optional LLM provider. Without one, requests for backend
                 generation fall back to demo synthesis.
    """

    def __init__(self, backend: Optional[LLMProvider] = None):
        self.backend = backend
        self.env = Environment(
            loader=FileSystemLoader(str(PROMPTS_PATH)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def generate_draft(
        self, user_input: UserInput, template: Template, use_backend: bool = False
    ) -> str:
        """
        Generate a Markdown draft.

        Args:
            user_input: Validated user input
            template: Loaded template
            use_backend: Try the generative backend first

        Returns:
            Markdown document

        Raises:
            GenerationFailedError: If demo synthesis itself fails
        """
        return self.compose_draft(user_input, template, use_backend).content

    def compose_draft(
        self, user_input: UserInput, template: Template, use_backend: bool = False
    ) -> DraftOutcome:
        """Generate a draft and report whether the backend produced it."""
        log_generation_start(template.type, user_input.document_tone, use_backend)

        if use_backend:
            content = self._generate_with_backend(user_input, template)
            if content:
                _log_success(f"Draft generated by {self.backend.name}")
                return DraftOutcome(
                    content=content, used_backend=True, backend_name=self.backend.name
                )

        try:
            content = self.generate_demo_content(user_input, template)
        except Exception as e:
            _log_error(f"Demo synthesis failed for {template.type}: {e}")
            raise GenerationFailedError(f"Draft generation failed for '{template.type}'") from e

        _log_success(f"Demo draft generated for {template.type}")
        return DraftOutcome(content=content)

    def create_prompt(self, user_input: UserInput, template: Template) -> str:
        """
        Build the backend prompt for a draft.

        Pure string construction: document name, summary and requirements
        verbatim, tone description, every section (common then specific) with
        its required flag and description, and the numbered rules.
        """
        return self.env.get_template(PROMPT_TEMPLATE).render(
            template=template,
            user_input=user_input,
            tone_description=describe_tone(user_input.document_tone),
        )

    def generate_demo_content(self, user_input: UserInput, template: Template) -> str:
        """
        Synthesize a complete draft without a backend.

        Layout: H1 template name, demo-mode note, generation timestamp, one H2
        block per section (common then specific), then a references block
        restating the inputs.
        """
        blocks = [
            _SectionBlock(
                title=section.title,
                body=self.generate_section_content(section, user_input, template),
            )
            for section in template.all_sections
        ]
        return self.env.get_template(DEMO_DOCUMENT_TEMPLATE).render(
            template=template,
            user_input=user_input,
            generated_at=now_readable(),
            blocks=blocks,
        )

    def generate_section_content(
        self, section: Section, user_input: UserInput, template: Template
    ) -> str:
        """Body for one section, chosen by classifying the section title into a topic."""
        tag = classify_section(section.title)
        _log_debug(f"Section '{section.title}' -> {tag}")

        return self.env.from_string(TOPICS_BY_TAG[tag].body).render(
            section=section,
            template=template,
            project_summary=user_input.project_summary,
            core_requirements=user_input.core_requirements,
        )

    def _generate_with_backend(self, user_input: UserInput, template: Template) -> Optional[str]:
        """Ask the backend for a draft. Returns None on any failure or empty response."""
        if self.backend is None:
            log_backend_fallback("no backend configured")
            return None

        prompt = self.create_prompt(user_input, template)
        try:
            response = self.backend.generate(SYSTEM_PROMPT, prompt)
        except Exception as e:
            log_backend_fallback(f"{type(e).__name__}: {e}")
            return None

        content = (response.content or "").strip() if response else ""
        if not content:
            log_backend_fallback("empty response")
            return None

        _log_debug(
            f"Backend usage: {response.input_tokens} input / {response.output_tokens} output tokens"
        )
        return content
