"""Unit tests for DraftGenerator prompt construction and demo synthesis."""

import re

import pytest

from docsmith.contexts.drafting.draft_generator import SYSTEM_PROMPT, DraftGenerator
from docsmith.contexts.templating.template_data_structure import Section, Template
from docsmith.exceptions import GenerationFailedError
from docsmith.user_input import UserInput
from docsmith.utils.llm import LLMProvider, LLMResponse, RequestBudget


class StubProvider(LLMProvider):
    """Backend double returning a canned reply or raising."""

    vendor = "stub"
    model = "test-model"
    transient_errors = (ConnectionError,)

    def __init__(self, content: str = "", error: Exception = None):
        self.content = content
        self.error = error
        self.calls = []

    def _complete(self, system_prompt: str, user_prompt: str, timeout: float) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt))
        if self.error:
            raise self.error
        return LLMResponse(content=self.content, model=self.model, input_tokens=10, output_tokens=20)


@pytest.fixture
def template():
    return Template(
        type="type1",
        name="Architecture Design",
        common_sections=(
            Section("Overview", True, "Project background and goals"),
            Section("Glossary", False, "Terms used in this document"),
        ),
        specific_sections=(
            Section("Assumptions/Risks", True, "What could go wrong"),
            Section("Architecture", True, "System structure"),
        ),
        rules=("Use Markdown", "Keep it short"),
    )


@pytest.fixture
def user_input():
    return UserInput(
        project_summary="Migrate to cloud",
        core_requirements="High availability",
        document_tone="formal",
    )


class TestCreatePrompt:
    """Test prompt construction."""

    def test_includes_inputs_verbatim(self, template, user_input):
        prompt = DraftGenerator().create_prompt(user_input, template)

        assert '"Architecture Design"' in prompt
        assert "Migrate to cloud" in prompt
        assert "High availability" in prompt

    @pytest.mark.parametrize(
        "tone, description",
        [
            ("formal", "formal and ceremonial"),
            ("technical", "technical and detailed"),
            ("concise", "concise and essential"),
            ("playful", "professional"),
        ],
    )
    def test_tone_description(self, template, tone, description):
        user_input = UserInput("Summary", "Requirements", tone)
        prompt = DraftGenerator().create_prompt(user_input, template)

        assert f"Write in a {description} style" in prompt

    def test_lists_sections_in_order_with_required_flag(self, template, user_input):
        prompt = DraftGenerator().create_prompt(user_input, template)
        section_lines = [line for line in prompt.splitlines() if line.startswith("- ")]

        assert section_lines == [
            "- Overview (required): Project background and goals",
            "- Glossary: Terms used in this document",
            "- Assumptions/Risks (required): What could go wrong",
            "- Architecture (required): System structure",
        ]

    def test_numbers_rules(self, template, user_input):
        prompt = DraftGenerator().create_prompt(user_input, template)

        assert "1. Use Markdown\n2. Keep it short\n" in prompt

    def test_is_deterministic(self, template, user_input):
        generator = DraftGenerator()
        assert generator.create_prompt(user_input, template) == generator.create_prompt(
            user_input, template
        )


class TestGenerateDemoContent:
    """Test deterministic synthesis."""

    def test_layout(self, template, user_input):
        content = DraftGenerator().generate_demo_content(user_input, template)

        assert content.startswith("# Architecture Design\n")
        assert "demo mode" in content
        assert re.search(r"\*\*Generated at:\*\* \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", content)

    def test_sections_in_order(self, template, user_input):
        content = DraftGenerator().generate_demo_content(user_input, template)
        headings = re.findall(r"^## (.+)$", content, re.MULTILINE)

        assert headings == ["Overview", "Glossary", "Assumptions/Risks", "Architecture", "References"]

    def test_references_restate_inputs(self, template, user_input):
        content = DraftGenerator().generate_demo_content(user_input, template)
        references = content.split("## References", 1)[1]

        assert "- **Project Summary:** Migrate to cloud" in references
        assert "- **Core Requirements:** High availability" in references
        assert "- **Document Tone:** formal" in references

    def test_input_is_not_interpreted_as_template_syntax(self, template):
        user_input = UserInput("Uses {{ braces }} and {% tags %}", "Requirements", "concise")
        content = DraftGenerator().generate_demo_content(user_input, template)

        assert "Uses {{ braces }} and {% tags %}" in content


class TestGenerateSectionContent:
    """Test per-section bodies."""

    def test_overview_interpolates_inputs(self, template, user_input):
        body = DraftGenerator().generate_section_content(
            Section("Overview", True, "desc"), user_input, template
        )
        assert "### Project Purpose\n\nMigrate to cloud" in body
        assert "High availability" in body

    def test_requirements_interpolates_requirements(self, template, user_input):
        body = DraftGenerator().generate_section_content(
            Section("Functional Requirements", True, "desc"), user_input, template
        )
        assert "High availability" in body

    def test_general_fallback(self, template, user_input):
        section = Section("Expected Benefits", False, "Outcomes the project delivers.")
        body = DraftGenerator().generate_section_content(section, user_input, template)

        assert body.startswith("Outcomes the project delivers.")
        assert "**Key considerations:**\n- Migrate to cloud\n- High availability" in body

    def test_assumptions_risks_body(self, template, user_input):
        body = DraftGenerator().generate_section_content(
            Section("Assumptions/Risks", True, "desc"), user_input, template
        )
        assert "### Assumptions" in body
        assert "### Risks" in body
        assert "### Mitigations" in body


class TestGenerateDraft:
    """Test backend use and fallback."""

    def test_demo_mode_by_default(self, template, user_input):
        generator = DraftGenerator(backend=StubProvider(content="# From backend"))
        outcome = generator.compose_draft(user_input, template)

        assert outcome.used_backend is False
        assert outcome.content.startswith("# Architecture Design")
        assert generator.backend.calls == []

    def test_uses_backend_when_requested(self, template, user_input):
        backend = StubProvider(content="# From backend\n\n## Overview\n")
        generator = DraftGenerator(backend=backend)

        outcome = generator.compose_draft(user_input, template, use_backend=True)

        assert outcome.used_backend is True
        assert outcome.backend_name == "stub/test-model"
        assert outcome.content == "# From backend\n\n## Overview"
        system_prompt, user_prompt = backend.calls[0]
        assert system_prompt == SYSTEM_PROMPT
        assert user_prompt == generator.create_prompt(user_input, template)

    def test_falls_back_without_backend(self, template, user_input):
        draft = DraftGenerator().generate_draft(user_input, template, use_backend=True)
        assert draft.startswith("# Architecture Design")

    def test_falls_back_on_backend_error(self, template, user_input):
        generator = DraftGenerator(backend=StubProvider(error=RuntimeError("service down")))
        outcome = generator.compose_draft(user_input, template, use_backend=True)

        assert outcome.used_backend is False
        assert outcome.content.startswith("# Architecture Design")
        assert "service down" not in outcome.content

    def test_falls_back_when_retries_run_out(self, template, user_input, monkeypatch):
        monkeypatch.setattr("docsmith.utils.llm.time.sleep", lambda seconds: None)
        backend = StubProvider(error=ConnectionError("connection reset"))
        generator = DraftGenerator(backend=backend)

        outcome = generator.compose_draft(user_input, template, use_backend=True)

        assert outcome.used_backend is False
        assert len(backend.calls) == RequestBudget().max_attempts

    @pytest.mark.parametrize("content", ["", "   \n"])
    def test_falls_back_on_empty_response(self, template, user_input, content):
        generator = DraftGenerator(backend=StubProvider(content=content))
        outcome = generator.compose_draft(user_input, template, use_backend=True)

        assert outcome.used_backend is False
        assert outcome.content.startswith("# Architecture Design")

    @pytest.mark.parametrize(
        "error", [KeyError("topic"), AttributeError("body"), ValueError("bad section")]
    )
    def test_synthesis_failure_is_generation_failed(self, template, user_input, monkeypatch, error):
        generator = DraftGenerator()

        def broken(*args, **kwargs):
            raise error

        monkeypatch.setattr(generator, "generate_section_content", broken)

        with pytest.raises(GenerationFailedError) as exc_info:
            generator.generate_draft(user_input, template)

        assert exc_info.value.__cause__ is error
