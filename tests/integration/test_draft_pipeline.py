"""
Integration tests for the full draft pipeline against the bundled templates.
"""

import re

import pytest

from docsmith.contexts.drafting.draft_generator import DraftGenerator
from docsmith.contexts.templating.template_data_structure import Section, Template
from docsmith.contexts.templating.template_manager import TemplateManager
from docsmith.contexts.validation.validator import CRITICAL_WARNING_PREFIX, Validator
from docsmith.exceptions import InputValidationError, TemplateNotFoundError
from docsmith.pipeline import DraftPipeline
from docsmith.user_input import UserInput

FORM_DATA = {
    "project_summary": "Migrate to cloud",
    "core_requirements": "High availability",
    "document_tone": "formal",
    "deliverable_type": "type1",
}


@pytest.fixture
def pipeline():
    return DraftPipeline(
        template_manager=TemplateManager(),
        draft_generator=DraftGenerator(),
        validator=Validator(),
    )


@pytest.fixture
def scenario_template():
    return Template(
        type="type1",
        name="Architecture Design",
        common_sections=(Section("Overview", True, "..."),),
        specific_sections=(Section("Assumptions/Risks", True, "..."),),
        rules=("Use Markdown",),
    )


@pytest.mark.integration
@pytest.mark.parametrize("tone", ["formal", "technical", "concise"])
def test_every_listed_template_round_trips(pipeline, tone):
    """Demo drafts always satisfy their own template."""
    user_input = UserInput("Migrate to cloud", "High availability", tone)

    for summary in pipeline.list_templates():
        template = pipeline.load_template(summary.type)
        draft = pipeline.generate_draft(user_input, template)
        result = pipeline.validate_draft(draft, template)

        assert result.is_valid, f"{summary.type}: {result.warnings}"
        assert result.warnings == []


@pytest.mark.integration
@pytest.mark.parametrize("type_name", ["type1", "type2", "type3"])
def test_draft_has_every_section_in_order(pipeline, type_name):
    template = pipeline.load_template(type_name)
    user_input = UserInput("Migrate to cloud", "High availability", "technical")

    draft = pipeline.generate_draft(user_input, template)
    headings = re.findall(r"^## (.+)$", draft, re.MULTILINE)

    expected = [section.title for section in template.all_sections]
    assert headings[: len(expected)] == expected
    assert "Migrate to cloud" in draft
    assert "High availability" in draft


@pytest.mark.integration
def test_concrete_scenario(scenario_template):
    user_input = UserInput("Migrate to cloud", "High availability", "formal")

    draft = DraftGenerator().generate_draft(user_input, scenario_template)
    result = Validator().validate_draft(draft, scenario_template)

    assert draft.startswith("# Architecture Design")
    assert "\n## Overview\n" in draft
    assert "\n## Assumptions/Risks\n" in draft
    assert result.warnings == []


@pytest.mark.integration
def test_concrete_scenario_missing_assumptions_risks(scenario_template):
    user_input = UserInput("Migrate to cloud", "High availability", "formal")
    draft = DraftGenerator().generate_draft(user_input, scenario_template)
    stripped = draft.replace("## Assumptions/Risks", "## Caveats")

    result = Validator().check_required_sections(stripped, scenario_template)

    assert len(result.warnings) == 1
    assert result.warnings[0].startswith(CRITICAL_WARNING_PREFIX)


@pytest.mark.integration
def test_run_produces_valid_draft(pipeline):
    result = pipeline.run(FORM_DATA)

    assert result.draft.startswith("# Architecture Design")
    assert result.warnings == []
    assert result.used_backend is False
    assert result.metadata == {
        "deliverable_type": "type1",
        "document_tone": "formal",
        "used_backend": False,
    }


@pytest.mark.integration
def test_run_with_backend_requested_but_absent(pipeline):
    result = pipeline.run(FORM_DATA, use_backend=True)

    assert result.used_backend is False
    assert result.warnings == []


@pytest.mark.integration
def test_run_rejects_invalid_input(pipeline):
    form_data = {**FORM_DATA, "project_summary": " ", "document_tone": "casual"}

    with pytest.raises(InputValidationError) as exc_info:
        pipeline.run(form_data)

    assert set(exc_info.value.errors) == {"project_summary", "document_tone"}
    assert exc_info.value.status_code == 400


@pytest.mark.integration
def test_run_unknown_template(pipeline):
    with pytest.raises(TemplateNotFoundError):
        pipeline.run({**FORM_DATA, "deliverable_type": "type99"})


@pytest.mark.integration
def test_run_restates_input_exactly(pipeline):
    summary = "  Migrate to cloud\nwith zero downtime  "
    requirements = "High availability\n"
    form_data = {**FORM_DATA, "project_summary": summary, "core_requirements": requirements}

    result = pipeline.run(form_data)

    assert result.user_input.project_summary == summary
    assert result.user_input.core_requirements == requirements
    assert summary in result.draft
    assert requirements in result.draft
