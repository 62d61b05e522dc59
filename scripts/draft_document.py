#!/usr/bin/env python3
"""
Generate and validate technical document drafts from templates.

Usage:
    python scripts/draft_document.py list
    python scripts/draft_document.py show type1
    python scripts/draft_document.py generate type1 --summary "Migrate to cloud" \\
        --requirements "High availability" --tone formal --output draft.md
    python scripts/draft_document.py generate type2 -s "..." -r "..." --llm
    python scripts/draft_document.py validate draft.md type1
"""

import os
from pathlib import Path

import typer
from dotenv import load_dotenv

from docsmith.contexts.drafting.draft_generator import DraftGenerator
from docsmith.contexts.templating.template_manager import TemplateManager
from docsmith.contexts.validation.validator import Validator
from docsmith.exceptions import BackendUnavailableError, DocsmithError, InputValidationError
from docsmith.pipeline import DraftPipeline
from docsmith.utils.llm import get_provider
from docsmith.utils.logger import start_session

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(help="Generate and validate technical document drafts.")


def _build_pipeline(use_llm: bool = False) -> DraftPipeline:
    backend = None
    if use_llm:
        try:
            backend = get_provider()
        except BackendUnavailableError as e:
            typer.secho(
                f"LLM backend unavailable ({e.args[0]}); using demo mode",
                fg=typer.colors.YELLOW,
                err=True,
            )

    return DraftPipeline(
        template_manager=TemplateManager(),
        draft_generator=DraftGenerator(backend=backend),
        validator=Validator(),
    )


@app.command("list")
def list_templates():
    """List available templates."""
    pipeline = _build_pipeline()
    templates = pipeline.list_templates()

    if not templates:
        typer.echo("No templates found.")
        raise typer.Exit(1)

    for summary in templates:
        typer.echo(f"  {summary.type}: {summary.name}")


@app.command()
def show(
    template_type: str = typer.Argument(..., help="Template type (e.g., type1)"),
):
    """Show a template's sections and rules."""
    pipeline = _build_pipeline()
    try:
        template = pipeline.load_template(template_type)
    except DocsmithError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{template.name} ({template.type})")
    typer.echo(f"\n=== Sections ({len(template.all_sections)}) ===")
    for section in template.all_sections:
        marker = "*" if section.required else " "
        typer.echo(f"  {marker} {section.title}: {section.description}")

    typer.echo(f"\n=== Rules ({len(template.rules)}) ===")
    for index, rule in enumerate(template.rules, start=1):
        typer.echo(f"  {index}. {rule}")


@app.command()
def generate(
    template_type: str = typer.Argument(..., help="Template type (e.g., type1)"),
    summary: str = typer.Option(..., "--summary", "-s", help="Project summary"),
    requirements: str = typer.Option(..., "--requirements", "-r", help="Core requirements"),
    tone: str = typer.Option("technical", "--tone", "-t", help="formal, technical, or concise"),
    llm: bool = typer.Option(False, "--llm", help="Try the configured LLM backend first"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the draft to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
):
    """Generate a draft and report structural warnings."""
    log_file = start_session(
        "generate",
        LOGS_PATH,
        provenance={"Template": template_type, "Tone": tone, "LLM": llm},
        console_level="DEBUG" if verbose else "INFO",
    )
    pipeline = _build_pipeline(use_llm=llm)

    form_data = {
        "project_summary": summary,
        "core_requirements": requirements,
        "document_tone": tone,
        "deliverable_type": template_type,
    }

    try:
        result = pipeline.run(form_data, use_backend=llm)
    except InputValidationError as e:
        for field_name, message in e.errors.items():
            typer.echo(f"ERROR: {field_name}: {message}", err=True)
        raise typer.Exit(2)
    except DocsmithError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.draft, encoding="utf-8")
        typer.echo(f"Draft written to {output}", err=True)
    else:
        typer.echo(result.draft)

    for warning in result.warnings:
        typer.echo(f"  ! {warning}", err=True)

    typer.echo(f"Log file: {log_file}", err=True)


@app.command()
def validate(
    draft_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Markdown draft"),
    template_type: str = typer.Argument(..., help="Template type the draft follows"),
):
    """Validate an existing draft against a template."""
    pipeline = _build_pipeline()
    try:
        template = pipeline.load_template(template_type)
    except DocsmithError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    result = pipeline.validate_draft(draft_file.read_text(encoding="utf-8"), template)

    if result.is_valid:
        typer.secho("Draft is structurally valid", fg=typer.colors.GREEN)
        return

    typer.echo(f"=== Warnings ({len(result.warnings)}) ===")
    for warning in result.warnings:
        typer.echo(f"  ! {warning}")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
