"""
Templating Context

Responsibilities:
- Loads document templates from the YAML schema store, keyed by type
- Enforces template structure before downstream contexts trust it
- Lists available templates by public identity (type, name)

Owns: Template and Section data structures, schema store access
Never: Generates or validates document content
"""

from docsmith.contexts.templating.template_data_structure import (
    Section,
    Template,
    TemplateSummary,
)
from docsmith.contexts.templating.template_manager import TemplateManager, validate_template

__all__ = [
    # Data structure classes
    "Section",
    "Template",
    "TemplateSummary",
    # Schema store access
    "TemplateManager",
    "validate_template",
]
