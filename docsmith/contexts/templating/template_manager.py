import os
from pathlib import Path
from typing import Any, Dict, List

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from docsmith.contexts.templating.logger import _log_debug, _log_info, _log_warning
from docsmith.contexts.templating.template_data_structure import Template, TemplateSummary
from docsmith.exceptions import TemplateMalformedError, TemplateNotFoundError

load_dotenv()

DEFAULT_TYPES_PATH = Path(__file__).parent / "types"
SCHEMA_SUFFIX = ".yaml"

SECTION_GROUPS = ("common_sections", "specific_sections")


def validate_template(template: Any) -> None:
    """
    Check that a raw template schema has the structure downstream code relies on.

    Every section of both groups is checked, not just the first.

    Args:
        template: Raw schema mapping (as loaded from YAML)

    Raises:
        TemplateMalformedError: With a field-specific message on the first defect found
    """
    if not isinstance(template, dict):
        raise TemplateMalformedError("Template schema must be a mapping")

    for key in ("type", "name"):
        value = template.get(key)
        if not isinstance(value, str) or not value.strip():
            raise TemplateMalformedError(f"Template is missing the '{key}' field")

    for key in (*SECTION_GROUPS, "rules"):
        if not isinstance(template.get(key), list):
            raise TemplateMalformedError(f"Template '{key}' must be a list")

    for group in SECTION_GROUPS:
        for index, section in enumerate(template[group]):
            location = f"{group}[{index}]"
            if not isinstance(section, dict):
                raise TemplateMalformedError(f"{location} must be a mapping")
            title = section.get("title")
            if not isinstance(title, str) or not title.strip():
                raise TemplateMalformedError(f"{location} is missing 'title'")
            if not isinstance(section.get("required"), bool):
                raise TemplateMalformedError(
                    f"{location} is missing 'required' or it is not a boolean"
                )
            description = section.get("description")
            if not isinstance(description, str) or not description.strip():
                raise TemplateMalformedError(f"{location} is missing 'description'")


class TemplateManager:
    """
    Loads document templates from a directory of YAML schemas keyed by type.

    Schemas live at {types_base_path}/{type_name}.yaml and are read through
    OmegaConf. The store is read-only and nothing is cached between calls.
    """

    validate_template = staticmethod(validate_template)

    def __init__(self, types_base_path: Path = None):
        """
        Initialize the template manager.

        Args:
            types_base_path: Directory holding template schemas. Defaults to
                           DOCSMITH_TEMPLATES_PATH, then the bundled types/ directory.
        """
        if types_base_path is None:
            types_base_path = Path(os.getenv("DOCSMITH_TEMPLATES_PATH", DEFAULT_TYPES_PATH))

        self.types_base_path = Path(types_base_path)

    def get_template_path(self, type_name: str) -> Path:
        """
        Get the schema file path for a template type.

        Args:
            type_name: Template type (e.g., 'type1')

        Returns:
            Path to the schema file (may not exist)
        """
        return self.types_base_path / f"{type_name}{SCHEMA_SUFFIX}"

    def load_template(self, type_name: str) -> Template:
        """
        Load, validate, and return the template for a type.

        Args:
            type_name: Template type (e.g., 'type1')

        Returns:
            Validated Template

        Raises:
            TemplateNotFoundError: If no schema exists for the type
            TemplateMalformedError: If the schema cannot be parsed or fails validation
        """
        # Type keys name a file directly under the store, never a path
        if not type_name or Path(type_name).name != type_name:
            raise TemplateNotFoundError(type_name)

        template_path = self.get_template_path(type_name)
        if not template_path.is_file():
            raise TemplateNotFoundError(type_name, template_path)

        _log_debug(f"Loading template '{type_name}' from {template_path}")
        raw = self._read_schema(template_path, type_name)

        try:
            validate_template(raw)
        except TemplateMalformedError as e:
            raise TemplateMalformedError(e.message, type_name, template_path) from e

        if raw["type"] != type_name:
            raise TemplateMalformedError(
                f"Template declares type '{raw['type']}' but is stored as '{type_name}'",
                type_name,
                template_path,
            )

        return Template.from_dict(raw)

    def list_templates(self) -> List[TemplateSummary]:
        """
        List every loadable template in the store.

        Schemas are visited in sorted filename order. Non-file entries and
        malformed schemas are skipped, so every listed type can be loaded.

        Returns:
            List of TemplateSummary(type, name)
        """
        if not self.types_base_path.is_dir():
            _log_warning(f"Template directory does not exist: {self.types_base_path}")
            return []

        summaries = []
        for schema_path in sorted(self.types_base_path.glob(f"*{SCHEMA_SUFFIX}")):
            type_name = schema_path.stem
            if not schema_path.is_file():
                _log_debug(f"Skipping non-file entry: {schema_path}")
                continue
            try:
                template = self.load_template(type_name)
            except TemplateNotFoundError as e:
                _log_warning(f"Skipping unreadable template '{type_name}': {e}")
                continue
            except TemplateMalformedError as e:
                _log_warning(f"Skipping malformed template '{type_name}': {e.message}")
                continue
            summaries.append(template.summary)

        _log_info(f"Found {len(summaries)} template(s) in {self.types_base_path}")
        return summaries

    def _read_schema(self, template_path: Path, type_name: str) -> Dict[str, Any]:
        try:
            return OmegaConf.to_container(OmegaConf.load(template_path), resolve=False)
        except (yaml.YAMLError, OmegaConfBaseException, UnicodeDecodeError, OSError) as e:
            raise TemplateMalformedError(
                "Template schema could not be parsed",
                type_name,
                template_path,
                original_error=e,
            ) from e
