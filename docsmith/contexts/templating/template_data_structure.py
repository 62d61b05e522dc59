"""
Data structures for document templates.

A template is a flat, declarative schema: an ordered list of common sections,
an ordered list of type-specific sections, and free-text authoring rules.
Instances are immutable once loaded.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Section:
    """
    One named unit of document content.

    Attributes:
        title: Heading text, also the case-insensitive matching key
        required: Whether the section must appear in a generated document
        description: What the section should cover
    """

    title: str
    required: bool
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        return cls(
            title=data["title"],
            required=data["required"],
            description=data["description"],
        )


@dataclass(frozen=True)
class TemplateSummary:
    """Public identity of a template, as returned by listings."""

    type: str
    name: str


@dataclass(frozen=True)
class Template:
    """
    Declarative schema describing one document type.

    Attributes:
        type: Unique key (e.g., 'type1')
        name: Display title, used as the document's H1
        common_sections: Sections shared across document types
        specific_sections: Sections particular to this document type
        rules: Free-text authoring constraints
    """

    type: str
    name: str
    common_sections: Tuple[Section, ...] = field(default_factory=tuple)
    specific_sections: Tuple[Section, ...] = field(default_factory=tuple)
    rules: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        """
        Build a Template from a raw schema mapping.

        The mapping is expected to have passed validate_template() already.
        """
        return cls(
            type=data["type"],
            name=data["name"],
            common_sections=tuple(Section.from_dict(s) for s in data["common_sections"]),
            specific_sections=tuple(Section.from_dict(s) for s in data["specific_sections"]),
            rules=tuple(str(rule) for rule in data["rules"]),
        )

    @property
    def all_sections(self) -> Tuple[Section, ...]:
        """Common sections followed by specific sections, each in schema order."""
        return self.common_sections + self.specific_sections

    @property
    def required_sections(self) -> Tuple[Section, ...]:
        return tuple(section for section in self.all_sections if section.required)

    @property
    def summary(self) -> TemplateSummary:
        return TemplateSummary(type=self.type, name=self.name)
