"""
Regex patterns for structural checks on Markdown drafts.

Pattern classes follow the frozen-dataclass convention:
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MarkdownPatterns:
    """Patterns for draft structure validation."""

    # Any ATX heading: one or more '#', whitespace, then text
    HEADING: str = r"^#+\s+.+"

    # Code fence marker, counted to detect unbalanced fences
    CODE_FENCE: str = r"```"

    # Required section headings, {title} is the regex-escaped section title.
    # Heading level is not checked. The title may be followed by more text.
    # Plain: ## Overview
    PLAIN_SECTION_HEADING: str = r"^#+\s+{title}"
    # Bold-wrapped: ## **Overview**
    BOLD_SECTION_HEADING: str = r"^#+\s+\*\*{title}\*\*"


def section_heading_patterns(title: str) -> Tuple[re.Pattern, ...]:
    """
    Compile the accepted heading alternatives for a section title.

    Matching is case-insensitive and line-anchored.

    Args:
        title: Section title as written in the template

    Returns:
        Compiled (plain, bold) patterns
    """
    escaped = re.escape(title)
    flags = re.IGNORECASE | re.MULTILINE
    return (
        re.compile(MarkdownPatterns.PLAIN_SECTION_HEADING.format(title=escaped), flags),
        re.compile(MarkdownPatterns.BOLD_SECTION_HEADING.format(title=escaped), flags),
    )


def has_section_heading(content: str, title: str) -> bool:
    """True if any heading line in content matches the section title."""
    return any(pattern.search(content) for pattern in section_heading_patterns(title))


def has_heading(content: str) -> bool:
    return re.search(MarkdownPatterns.HEADING, content, re.MULTILINE) is not None


def count_code_fences(content: str) -> int:
    return len(re.findall(MarkdownPatterns.CODE_FENCE, content))
