"""
Drafting Context

Responsibilities:
- Builds the generative backend prompt for a template and user input
- Generates drafts through the backend when available
- Synthesizes demo drafts section by section when it is not

Owns: Prompt construction, section topic classification, demo synthesis
Never: Loads templates or judges whether a draft is valid
"""

from docsmith.contexts.drafting.draft_generator import DraftGenerator, DraftOutcome
from docsmith.contexts.drafting.section_topics import classify_section

__all__ = ["DraftGenerator", "DraftOutcome", "classify_section"]
