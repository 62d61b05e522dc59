"""
Docsmith - template-driven technical document drafting

Turns a project summary, core requirements, a tone, and a deliverable type into
a section-structured Markdown document, and checks inputs and drafts against a
declarative template.

Architecture:
- Templating Context: Template schema loading and validation
- Drafting Context: Prompt construction and section-by-section synthesis
- Validation Context: Input admissibility and draft structure checks
"""

__version__ = "0.1.0"
