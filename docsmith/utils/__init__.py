"""
Shared utilities for docsmith.

Common functionality used across contexts:
- Logger setup with provenance
- LLM provider abstraction
- Timestamps
"""

from docsmith.utils.timestamp import now, now_readable

__all__ = ["now", "now_readable"]
