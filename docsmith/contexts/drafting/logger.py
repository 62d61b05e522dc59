"""
Drafting context logger.

Provides logging interface for drafting context with automatic [draft] prefix.
All drafting modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[draft]"


def _log_info(message: str) -> None:
    """Log info message with [draft] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [draft] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [draft] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [draft] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [draft] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level drafting-specific logging helpers


def log_generation_start(template_type: str, tone: str, use_backend: bool) -> None:
    """Log start of draft generation with context."""
    mode = "generative backend" if use_backend else "demo synthesis"
    _log_info(f"Generating {template_type} draft ({tone} tone, {mode})")


def log_backend_fallback(reason: str) -> None:
    """Log that generation fell back to deterministic synthesis."""
    _log_warning(f"Generative backend unavailable, falling back to demo synthesis: {reason}")
