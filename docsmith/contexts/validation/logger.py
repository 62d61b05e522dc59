"""
Validation context logger.

Provides logging interface for validation context with automatic [validate] prefix.
All validation modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[validate]"


def _log_success(message: str) -> None:
    """Log success message with [validate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [validate] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [validate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_draft_validation_result(template_type: str, result) -> None:
    """
    Log draft validation outcome.

    Args:
        template_type: Template the draft was checked against
        result: DraftValidationResult from validate_draft()
    """
    if result.is_valid:
        _log_success(f"{template_type} draft passed structural validation")
    else:
        _log_warning(f"{template_type} draft has {len(result.warnings)} warning(s)")
        for warning in result.warnings:
            _log_warning(f"  {warning}")
