"""
Session logging for docsmith scripts.

Library modules only emit records, through the context wrappers in
contexts/{context}/logger.py. Sinks are configured here, once per CLI
invocation: each session gets its own directory under the logs root with a
DEBUG file log, a colorized stderr stream, and a provenance header.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from docsmith import __version__
from docsmith.utils.timestamp import now

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = (
    "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
)


def session_dir(logs_path: Path, command: str) -> Path:
    """Timestamped directory for one session, e.g. outs/logs/generate_20261019_101500."""
    return Path(logs_path) / f"{command}_{now()}"


def start_session(
    command: str,
    logs_path: Path,
    provenance: Optional[Dict[str, object]] = None,
    console_level: str = "INFO",
    level_colors: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Route loguru output for one CLI session.

    Replaces any existing sinks with a DEBUG file sink in a fresh session
    directory and a stderr sink at console_level, then logs the provenance
    header. stdout stays free for command output such as a generated draft.

    Args:
        command: CLI command name; names the session directory and log file
        logs_path: Root directory for session directories
        provenance: Extra key-value pairs for the header (e.g., {"Template": "type1"})
        console_level: Minimum level shown on stderr
        level_colors: Per-level color overrides merged over LEVEL_COLORS

    Returns:
        Path to the session's log file
    """
    log_dir = session_dir(logs_path, command)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{command}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(command, provenance)
    return log_file


def log_provenance(command: str, provenance: Optional[Dict[str, object]] = None) -> None:
    """Log who ran what, where, plus any session-specific pairs."""
    logger.info("=" * 80)
    logger.info(f"docsmith {__version__}: {command}")
    logger.info(f"Invocation: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (provenance or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
