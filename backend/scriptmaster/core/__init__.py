"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - exceptions.py: Error kinds surfaced by the engine
    - logging.py: Structured logging configuration and utilities
    - security.py: Safe file names for written artifacts
    - constants.py: Document-format constants (reserved keys, labels, titles)

Usage:
    from scriptmaster.core import get_logger, ScriptMasterError
"""

# Exceptions
from .exceptions import (
    ErrorKind,
    ScriptMasterError,
    TemplateMissingError,
    LastTemplateError,
    InvalidDocumentError,
    EmptyProjectError,
    ReservedColumnNameError,
)

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_project_id,
    clear_context,
    LogTimer,
)

# Security
from .security import sanitize_filename, ascii_slug

__all__ = [
    # Exceptions
    "ErrorKind",
    "ScriptMasterError",
    "TemplateMissingError",
    "LastTemplateError",
    "InvalidDocumentError",
    "EmptyProjectError",
    "ReservedColumnNameError",
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_project_id",
    "clear_context",
    "LogTimer",
    # Security
    "sanitize_filename",
    "ascii_slug",
]
