"""
Core Exceptions
Error kinds surfaced by the script model and export engine.
"""

from enum import Enum
from typing import List, Optional


class ErrorKind(Enum):
    """Stable identifiers for the failures the core can report."""

    TEMPLATE_MISSING = "TEMPLATE_MISSING"
    LAST_TEMPLATE = "LAST_TEMPLATE"
    INVALID_DOCUMENT = "INVALID_DOCUMENT"
    EMPTY_PROJECT = "EMPTY_PROJECT"
    RESERVED_COLUMN_NAME = "RESERVED_COLUMN_NAME"


class ScriptMasterError(Exception):
    """Base exception for all application errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "detail": self.message}


class TemplateMissingError(ScriptMasterError):
    """A segment was synced against a template that no longer exists."""
    kind = ErrorKind.TEMPLATE_MISSING

    def __init__(self, template_id: str):
        super().__init__(f"Template {template_id!r} not found; it may have been deleted")
        self.template_id = template_id


class LastTemplateError(ScriptMasterError):
    """Deleting the only remaining template is refused."""
    kind = ErrorKind.LAST_TEMPLATE

    def __init__(self, template_id: str):
        super().__init__("A project must keep at least one template")
        self.template_id = template_id


class InvalidDocumentError(ScriptMasterError):
    """A project document or edit failed validation."""
    kind = ErrorKind.INVALID_DOCUMENT

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class EmptyProjectError(ScriptMasterError):
    """Nothing is left to export after the skip rules are applied."""
    kind = ErrorKind.EMPTY_PROJECT

    def __init__(self, project_id: str):
        super().__init__("No exportable segments in project")
        self.project_id = project_id


class ReservedColumnNameError(ScriptMasterError):
    """A custom column may not use a reserved custom-field key."""
    kind = ErrorKind.RESERVED_COLUMN_NAME

    def __init__(self, name: str):
        super().__init__(f"Column name {name!r} is reserved")
        self.name = name
