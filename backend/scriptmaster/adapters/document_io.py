"""
Project document I/O (adapter layer).

Serializes the whole project as pretty-printed JSON and validates imported
documents. Kept outside core/ so file-system concerns stay separate from
the pure model.
"""

import json
import time
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from scriptmaster.core.exceptions import InvalidDocumentError
from scriptmaster.core.logging import get_logger
from scriptmaster.core.security import ascii_slug
from scriptmaster.models.script import Project

logger = get_logger(__name__, component="document_io")

REQUIRED_FIELDS = ("id", "title", "templates", "coursePresets", "segments")


def to_document(project: Project) -> Dict[str, Any]:
    """Project -> JSON-ready dict with document field names."""
    return project.to_document()


def serialize_project(project: Project) -> str:
    """Pretty-printed JSON; non-ASCII text is written as is."""
    return json.dumps(to_document(project), indent=2, ensure_ascii=False)


def _validation_messages(exc: ValidationError) -> list:
    return [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]


def deserialize_project(document: Union[str, bytes, Dict[str, Any]]) -> Project:
    """
    Parse and validate a project document.

    Accepts a JSON string/bytes or an already parsed dict. Optional fields
    may be absent (defaults apply); unknown fields are preserved.

    Raises:
        InvalidDocumentError: not JSON, not an object, a required field is
            missing, a field has the wrong shape, or there are no templates
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as exc:
            raise InvalidDocumentError(f"Invalid project JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise InvalidDocumentError("Project document must be a JSON object")

    missing = [name for name in REQUIRED_FIELDS if document.get(name) is None]
    if missing:
        raise InvalidDocumentError(
            f"Project document is missing required fields: {', '.join(missing)}",
            errors=missing,
        )

    try:
        project = Project.model_validate(document)
    except ValidationError as exc:
        raise InvalidDocumentError(
            "Project document does not match the project structure",
            errors=_validation_messages(exc),
        ) from exc

    if not project.templates:
        raise InvalidDocumentError("A project must contain at least one template", errors=["templates"])
    return project


def project_json_filename(title: str) -> str:
    """File name offered when a project document is downloaded."""
    return f"{ascii_slug(title)}_project.json"


def save_project(project: Project, path: Path) -> Project:
    """
    Write a project document, stamping `updatedAt` (ms since epoch).

    Returns:
        The stamped project that was written
    """
    stamped = project.model_copy(deep=True)
    stamped.updated_at = int(time.time() * 1000)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(serialize_project(stamped))
    logger.info("Project saved", extra={"project_id": stamped.id, "path": str(path)})
    return stamped


def load_project(path: Path) -> Project:
    """
    Read and validate a project document from disk.

    Raises:
        FileNotFoundError: `path` does not exist
        InvalidDocumentError: the file is not a valid project document
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        project = deserialize_project(text)
    except InvalidDocumentError as exc:
        logger.warning("Rejected project document", extra={"path": str(path), "error": exc.message})
        raise
    logger.info("Project loaded", extra={"project_id": project.id, "path": str(path)})
    return project


__all__ = [
    "REQUIRED_FIELDS",
    "to_document",
    "serialize_project",
    "deserialize_project",
    "project_json_filename",
    "save_project",
    "load_project",
]
