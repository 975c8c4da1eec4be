"""Adapters layer for I/O at the system boundary (documents, artifacts)."""

from .document_io import (
    serialize_project,
    deserialize_project,
    project_json_filename,
    save_project,
    load_project,
)
from .export_io import write_export

__all__ = [
    "serialize_project",
    "deserialize_project",
    "project_json_filename",
    "save_project",
    "load_project",
    "write_export",
]
