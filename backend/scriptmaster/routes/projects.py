"""
Project document routes

Stateless: every request carries the full project document in its body and
every editing endpoint answers with the next document. Core errors are
turned into HTTP responses by the application's exception handler.
"""

from typing import Any, Dict
from urllib.parse import quote

from fastapi import APIRouter, Body
from fastapi.responses import Response

from ..adapters.document_io import deserialize_project, to_document
from ..core import get_logger, set_project_id
from ..models import default_project
from ..services import dispatch, export_filename, export_project, create_next_lesson, EXPORT_MIME_TYPE
from ..services.propagator import ApplyTemplate, LoadCoursePreset, SyncSegment

logger = get_logger(__name__, component="project_routes")

router = APIRouter(prefix="/projects", tags=["projects"])


def _load(document: Dict[str, Any]):
    project = deserialize_project(document)
    set_project_id(project.id)
    return project


@router.get("/default")
async def get_default_project():
    """The starting document for a new workspace"""
    return to_document(default_project())


@router.post("/validate")
async def validate_project(document: Dict[str, Any] = Body(...)):
    """Validate a document and return it normalized (defaults applied)"""
    return to_document(_load(document))


@router.post("/export")
async def export_project_artifact(document: Dict[str, Any] = Body(...)):
    """
    Export a project as a spreadsheet-readable artifact

    Returns the HTML table document with the `.xls` MIME type and a UTF-8
    encoded download file name.
    """
    project = _load(document)
    artifact = export_project(project)
    filename = export_filename(project.title)
    logger.info("Project exported", extra={
        "project_id": project.id,
        "segments": len(project.segments),
        "bytes": len(artifact.encode("utf-8")),
    })
    return Response(
        content=artifact,
        media_type=EXPORT_MIME_TYPE,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.post("/next-lesson")
async def next_lesson(document: Dict[str, Any] = Body(...)):
    """Copy the project as the next lesson in the series"""
    return to_document(create_next_lesson(_load(document)))


@router.post("/presets/{preset_id}/load")
async def load_course_preset(preset_id: str, document: Dict[str, Any] = Body(...)):
    """Append one segment per step of a course preset"""
    project = dispatch(_load(document), LoadCoursePreset(preset_id))
    return to_document(project)


@router.post("/segments/{segment_id}/apply/{template_id}")
async def apply_template(segment_id: str, template_id: str, document: Dict[str, Any] = Body(...)):
    """Bind a segment to a template and rebuild its assets"""
    project = dispatch(_load(document), ApplyTemplate(segment_id, template_id))
    return to_document(project)


@router.post("/segments/{segment_id}/sync")
async def sync_segment(segment_id: str, document: Dict[str, Any] = Body(...)):
    """Refresh a segment's structure from its template, keeping matched content"""
    project = dispatch(_load(document), SyncSegment(segment_id))
    return to_document(project)
