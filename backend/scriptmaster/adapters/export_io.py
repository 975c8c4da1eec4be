"""
Export artifact writer (adapter layer).
"""

from pathlib import Path
from typing import Optional

from scriptmaster.config import EXPORT_DIR
from scriptmaster.core.logging import LogTimer, get_logger
from scriptmaster.models.script import Project
from scriptmaster.services.exporter import export_filename, export_project

logger = get_logger(__name__, component="export_io")


def write_export(project: Project, directory: Optional[Path] = None) -> Path:
    """
    Render a project and write `<title>_完整脚本.xls` into `directory`.

    Raises:
        EmptyProjectError: nothing to export (no file is written)
    """
    directory = Path(directory) if directory is not None else EXPORT_DIR
    with LogTimer(logger, f"export project {project.id}"):
        artifact = export_project(project)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / export_filename(project.title)
        with open(path, "w", encoding="utf-8") as f:
            f.write(artifact)
    logger.info("Export written", extra={"project_id": project.id, "path": str(path), "bytes": len(artifact.encode("utf-8"))})
    return path


__all__ = ["write_export"]
