#!/usr/bin/env python3
"""
Command line entry point.

Usage:
    scriptmaster init [lesson1.json]
    scriptmaster validate lesson1.json
    scriptmaster export lesson1.json -o exports/
    scriptmaster next-lesson lesson1.json [lesson2.json]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from scriptmaster.adapters import load_project, project_json_filename, save_project, write_export
from scriptmaster.config import DOCUMENT_DIR, EXPORT_DIR, LOG_FILE, LOG_LEVEL, JSON_LOGS
from scriptmaster.core import ScriptMasterError, get_logger, set_project_id, setup_logging
from scriptmaster.models import Project, default_project
from scriptmaster.services import create_next_lesson
from scriptmaster.services.exporter import exportable_segments

logger = get_logger(__name__, component="cli")


def _document_path(project: Project, output: Optional[Path]) -> Path:
    """Explicit output path, or `<DOCUMENT_DIR>/<slug>_project.json`."""
    return output if output is not None else DOCUMENT_DIR / project_json_filename(project.title)


def _cmd_init(args: argparse.Namespace) -> int:
    project = default_project()
    path = _document_path(project, args.output)
    project = save_project(project, path)
    print(f"Wrote default project '{project.title}' to {path}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    project = load_project(args.document)
    set_project_id(project.id)
    print(
        f"OK: '{project.title}' - {len(project.templates)} templates, "
        f"{len(project.course_presets)} course presets, {len(project.segments)} segments "
        f"({len(exportable_segments(project))} exportable)"
    )
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    project = load_project(args.document)
    set_project_id(project.id)
    path = write_export(project, args.output_dir)
    print(f"Exported {path}")
    return 0


def _cmd_next_lesson(args: argparse.Namespace) -> int:
    lesson = create_next_lesson(load_project(args.document))
    path = _document_path(lesson, args.output)
    lesson = save_project(lesson, path)
    print(f"Wrote '{lesson.title}' to {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scriptmaster",
        description="Author structured lesson scripts and export them for production.",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default: %(default)s)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init", help="Write the default project document")
    init.add_argument("output", type=Path, nargs="?", help="Document path (default: DOCUMENT_DIR)")
    init.set_defaults(handler=_cmd_init)

    validate = subparsers.add_parser("validate", help="Validate a project document")
    validate.add_argument("document", type=Path)
    validate.set_defaults(handler=_cmd_validate)

    export = subparsers.add_parser("export", help="Export a project to <title>_完整脚本.xls")
    export.add_argument("document", type=Path)
    export.add_argument("-o", "--output-dir", type=Path, default=EXPORT_DIR,
                        help="Directory for the artifact (default: %(default)s)")
    export.set_defaults(handler=_cmd_export)

    next_lesson = subparsers.add_parser("next-lesson", help="Copy a project as the next lesson")
    next_lesson.add_argument("document", type=Path)
    next_lesson.add_argument("output", type=Path, nargs="?", help="Document path (default: DOCUMENT_DIR)")
    next_lesson.set_defaults(handler=_cmd_next_lesson)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=Path(LOG_FILE) if LOG_FILE else None, use_json=JSON_LOGS)

    try:
        return args.handler(args)
    except ScriptMasterError as exc:
        logger.error("Command failed", extra={"command": args.command, "kind": exc.kind.value})
        print(f"Error [{exc.kind.value}]: {exc.message}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
