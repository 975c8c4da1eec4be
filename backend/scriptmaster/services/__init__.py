"""
Services - the script engine

    markup        restricted markup -> HTML (export only)
    editing       single-item edits that keep type/format rules
    instantiator  segments from templates and course presets
    columns       per-template custom column registry
    propagator    commands and atomic dispatch
    exporter      project -> spreadsheet-readable HTML
    lessons       follow-up lesson copies
"""

from .markup import render_markup
from .propagator import Command, dispatch, dispatch_all
from .exporter import export_project, export_filename, EXPORT_MIME_TYPE
from .lessons import create_next_lesson

__all__ = [
    "render_markup",
    "Command",
    "dispatch",
    "dispatch_all",
    "export_project",
    "export_filename",
    "EXPORT_MIME_TYPE",
    "create_next_lesson",
]
