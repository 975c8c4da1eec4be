"""
Script document models

The in-memory project document and its default seed library.
"""

from .script import (
    AssetType,
    AssetStatus,
    PERMITTED_FORMATS,
    permitted_formats,
    Extra,
    Asset,
    PresetComponent,
    Template,
    Step,
    CoursePreset,
    Segment,
    Project,
    new_id,
    new_extra,
    new_asset,
    new_template,
    new_segment,
    new_step,
    new_course_preset,
    new_project,
)
from .defaults import default_templates, default_course_presets, default_project

__all__ = [
    "AssetType",
    "AssetStatus",
    "PERMITTED_FORMATS",
    "permitted_formats",
    "Extra",
    "Asset",
    "PresetComponent",
    "Template",
    "Step",
    "CoursePreset",
    "Segment",
    "Project",
    "new_id",
    "new_extra",
    "new_asset",
    "new_template",
    "new_segment",
    "new_step",
    "new_course_preset",
    "new_project",
    "default_templates",
    "default_course_presets",
    "default_project",
]
