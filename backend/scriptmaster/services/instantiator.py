"""
Segment instantiation from templates and course presets.

Three public operations:

    load_course_preset       append one segment per preset step
    apply_template           rebind a segment and rebuild its assets
    sync_segment_to_template refresh a segment's structure, keeping content

All of them mutate the project they are given. Use the propagator
commands for atomic transitions.
"""

from typing import Callable, List, Optional

from scriptmaster.core.constants import NEW_SEGMENT_TITLE
from scriptmaster.core.exceptions import TemplateMissingError
from scriptmaster.models.script import (
    Asset,
    AssetStatus,
    Project,
    Segment,
    Template,
    new_id,
)


def instantiate_asset(preset: Asset) -> Asset:
    """Value-copy a preset component into a fresh PENDING, enabled asset."""
    asset = preset.model_copy(deep=True)
    asset.id = new_id()
    asset.description = preset.description or ""
    asset.status = AssetStatus.PENDING
    asset.enabled = True
    return asset


def build_assets(template: Template) -> List[Asset]:
    return [instantiate_asset(preset) for preset in template.presets]


def generate_segment(project: Project, template_id: str, title: Optional[str] = None) -> Optional[Segment]:
    """
    Build (but do not insert) a segment from a template.

    Returns None when the template does not exist.
    """
    template = project.find_template(template_id)
    if template is None:
        return None
    return Segment(
        id=new_id(),
        title=title or template.name,
        template_id=template.id,
        template_name=template.name,
        assets=build_assets(template),
    )


def needs_append_confirmation(project: Project) -> bool:
    """Loading a preset into a script that already has segments appends to it."""
    return len(project.segments) > 0


def load_course_preset(
    project: Project,
    preset_id: str,
    confirm: Optional[Callable[[], bool]] = None,
) -> List[Segment]:
    """
    Append one segment per step of a course preset.

    Each segment takes the step title and note. Steps whose template is
    gone are skipped. When the project already has segments, `confirm` is
    asked first; a falsy answer leaves the project unchanged.

    Returns:
        The appended segments (empty when nothing was appended)
    """
    preset = project.find_course_preset(preset_id)
    if preset is None:
        return []
    if needs_append_confirmation(project) and confirm is not None and not confirm():
        return []

    appended = []
    for step in preset.steps:
        segment = generate_segment(project, step.template_id, step.title)
        if segment is None:
            continue
        segment.note = step.note or ""
        appended.append(segment)

    project.segments.extend(appended)
    return appended


def apply_template(project: Project, segment_id: str, template_id: str) -> Optional[Segment]:
    """
    Bind a segment to a template and rebuild its asset list from scratch.

    A segment still carrying the placeholder title takes the template name.
    Unknown segment or template ids are no-ops.
    """
    segment = project.find_segment(segment_id)
    template = project.find_template(template_id)
    if segment is None or template is None:
        return None

    if segment.title == NEW_SEGMENT_TITLE:
        segment.title = template.name
    segment.template_id = template.id
    segment.template_name = template.name
    segment.assets = build_assets(template)
    return segment


def sync_assets(template: Template, existing: List[Asset]) -> List[Asset]:
    """
    Rebuild an asset list in template order, reusing matching assets.

    A preset matched by (name, type) keeps the existing asset's id,
    description, status and enabled flag; everything else comes from the
    preset. Unmatched presets become new assets. Each existing asset is
    reused at most once, so duplicate presets never share an id.
    """
    assets = []
    unmatched = list(existing)
    for preset in template.presets:
        match = next((asset for asset in unmatched if asset.matches(preset)), None)
        if match is None:
            assets.append(instantiate_asset(preset))
            continue
        unmatched = [asset for asset in unmatched if asset is not match]
        synced = preset.model_copy(deep=True)
        synced.id = match.id
        synced.description = match.description
        synced.status = match.status
        synced.enabled = match.enabled
        assets.append(synced)
    return assets


def sync_segment_to_template(project: Project, segment_id: str) -> Optional[Segment]:
    """
    Refresh a segment's asset structure from its bound template.

    Raises:
        TemplateMissingError: the bound template no longer exists; the
            segment is left unchanged
    """
    segment = project.find_segment(segment_id)
    if segment is None:
        return None
    template = project.find_template(segment.template_id)
    if template is None:
        raise TemplateMissingError(segment.template_id)

    segment.assets = sync_assets(template, segment.assets)
    segment.template_name = template.name
    return segment
