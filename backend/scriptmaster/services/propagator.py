"""
Project commands and the single dispatch function.

Every external edit is a command. `dispatch(project, command)` runs the
command against a deep copy and returns the next project value, so
observers only ever see the pre-state or the fully propagated post-state.
If a command raises, the caller's project is untouched.

Cross-entity rules handled here:

    template preset edits    copy a preset's note into bound assets whose
                             own note is blank (matched by name and type)
    step note edits          -> segments with the same title or template
    segment note edits       -> steps with the same title or template
    template deletion        refused for the last template

Example:
    >>> project = dispatch(project, RenameTemplate("t1", "Scene"))
    >>> project = dispatch(project, SyncSegment(segment_id))
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from scriptmaster.core.constants import (
    NEW_COURSE_PRESET_NAME,
    NEW_SEGMENT_TITLE,
    NEW_STEP_TITLE,
    NEW_TEMPLATE_NAME,
    NOTE_KEY,
)
from scriptmaster.core.exceptions import LastTemplateError
from scriptmaster.models.script import (
    Asset,
    AssetType,
    Project,
    Segment,
    Step,
    new_course_preset,
    new_id,
    new_segment,
    new_step,
    new_template,
)

from . import columns, editing, instantiator


class Command(ABC):
    """
    Base command.

    `apply` receives a private working copy of the project and mutates it
    in place; it never sees the caller's value.
    """

    @abstractmethod
    def apply(self, project: Project) -> None:
        """Mutate the working copy. Unknown identifiers are no-ops."""


def dispatch(project: Project, command: Command) -> Project:
    """Apply one command atomically and return the next project value."""
    working = project.model_copy(deep=True)
    command.apply(working)
    return working


def dispatch_all(project: Project, commands: List[Command]) -> Project:
    """Apply several commands as one atomic transition."""
    working = project.model_copy(deep=True)
    for command in commands:
        command.apply(working)
    return working


# === Propagation rules ===

def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def propagate_preset_notes(project: Project, template_id: str) -> None:
    """
    Copy preset notes into bound assets that have none.

    An asset receives the note of the preset with the same (name, type)
    when that preset's note is non-empty and the asset's own note is
    empty or blank. Nothing else is ever overwritten.
    """
    template = project.find_template(template_id)
    if template is None:
        return
    for segment in project.segments_for_template(template_id):
        for asset in segment.assets:
            preset = next((p for p in template.presets if p.matches(asset)), None)
            if preset is None or not preset.note:
                continue
            if _is_blank(asset.note):
                asset.custom_fields[NOTE_KEY] = preset.note


def step_matches_segment(step: Step, segment: Segment) -> bool:
    """
    Best-effort pairing of a preset step and a segment.

    Title OR template binding; empty titles or template ids never match.
    """
    same_title = bool(step.title) and step.title == segment.title
    same_template = bool(step.template_id) and step.template_id == segment.template_id
    return same_title or same_template


# === Project ===

@dataclass
class RenameProject(Command):
    title: str

    def apply(self, project: Project) -> None:
        project.title = self.title


# === Templates ===

@dataclass
class CreateTemplate(Command):
    """A requested id already in use is ignored; the template keeps a fresh one."""
    name: str = NEW_TEMPLATE_NAME
    template_id: Optional[str] = None

    def apply(self, project: Project) -> None:
        template = new_template(self.name)
        if self.template_id and project.find_template(self.template_id) is None:
            template.id = self.template_id
        project.templates.append(template)


@dataclass
class RenameTemplate(Command):
    """Touches only the template; segments keep their name snapshot."""
    template_id: str
    name: str

    def apply(self, project: Project) -> None:
        template = project.find_template(self.template_id)
        if template is not None:
            template.name = self.name


@dataclass
class SetTemplateThumbnail(Command):
    template_id: str
    thumbnail: Optional[str]

    def apply(self, project: Project) -> None:
        template = project.find_template(self.template_id)
        if template is not None:
            template.thumbnail = self.thumbnail


@dataclass
class DeleteTemplate(Command):
    """Refused when it would leave the project without templates."""
    template_id: str

    def apply(self, project: Project) -> None:
        if project.find_template(self.template_id) is None:
            return
        if len(project.templates) <= 1:
            raise LastTemplateError(self.template_id)
        project.templates = [t for t in project.templates if t.id != self.template_id]


@dataclass
class SetTemplatePresets(Command):
    """Replace a template's preset list, then propagate preset notes."""
    template_id: str
    presets: List[Asset]

    def apply(self, project: Project) -> None:
        template = project.find_template(self.template_id)
        if template is None:
            return
        template.presets = [preset.model_copy(deep=True) for preset in self.presets]
        propagate_preset_notes(project, self.template_id)


@dataclass
class AddPresetComponent(Command):
    template_id: str
    name: str
    type: AssetType = AssetType.DEFAULT
    fields: Dict[str, Any] = field(default_factory=dict)

    def apply(self, project: Project) -> None:
        template = project.find_template(self.template_id)
        if template is None:
            return
        preset = Asset(id=new_id(), name=self.name, type=self.type)
        editing.update_asset(preset, self.fields)
        template.presets.append(preset)
        propagate_preset_notes(project, self.template_id)


@dataclass
class UpdatePresetComponent(Command):
    template_id: str
    preset_id: str
    changes: Dict[str, Any]

    def apply(self, project: Project) -> None:
        template = project.find_template(self.template_id)
        if template is None:
            return
        preset = next((p for p in template.presets if p.id == self.preset_id), None)
        if preset is None:
            return
        editing.update_asset(preset, self.changes)
        propagate_preset_notes(project, self.template_id)


@dataclass
class RemovePresetComponent(Command):
    template_id: str
    preset_id: str

    def apply(self, project: Project) -> None:
        template = project.find_template(self.template_id)
        if template is None:
            return
        template.presets = [p for p in template.presets if p.id != self.preset_id]
        propagate_preset_notes(project, self.template_id)


# === Custom columns ===

@dataclass
class AddColumn(Command):
    template_id: str
    name: str

    def apply(self, project: Project) -> None:
        columns.add_column(project, self.template_id, self.name)


@dataclass
class RenameColumn(Command):
    template_id: str
    old: str
    new: str

    def apply(self, project: Project) -> None:
        columns.rename_column(project, self.template_id, self.old, self.new)


@dataclass
class DeleteColumn(Command):
    template_id: str
    name: str

    def apply(self, project: Project) -> None:
        columns.delete_column(project, self.template_id, self.name)


@dataclass
class MoveColumn(Command):
    template_id: str
    name: str
    to_index: int

    def apply(self, project: Project) -> None:
        columns.move_column(project, self.template_id, self.name, self.to_index)


@dataclass
class ReorderColumns(Command):
    template_id: str
    order: List[str]

    def apply(self, project: Project) -> None:
        columns.reorder_columns(project, self.template_id, self.order)


# === Course presets ===

@dataclass
class CreateCoursePreset(Command):
    name: str = NEW_COURSE_PRESET_NAME

    def apply(self, project: Project) -> None:
        project.course_presets.append(new_course_preset(self.name))


@dataclass
class RenameCoursePreset(Command):
    preset_id: str
    name: str

    def apply(self, project: Project) -> None:
        preset = project.find_course_preset(self.preset_id)
        if preset is not None:
            preset.name = self.name


@dataclass
class DeleteCoursePreset(Command):
    """Segments produced from the preset are unaffected."""
    preset_id: str

    def apply(self, project: Project) -> None:
        project.course_presets = [p for p in project.course_presets if p.id != self.preset_id]


@dataclass
class AddStep(Command):
    """Append a step bound to the given template (default: the first one)."""
    preset_id: str
    title: str = NEW_STEP_TITLE
    template_id: Optional[str] = None

    def apply(self, project: Project) -> None:
        preset = project.find_course_preset(self.preset_id)
        if preset is None:
            return
        template_id = self.template_id or project.templates[0].id
        preset.steps.append(new_step(self.title, template_id))


@dataclass
class UpdateStep(Command):
    """
    Edit a step. A note edit is copied to every segment matching the
    (updated) step by title or template binding.
    """
    preset_id: str
    step_id: str
    title: Optional[str] = None
    template_id: Optional[str] = None
    note: Optional[str] = None

    def apply(self, project: Project) -> None:
        preset = project.find_course_preset(self.preset_id)
        step = next((s for s in preset.steps if s.id == self.step_id), None) if preset else None
        if step is None:
            return
        if self.title is not None:
            step.title = self.title
        if self.template_id is not None:
            step.template_id = self.template_id
        if self.note is None:
            return
        step.note = self.note
        for segment in project.segments:
            if step_matches_segment(step, segment):
                segment.note = self.note


@dataclass
class RemoveStep(Command):
    preset_id: str
    step_id: str

    def apply(self, project: Project) -> None:
        preset = project.find_course_preset(self.preset_id)
        if preset is not None:
            preset.steps = [s for s in preset.steps if s.id != self.step_id]


@dataclass
class MoveStep(Command):
    preset_id: str
    step_id: str
    to_index: int

    def apply(self, project: Project) -> None:
        preset = project.find_course_preset(self.preset_id)
        step = next((s for s in preset.steps if s.id == self.step_id), None) if preset else None
        if step is None:
            return
        preset.steps.remove(step)
        preset.steps.insert(max(0, min(self.to_index, len(preset.steps))), step)


# === Segments ===

@dataclass
class AddEmptySegment(Command):
    title: str = NEW_SEGMENT_TITLE

    def apply(self, project: Project) -> None:
        project.segments.append(new_segment(self.title))


@dataclass
class LoadCoursePreset(Command):
    """Append the segments of a course preset; see instantiator.load_course_preset."""
    preset_id: str
    confirm: Optional[Callable[[], bool]] = None

    def apply(self, project: Project) -> None:
        instantiator.load_course_preset(project, self.preset_id, confirm=self.confirm)


@dataclass
class ApplyTemplate(Command):
    segment_id: str
    template_id: str

    def apply(self, project: Project) -> None:
        instantiator.apply_template(project, self.segment_id, self.template_id)


@dataclass
class SyncSegment(Command):
    """Raises TemplateMissingError when the bound template is gone."""
    segment_id: str

    def apply(self, project: Project) -> None:
        instantiator.sync_segment_to_template(project, self.segment_id)


@dataclass
class UpdateSegment(Command):
    """
    Edit a segment's title and/or note. A note edit is copied to every
    preset step matching the segment as it was before this edit.
    """
    segment_id: str
    title: Optional[str] = None
    note: Optional[str] = None

    def apply(self, project: Project) -> None:
        segment = project.find_segment(self.segment_id)
        if segment is None:
            return
        if self.note is not None:
            for preset in project.course_presets:
                for step in preset.steps:
                    if step_matches_segment(step, segment):
                        step.note = self.note
            segment.note = self.note
        if self.title is not None:
            segment.title = self.title


@dataclass
class RemoveSegment(Command):
    segment_id: str

    def apply(self, project: Project) -> None:
        project.segments = [s for s in project.segments if s.id != self.segment_id]


@dataclass
class MoveSegment(Command):
    segment_id: str
    to_index: int

    def apply(self, project: Project) -> None:
        segment = project.find_segment(self.segment_id)
        if segment is None:
            return
        project.segments.remove(segment)
        project.segments.insert(max(0, min(self.to_index, len(project.segments))), segment)


# === Assets (local to one segment) ===

def _find_asset(project: Project, segment_id: str, asset_id: str) -> Optional[Asset]:
    segment = project.find_segment(segment_id)
    if segment is None:
        return None
    return next((a for a in segment.assets if a.id == asset_id), None)


@dataclass
class AppendAsset(Command):
    """Append an ad-hoc asset that no template prescribes."""
    segment_id: str

    def apply(self, project: Project) -> None:
        segment = project.find_segment(self.segment_id)
        if segment is not None:
            segment.assets.append(editing.ad_hoc_asset())


@dataclass
class UpdateAsset(Command):
    segment_id: str
    asset_id: str
    changes: Dict[str, Any]

    def apply(self, project: Project) -> None:
        asset = _find_asset(project, self.segment_id, self.asset_id)
        if asset is not None:
            editing.update_asset(asset, self.changes)


@dataclass
class SetAssetTypes(Command):
    segment_id: str
    asset_id: str
    labels: List[str]

    def apply(self, project: Project) -> None:
        asset = _find_asset(project, self.segment_id, self.asset_id)
        if asset is not None:
            editing.set_selected_types(asset, self.labels)


@dataclass
class RemoveAsset(Command):
    segment_id: str
    asset_id: str

    def apply(self, project: Project) -> None:
        segment = project.find_segment(self.segment_id)
        if segment is not None:
            segment.assets = [a for a in segment.assets if a.id != self.asset_id]


@dataclass
class CopyPreviousAsset(Command):
    segment_id: str
    asset_id: str

    def apply(self, project: Project) -> None:
        segment = project.find_segment(self.segment_id)
        if segment is not None:
            editing.copy_previous_row(segment.assets, self.asset_id)


@dataclass
class AddExtra(Command):
    segment_id: str
    asset_id: str

    def apply(self, project: Project) -> None:
        asset = _find_asset(project, self.segment_id, self.asset_id)
        if asset is not None:
            editing.add_extra(asset)


@dataclass
class UpdateExtra(Command):
    segment_id: str
    asset_id: str
    index: int
    changes: Dict[str, Any]

    def apply(self, project: Project) -> None:
        asset = _find_asset(project, self.segment_id, self.asset_id)
        if asset is not None:
            editing.update_extra(asset, self.index, self.changes)


@dataclass
class DuplicateExtra(Command):
    segment_id: str
    asset_id: str
    index: int

    def apply(self, project: Project) -> None:
        asset = _find_asset(project, self.segment_id, self.asset_id)
        if asset is not None:
            editing.duplicate_extra(asset, self.index)


@dataclass
class RemoveExtra(Command):
    segment_id: str
    asset_id: str
    index: int

    def apply(self, project: Project) -> None:
        asset = _find_asset(project, self.segment_id, self.asset_id)
        if asset is not None:
            editing.remove_extra(asset, self.index)
