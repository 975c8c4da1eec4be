"""
Script document model

Pydantic entities for a course script project:
Project -> Templates (preset components, custom columns),
           CoursePresets (steps),
           Segments (assets -> extras).

Field names serialize in camelCase exactly as the document format expects
(`templateId`, `customFields`, `coursePresets`, ...). Unknown fields are kept
on every entity so documents round-trip without loss.
"""

import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel

from scriptmaster.core.constants import (
    NOTE_KEY,
    SELECTED_TYPES_KEY,
    SELECTED_TYPES_SEPARATOR,
    UNSPECIFIED_FORMAT,
)


def new_id() -> str:
    """Generate a fresh, collision-free identifier."""
    return str(uuid.uuid4())


class AssetType(str, Enum):
    """Primary component type; values are the stable document labels."""

    IMAGE = "图片 (Image)"
    AUDIO = "音频 (Audio)"
    VIDEO = "视频 (Video)"
    ANIMATION = "动画 (Animation)"
    COMPONENT = "React组件 (Component)"
    DEFAULT = "默认 (Default)"

    @classmethod
    def from_label(cls, label: str) -> Optional["AssetType"]:
        """Look up a type by its label; None when the label is not recognized."""
        try:
            return cls(label)
        except ValueError:
            return None


class AssetStatus(str, Enum):
    """Production status of an asset."""

    PENDING = "PENDING"
    READY = "READY"
    UPLOADED = "UPLOADED"
    APPROVED = "APPROVED"


PERMITTED_FORMATS: Dict[AssetType, List[str]] = {
    AssetType.IMAGE: ["PNG", "JPG", "JPEG", "GIF", "WEBP", UNSPECIFIED_FORMAT],
    AssetType.AUDIO: ["MP3", "WAV", "OGG", UNSPECIFIED_FORMAT],
    AssetType.VIDEO: ["MP4", "WEBM", "MOV", UNSPECIFIED_FORMAT],
    AssetType.ANIMATION: ["GIF", "MP4", "WEBM", "JSON", UNSPECIFIED_FORMAT],
    AssetType.COMPONENT: ["ZIP", "JSON", "JS", "HTML", "CSS", UNSPECIFIED_FORMAT],
    AssetType.DEFAULT: [UNSPECIFIED_FORMAT],
}


def permitted_formats(asset_type: Optional[AssetType]) -> List[str]:
    """Formats selectable for a type (unknown/absent type -> unspecified only)."""
    return list(PERMITTED_FORMATS.get(asset_type, [UNSPECIFIED_FORMAT]))


class DocumentModel(BaseModel):
    """
    Base for every document entity.

    camelCase aliases, unknown fields kept, assignments validated so an
    edit can never store a value the document format would reject.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        validate_assignment=True,
    )

    @model_serializer(mode="wrap")
    def serialize_document(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        """Omit declared fields holding None; unknown fields are written as given."""
        data = handler(self)
        unknown = self.__pydantic_extra__ or {}
        return {key: value for key, value in data.items() if value is not None or key in unknown}

    def to_document(self) -> Dict[str, Any]:
        """Dump to a JSON-ready dict using document field names."""
        return self.model_dump(mode="json", by_alias=True)


class Entity(DocumentModel):
    """A document entity with identity; equality is by identifier."""

    id: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


class _TypedItem(DocumentModel):
    """Shared behaviour of assets and extras: custom fields and type selection."""

    custom_fields: Dict[str, str] = Field(default_factory=dict)

    @property
    def note(self) -> str:
        return self.custom_fields.get(NOTE_KEY, "")

    @property
    def selected_types(self) -> List[str]:
        raw = self.custom_fields.get(SELECTED_TYPES_KEY, "")
        return [label for label in raw.split(SELECTED_TYPES_SEPARATOR) if label]

    def visible_custom_fields(self) -> Dict[str, str]:
        """Custom fields minus the reserved keys, in insertion order."""
        return {
            key: value
            for key, value in self.custom_fields.items()
            if key not in (NOTE_KEY, SELECTED_TYPES_KEY)
        }


class Extra(_TypedItem):
    """A sub-row of an asset."""

    content: str = ""
    type: Optional[AssetType] = None
    formats: List[str] = Field(default_factory=list)
    dimensions: Optional[str] = None
    file_size: Optional[str] = None
    collapsed: Optional[bool] = None
    enabled: Optional[bool] = None


class Asset(_TypedItem, Entity):
    """A preset component inside a template, or a materialized asset in a segment."""

    name: str = ""
    type: AssetType = AssetType.DEFAULT
    description: str = ""
    dimensions: Optional[str] = None
    format: Optional[str] = None
    formats: List[str] = Field(default_factory=list)
    file_size: Optional[str] = None
    upload_instructions: Optional[str] = None
    status: AssetStatus = AssetStatus.PENDING
    enabled: bool = True
    section_id: Optional[str] = None
    extras: List[Extra] = Field(default_factory=list)

    def matches(self, other: "Asset") -> bool:
        """Structural match used by sync and note propagation: same (name, type)."""
        return self.name == other.name and self.type == other.type


# Preset components share the asset shape
PresetComponent = Asset


class Template(Entity):
    """Blueprint for a segment: preset components plus custom columns."""

    name: str = ""
    thumbnail: Optional[str] = None
    presets: List[PresetComponent] = Field(default_factory=list)
    custom_columns: List[str] = Field(default_factory=list)


class Step(Entity):
    """One entry of a course preset."""

    title: str = ""
    template_id: str = ""
    note: Optional[str] = None


class CoursePreset(Entity):
    """A named lesson flow."""

    name: str = ""
    steps: List[Step] = Field(default_factory=list)


class Segment(Entity):
    """One section of the authored script, bound to a template."""

    title: str = ""
    template_id: str = ""
    template_name: str = ""
    assets: List[Asset] = Field(default_factory=list)
    note: Optional[str] = None


class Project(Entity):
    """The top-level document."""

    title: str = ""
    templates: List[Template] = Field(default_factory=list)
    course_presets: List[CoursePreset] = Field(default_factory=list)
    segments: List[Segment] = Field(default_factory=list)
    updated_at: Optional[int] = None

    def find_template(self, template_id: str) -> Optional[Template]:
        return next((t for t in self.templates if t.id == template_id), None)

    def find_segment(self, segment_id: str) -> Optional[Segment]:
        return next((s for s in self.segments if s.id == segment_id), None)

    def find_course_preset(self, preset_id: str) -> Optional[CoursePreset]:
        return next((p for p in self.course_presets if p.id == preset_id), None)

    def segments_for_template(self, template_id: str) -> List[Segment]:
        return [s for s in self.segments if template_id and s.template_id == template_id]


# === Constructors ===

def new_extra(content: str = "", type: Optional[AssetType] = None, **fields: Any) -> Extra:
    """Create an extra with empty formats and custom fields."""
    return Extra(content=content, type=type, **fields)


def new_asset(name: str = "", type: AssetType = AssetType.DEFAULT, **fields: Any) -> Asset:
    """Create an asset with a fresh id, status PENDING and enabled."""
    fields.setdefault("status", AssetStatus.PENDING)
    fields.setdefault("enabled", True)
    return Asset(id=new_id(), name=name, type=type, **fields)


def new_template(name: str, presets: Optional[List[Asset]] = None, **fields: Any) -> Template:
    """Create a template with a fresh id."""
    return Template(id=new_id(), name=name, presets=list(presets or []), **fields)


def new_segment(title: str, template: Optional[Template] = None, **fields: Any) -> Segment:
    """Create an empty segment, optionally bound to a template (no assets yet)."""
    return Segment(
        id=new_id(),
        title=title,
        template_id=template.id if template else "",
        template_name=template.name if template else "",
        **fields,
    )


def new_step(title: str, template_id: str, note: Optional[str] = None) -> Step:
    return Step(id=new_id(), title=title, template_id=template_id, note=note)


def new_course_preset(name: str, steps: Optional[List[Step]] = None) -> CoursePreset:
    return CoursePreset(id=new_id(), name=name, steps=list(steps or []))


def new_project(title: str, templates: Optional[List[Template]] = None, **fields: Any) -> Project:
    """
    Create a project with a fresh id.

    A project always holds at least one template; when none are given the
    default template library is used.
    """
    if not templates:
        from scriptmaster.models.defaults import default_templates
        templates = default_templates()
    return Project(id=new_id(), title=title, templates=list(templates), **fields)


__all__ = [
    "AssetType",
    "AssetStatus",
    "PERMITTED_FORMATS",
    "permitted_formats",
    "DocumentModel",
    "Entity",
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
]
