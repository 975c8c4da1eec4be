"""
Tests for the script document models
"""

import pytest
from pydantic import ValidationError

from scriptmaster.models import (
    Asset,
    AssetStatus,
    AssetType,
    Extra,
    Project,
    Segment,
    Template,
    default_course_presets,
    default_project,
    default_templates,
    new_asset,
    new_extra,
    new_project,
    new_segment,
    permitted_formats,
)


class TestAssetType:
    """Type labels and permitted formats"""

    def test_values_are_document_labels(self):
        assert AssetType.IMAGE.value == "图片 (Image)"
        assert AssetType.COMPONENT.value == "React组件 (Component)"

    def test_from_label(self):
        assert AssetType.from_label("音频 (Audio)") is AssetType.AUDIO
        assert AssetType.from_label("Sticker") is None

    def test_permitted_formats(self):
        assert "PNG" in permitted_formats(AssetType.IMAGE)
        assert "MP3" not in permitted_formats(AssetType.IMAGE)
        assert permitted_formats(AssetType.DEFAULT) == ["未明确规定"]

    def test_unspecified_allowed_for_every_type(self):
        for asset_type in AssetType:
            assert "未明确规定" in permitted_formats(asset_type)

    def test_permitted_formats_returns_copy(self):
        permitted_formats(AssetType.IMAGE).append("BMP")
        assert "BMP" not in permitted_formats(AssetType.IMAGE)


class TestDocumentFieldNames:
    """Documents use camelCase field names"""

    def test_parse_camel_case(self):
        segment = Segment.model_validate({
            "id": "s1",
            "title": "Intro",
            "templateId": "t1",
            "templateName": "Scene",
            "assets": [{"id": "a1", "name": "Bg", "type": "图片 (Image)", "customFields": {"Remark": "x"}}],
        })

        assert segment.template_id == "t1"
        assert segment.assets[0].type is AssetType.IMAGE
        assert segment.assets[0].custom_fields == {"Remark": "x"}

    def test_dump_camel_case(self):
        doc = Asset(id="a1", name="Bg", file_size="2MB").to_document()

        assert doc["fileSize"] == "2MB"
        assert doc["customFields"] == {}
        assert doc["status"] == "PENDING"
        assert "file_size" not in doc

    def test_absent_optionals_not_written(self):
        doc = Extra(content="x").to_document()

        assert "type" not in doc
        assert "enabled" not in doc

    def test_unknown_fields_preserved(self):
        asset = Asset.model_validate({"id": "a1", "name": "Bg", "reviewer": "Ann"})
        assert asset.to_document()["reviewer"] == "Ann"

    def test_unknown_null_fields_preserved(self):
        doc = Template.model_validate({"id": "t1", "reviewer": None}).to_document()

        assert "reviewer" in doc and doc["reviewer"] is None
        assert "thumbnail" not in doc

    def test_unknown_type_label_rejected(self):
        with pytest.raises(ValidationError):
            Asset.model_validate({"id": "a1", "type": "Sticker"})

    def test_project_round_trip(self, demo_project):
        demo_project.segments.append(new_segment("Intro", demo_project.templates[0]))
        doc = demo_project.to_document()

        assert Project.model_validate(doc).to_document() == doc


class TestReservedCustomFields:
    """`note` and `selected_types` are stored in customFields"""

    def test_note_property(self):
        asset = Asset(id="a", custom_fields={"note": "hello"})
        assert asset.note == "hello"
        assert Asset(id="b").note == ""

    def test_selected_types_property(self):
        extra = Extra(custom_fields={"selected_types": "图片 (Image)|音频 (Audio)"})
        assert extra.selected_types == ["图片 (Image)", "音频 (Audio)"]

    def test_visible_custom_fields_excludes_reserved(self):
        asset = Asset(id="a", custom_fields={"note": "n", "Remark": "r", "selected_types": "x"})
        assert asset.visible_custom_fields() == {"Remark": "r"}


class TestEntityIdentity:
    """Entities compare by identifier"""

    def test_equal_by_id(self):
        assert Asset(id="a", name="one") == Asset(id="a", name="two")
        assert Asset(id="a") != Asset(id="b")

    def test_hashable(self):
        assert len({Asset(id="a"), Asset(id="a", name="x")}) == 1

    def test_different_entity_types_not_equal(self):
        assert Template(id="x") != Segment(id="x")


class TestConstructors:
    def test_new_asset_defaults(self):
        asset = new_asset("Bg", AssetType.IMAGE)

        assert asset.status is AssetStatus.PENDING
        assert asset.enabled is True
        assert asset.id

    def test_new_asset_ids_unique(self):
        assert new_asset("a").id != new_asset("a").id

    def test_new_extra(self):
        extra = new_extra("alt text", AssetType.AUDIO)

        assert extra.content == "alt text"
        assert extra.type is AssetType.AUDIO
        assert extra.formats == []
        assert extra.custom_fields == {}

    def test_new_segment_bound(self):
        template = Template(id="t1", name="Scene")
        segment = new_segment("Intro", template)

        assert segment.template_id == "t1"
        assert segment.template_name == "Scene"
        assert segment.assets == []

    def test_new_segment_unbound(self):
        assert new_segment("Loose").template_id == ""

    def test_new_project_uses_default_templates(self):
        project = new_project("Unit 2")

        assert [t.id for t in project.templates] == ["t1", "t2", "t3"]
        assert project.segments == []


class TestDefaults:
    """The stock template and course preset library"""

    def test_default_templates(self):
        templates = default_templates()

        assert [t.id for t in templates] == ["t1", "t2", "t3"]
        assert [p.id for p in templates[0].presets] == ["p1", "p2", "p3"]
        assert templates[1].presets[0].type is AssetType.VIDEO

    def test_default_templates_are_fresh(self):
        first = default_templates()
        first[0].presets.clear()
        assert len(default_templates()[0].presets) == 3

    def test_default_course_preset_references_templates(self):
        template_ids = {t.id for t in default_templates()}
        preset = default_course_presets()[0]

        assert preset.id == "cp1"
        assert [s.template_id for s in preset.steps] == ["t2", "t1", "t1", "t2"]
        assert {s.template_id for s in preset.steps} <= template_ids

    def test_default_project(self):
        project = default_project()

        assert project.id == "course-1"
        assert project.title == "Lesson 1: Demo Course"
        assert project.segments == []

    def test_lookups(self):
        project = default_project()

        assert project.find_template("t2").name == "视频教学 (Video Lesson)"
        assert project.find_template("missing") is None
        assert project.find_course_preset("cp1") is not None
        assert project.find_segment("nope") is None
